"""
Rendering-host seam.

The layout engine only produces data (``RenderedDeck``).  A rendering host
implements ``RenderingAdapter`` and ``replay_deck`` drives it: one
``add_slide`` per slide, then every element in z-order, then the speaker
notes.  Handles returned by the adapter are opaque to the caller.
"""

from __future__ import annotations

from typing import Any, Protocol

from slideai.schemas.rendered import (
    Align,
    RenderedDeck,
    ShapeElement,
    ShapeKind,
    TextStyle,
)


class RenderingAdapter(Protocol):
    def add_slide(self) -> Any: ...

    def set_background(self, slide: Any, color: str) -> None: ...

    def insert_shape(
        self, slide: Any, kind: ShapeKind, x: float, y: float, width: float, height: float
    ) -> Any: ...

    def set_fill(self, shape: Any, color: str) -> None: ...

    def insert_text_box(
        self, slide: Any, text: str, x: float, y: float, width: float, height: float
    ) -> Any: ...

    def set_text_style(self, text_box: Any, style: TextStyle) -> None: ...

    def set_paragraph_alignment(self, text_box: Any, align: Align) -> None: ...

    def set_speaker_notes(self, slide: Any, text: str) -> None: ...

    def finish(self) -> bytes | str: ...


def replay_deck(deck: RenderedDeck, adapter: RenderingAdapter) -> bytes | str:
    """Replay every slide of *deck* onto *adapter* and return its output."""
    for slide in deck.slides:
        handle = adapter.add_slide()
        adapter.set_background(handle, slide.background)
        for element in slide.elements:
            box = element.box
            if isinstance(element, ShapeElement):
                shape = adapter.insert_shape(
                    handle, element.kind, box.x, box.y, box.width, box.height
                )
                adapter.set_fill(shape, element.fill)
            else:
                text_box = adapter.insert_text_box(
                    handle, element.text, box.x, box.y, box.width, box.height
                )
                adapter.set_text_style(text_box, element.style)
                adapter.set_paragraph_alignment(text_box, element.align)
        if slide.notes:
            adapter.set_speaker_notes(handle, slide.notes)
    return adapter.finish()

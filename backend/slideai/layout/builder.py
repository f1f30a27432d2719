"""Slide surface that renderers place elements on."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from slideai.layout.geometry import DEFAULT_CANVAS, CanvasConfig
from slideai.layout.measure import DEFAULT_MEASURER, TextMeasurer
from slideai.layout.theme import Theme
from slideai.schemas.rendered import (
    Align,
    Box,
    Element,
    RenderedSlide,
    ShapeElement,
    ShapeKind,
    TextElement,
    TextStyle,
)


class RenderContext(BaseModel):
    """Everything a renderer may depend on besides the content item itself."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    index: int  # zero-based position among the content slides
    theme: Theme = Theme()
    canvas: CanvasConfig = DEFAULT_CANVAS
    measurer: TextMeasurer = DEFAULT_MEASURER

    @property
    def slide_number(self) -> int:
        return self.index + 1

    def color(self, i: int) -> str:
        """Palette color for the *i*-th repeated element, offset by slide index."""
        return self.theme.palette_color(i + self.index)


class SlideBuilder:
    """Records elements in z-order for one slide.

    Every box is clipped to the canvas so an element can never be scheduled
    outside the page.
    """

    def __init__(self, ctx: RenderContext, kind: str, background: str):
        self.ctx = ctx
        self.kind = kind
        self.background = background
        self.elements: list[Element] = []

    def _clip(self, box: Box) -> Box:
        return box.clamp_to(self.ctx.canvas.bounds)

    def shape(self, kind: ShapeKind, box: Box, fill: str, role: str) -> ShapeElement:
        element = ShapeElement(role=role, kind=kind, box=self._clip(box), fill=fill)
        self.elements.append(element)
        return element

    def rect(self, box: Box, fill: str, role: str) -> ShapeElement:
        return self.shape(ShapeKind.rectangle, box, fill, role)

    def text(
        self,
        text: str,
        box: Box,
        role: str,
        font_size: float,
        color: str | None = None,
        bold: bool = False,
        italic: bool = False,
        align: Align = Align.start,
    ) -> TextElement | None:
        """Place a text box; blank text places nothing."""
        if not text or not text.strip():
            return None
        style = TextStyle(
            font_size=font_size,
            bold=bold,
            italic=italic,
            color=color or self.ctx.theme.text,
            font_family=self.ctx.theme.font_family,
        )
        element = TextElement(role=role, text=text, box=self._clip(box), style=style, align=align)
        self.elements.append(element)
        return element

    def build(self, index: int, notes: str | None = None) -> RenderedSlide:
        return RenderedSlide(
            index=index,
            kind=self.kind,
            background=self.background,
            elements=list(self.elements),
            notes=notes,
        )

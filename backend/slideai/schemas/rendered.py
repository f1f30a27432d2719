"""
Pydantic models for laid-out slides.

The layout engine in ``slideai.layout`` produces a ``RenderedDeck``: an ordered
list of slides, each holding an ordered list of shape / text elements with
absolute coordinates on the canvas.  Element order is z-order (first element
is drawn first).  Rendering hosts in ``slideai.adapters`` replay these
elements; nothing here knows how to draw.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Box(BaseModel):
    """Axis-aligned rectangle, origin top-left, x right, y down."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def remaining_height(self, consumed_y: float) -> float:
        """Height left between *consumed_y* and the bottom edge (never negative)."""
        return max(0.0, self.bottom - consumed_y)

    def below(self, consumed_y: float) -> "Box":
        """The part of this box that starts at *consumed_y*."""
        top = min(max(consumed_y, self.y), self.bottom)
        return Box(x=self.x, y=top, width=self.width, height=self.bottom - top)

    def inset(self, dx: float, dy: float = 0.0) -> "Box":
        width = max(0.0, self.width - 2 * dx)
        height = max(0.0, self.height - 2 * dy)
        return Box(x=self.x + dx, y=self.y + dy, width=width, height=height)

    def split_columns(self, count: int, gap: float) -> list["Box"]:
        """Divide into *count* equal-width columns separated by *gap*."""
        if count <= 0:
            return []
        width = (self.width - (count - 1) * gap) / count
        return [
            Box(x=self.x + i * (width + gap), y=self.y, width=width, height=self.height)
            for i in range(count)
        ]

    def split_rows(self, count: int, gap: float) -> list["Box"]:
        """Divide into *count* equal-height rows separated by *gap*."""
        if count <= 0:
            return []
        height = (self.height - (count - 1) * gap) / count
        return [
            Box(x=self.x, y=self.y + i * (height + gap), width=self.width, height=height)
            for i in range(count)
        ]

    def contains(self, other: "Box", tolerance: float = 1e-6) -> bool:
        return (
            other.x >= self.x - tolerance
            and other.y >= self.y - tolerance
            and other.right <= self.right + tolerance
            and other.bottom <= self.bottom + tolerance
        )

    def clamp_to(self, outer: "Box") -> "Box":
        """Intersect with *outer*; an empty intersection collapses to zero size."""
        x = min(max(self.x, outer.x), outer.right)
        y = min(max(self.y, outer.y), outer.bottom)
        right = max(x, min(self.right, outer.right))
        bottom = max(y, min(self.bottom, outer.bottom))
        return Box(x=x, y=y, width=right - x, height=bottom - y)


class ShapeKind(str, Enum):
    rectangle = "RECTANGLE"
    round_rectangle = "ROUND_RECTANGLE"
    ellipse = "ELLIPSE"
    right_arrow = "RIGHT_ARROW"
    down_arrow = "DOWN_ARROW"


class Align(str, Enum):
    start = "START"
    center = "CENTER"
    end = "END"


class TextStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    font_size: float
    bold: bool = False
    italic: bool = False
    color: str = "#1f2937"
    font_family: str = "Noto Sans JP"


class ShapeElement(BaseModel):
    type: Literal["shape"] = "shape"
    role: str
    kind: ShapeKind
    box: Box
    fill: str


class TextElement(BaseModel):
    type: Literal["text"] = "text"
    role: str
    text: str
    box: Box
    style: TextStyle
    align: Align = Align.start


Element = Annotated[ShapeElement | TextElement, Field(discriminator="type")]


class RenderedSlide(BaseModel):
    index: int  # position in the deck, title slide is 0
    kind: str  # "title", "toc" or a layout name
    background: str
    elements: list[Element] = []
    notes: str | None = None

    def by_role(self, role: str) -> list[Element]:
        return [e for e in self.elements if e.role == role]


class RenderedDeck(BaseModel):
    title: str
    width: float
    height: float
    slides: list[RenderedSlide] = []

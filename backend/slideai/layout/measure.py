"""
Approximate text measurement and the text-fit sizing functions.

The rendering hosts expose no synchronous text-metrics API, so text width is
estimated as ``sum(per-character factor) * font_size``.  The estimate is
deliberately conservative.  Everything that needs a width goes through a
``TextMeasurer`` so a real font-metrics implementation can be swapped in
without touching the renderers.

All functions here are pure and deterministic.
"""

from __future__ import annotations

import math
import unicodedata
from typing import Protocol, Sequence, runtime_checkable

from pydantic import BaseModel

# Average glyph width as a fraction of the font size.
LATIN_WIDTH_FACTOR = 0.7
DENSE_WIDTH_FACTOR = 0.85

DEFAULT_LINE_HEIGHT = 1.6
MESSAGE_LINE_HEIGHT = 1.5

MIN_BULLET_FONT = 9
BULLET_ROW_RATIO = 1.6

# (max bullet count, font size, row height); fewer bullets get more room.
BULLET_TIERS = (
    (3, 16, 34),
    (5, 14, 28),
    (7, 13, 24),
)
BULLET_TIER_OVERFLOW = (12, 21)

MESSAGE_MIN_HEIGHT = 36
MESSAGE_MAX_HEIGHT = 90
MESSAGE_PADDING = 8


@runtime_checkable
class TextMeasurer(Protocol):
    def text_width(self, text: str, font_size: float) -> float: ...


class CharWidthMeasurer:
    """Character-count width model.

    East-Asian wide and full-width characters use *dense_factor*, everything
    else uses *factor*.  Width is additive per character, so appending text
    never makes the estimate smaller.
    """

    def __init__(self, factor: float = LATIN_WIDTH_FACTOR, dense_factor: float = DENSE_WIDTH_FACTOR):
        self.factor = factor
        self.dense_factor = dense_factor

    def _char_factor(self, ch: str) -> float:
        if unicodedata.east_asian_width(ch) in ("W", "F"):
            return self.dense_factor
        return self.factor

    def text_width(self, text: str, font_size: float) -> float:
        return sum(self._char_factor(ch) for ch in text) * font_size


DEFAULT_MEASURER = CharWidthMeasurer()


class BulletMetrics(BaseModel):
    font_size: float
    row_height: float
    visible_count: int


def _floor_size(size: float) -> float:
    """Round a font size down to the nearest half point."""
    return math.floor(size * 2) / 2


def estimate_line_count(
    text: str,
    max_width: float,
    font_size: float,
    measurer: TextMeasurer = DEFAULT_MEASURER,
) -> int:
    """Number of wrapped lines *text* needs at *font_size* within *max_width*."""
    if not text:
        return 0
    lines = 0
    for paragraph in text.split("\n"):
        width = measurer.text_width(paragraph, font_size)
        if max_width <= 0:
            lines += 1
        else:
            lines += max(1, math.ceil(width / max_width))
    return lines


def fit_single_line(
    text: str,
    max_width: float,
    base: float,
    minimum: float,
    measurer: TextMeasurer = DEFAULT_MEASURER,
) -> float:
    """Largest font size <= *base* that keeps *text* on one line of *max_width*.

    Shrinks proportionally to the overflow and never goes below *minimum*.
    """
    if base <= minimum:
        return minimum
    width = measurer.text_width(text or "", base)
    if width <= max_width:
        return base
    if max_width <= 0:
        return minimum
    return max(minimum, _floor_size(base * max_width / width))


def fit_multi_line(
    text: str,
    max_width: float,
    max_height: float,
    base: float,
    minimum: float,
    measurer: TextMeasurer = DEFAULT_MEASURER,
    line_height: float = DEFAULT_LINE_HEIGHT,
) -> float:
    """Largest font size <= *base* whose wrapped text fits in *max_width* x *max_height*."""
    if not text:
        return base
    size = base
    while size > minimum:
        lines = estimate_line_count(text, max_width, size, measurer)
        if lines * size * line_height <= max_height:
            return size
        size = max(minimum, size - 1)
    return minimum


def fit_bullet_block(
    bullets: Sequence[str],
    available_height: float,
    max_width: float,
    measurer: TextMeasurer = DEFAULT_MEASURER,
    minimum: float = MIN_BULLET_FONT,
) -> BulletMetrics:
    """Font size, row height and visible row count for a bullet list.

    1. Tiered defaults by bullet count.
    2. Shrink the font if the longest bullet overflows *max_width*.
    3. Scale font and row height down together if the rows overflow
       *available_height*.
    4. At the font floor, rows that still do not fit are truncated.
    """
    count = len(bullets)
    font, row = BULLET_TIER_OVERFLOW
    for max_count, tier_font, tier_row in BULLET_TIERS:
        if count <= max_count:
            font, row = tier_font, tier_row
            break

    if count == 0 or available_height <= 0:
        return BulletMetrics(font_size=font, row_height=row, visible_count=0)

    longest = max(bullets, key=lambda b: measurer.text_width(b, font))
    fitted = fit_single_line(longest, max_width, font, minimum, measurer)
    if fitted < font:
        row = row * fitted / font
        font = fitted

    total = count * row
    if total > available_height:
        scale = available_height / total
        scaled_font = font * scale
        if scaled_font >= minimum:
            font = max(minimum, _floor_size(scaled_font))
            row = available_height / count
        else:
            row = max(minimum * BULLET_ROW_RATIO, row * minimum / font)
            font = minimum

    visible = min(count, int((available_height + 1e-6) // row)) if row > 0 else 0
    return BulletMetrics(font_size=font, row_height=row, visible_count=visible)


def measure_message_block_height(
    text: str,
    max_width: float,
    font_size: float,
    min_height: float = MESSAGE_MIN_HEIGHT,
    max_height: float = MESSAGE_MAX_HEIGHT,
    measurer: TextMeasurer = DEFAULT_MEASURER,
) -> float:
    """Box height for a message block, clamped to ``[min_height, max_height]``."""
    lines = estimate_line_count(text or "", max_width, font_size, measurer)
    height = lines * font_size * MESSAGE_LINE_HEIGHT + MESSAGE_PADDING
    return min(max_height, max(min_height, height))

"""Placement helpers shared by several layout renderers."""

from __future__ import annotations

from typing import Sequence

from slideai.layout.builder import SlideBuilder
from slideai.layout.measure import (
    MIN_BULLET_FONT,
    estimate_line_count,
    fit_bullet_block,
    fit_multi_line,
    measure_message_block_height,
)
from slideai.schemas.rendered import Align, Box, ShapeKind

BLOCK_GAP = 10
MESSAGE_FONT = 18
MESSAGE_MIN_FONT = 12
BULLET_INDENT = 16
MESSAGE_REGION_SHARE = 0.3
GAP_SHARE = 0.25


def has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def fit_gap(length: float, count: int, gap: float) -> float:
    """*gap*, shrunk so the gaps between *count* blocks take at most a quarter of *length*."""
    if count < 2:
        return gap
    return max(0.0, min(gap, length * GAP_SHARE / (count - 1)))


def place_message(b: SlideBuilder, region: Box, message: str | None) -> float:
    """Key-message block with an underline at the top of *region*.

    Returns the y coordinate where the next block may start.
    """
    if not has_text(message):
        return region.y
    theme = b.ctx.theme
    height = min(
        measure_message_block_height(message, region.width, MESSAGE_FONT, measurer=b.ctx.measurer),
        region.height * MESSAGE_REGION_SHARE,
    )
    size = fit_multi_line(
        message, region.width, height, MESSAGE_FONT, MESSAGE_MIN_FONT, b.ctx.measurer
    )
    b.text(
        message,
        Box(x=region.x, y=region.y, width=region.width, height=height),
        "message",
        size,
        color=theme.primary,
        bold=True,
    )
    b.rect(
        Box(x=region.x, y=region.y + height, width=region.width, height=2),
        theme.secondary,
        "message_rule",
    )
    return region.y + height + 2 + BLOCK_GAP


def paragraph_height(
    b: SlideBuilder, text: str, width: float, font_size: float, lower: float, upper: float
) -> float:
    """Height for a wrapped paragraph, clamped to ``[lower, upper]``."""
    lines = estimate_line_count(text, width, font_size, b.ctx.measurer)
    return min(upper, max(lower, lines * font_size * 1.6 + 6))


def number_badge(
    b: SlideBuilder, box: Box, label: str, fill: str, role: str, font_size: float = 12
) -> None:
    b.shape(ShapeKind.ellipse, box, fill, role)
    b.text(
        label,
        box,
        role,
        font_size,
        color=b.ctx.theme.light_text,
        bold=True,
        align=Align.center,
    )


def _marker(b: SlideBuilder, row: Box, font_size: float, color: str) -> None:
    size = max(4.0, font_size * 0.4)
    b.rect(
        Box(x=row.x, y=row.y + min(row.height, font_size * 1.6) / 2 - size / 2, width=size, height=size),
        color,
        "bullet_marker",
    )


def place_bullet_block(
    b: SlideBuilder,
    bullets: Sequence[str],
    area: Box,
    color: str | None = None,
    marker_color: str | None = None,
) -> int:
    """Bullet list sized by ``fit_bullet_block``; returns the number of rows placed."""
    if not bullets or area.height <= 0:
        return 0
    theme = b.ctx.theme
    metrics = fit_bullet_block(bullets, area.height, area.width - BULLET_INDENT, b.ctx.measurer)
    for i, bullet in enumerate(bullets[: metrics.visible_count]):
        row = Box(
            x=area.x,
            y=area.y + i * metrics.row_height,
            width=area.width,
            height=metrics.row_height,
        )
        _marker(b, row, metrics.font_size, marker_color or theme.secondary)
        b.text(
            bullet,
            Box(x=row.x + BULLET_INDENT, y=row.y, width=row.width - BULLET_INDENT, height=row.height),
            "bullet",
            metrics.font_size,
            color=color,
        )
    return metrics.visible_count


def place_rows(
    b: SlideBuilder,
    items: Sequence[str],
    area: Box,
    min_row: float,
    max_row: float | None = None,
    base_font: float = 14,
    color: str | None = None,
    marker_color: str | None = None,
    numbered: bool = False,
    role: str = "bullet",
) -> int:
    """Rows of equal height ``area.height / len(items)``.

    The row height is capped at *max_row* and floored at *min_row*; rows that
    no longer fit at the floor are dropped.  Returns the number placed.
    """
    if not items or area.height <= 0:
        return 0
    row_h = area.height / len(items)
    if max_row is not None:
        row_h = min(row_h, max_row)
    visible = len(items)
    if row_h < min_row:
        row_h = min_row
        visible = int((area.height + 1e-6) // min_row)
    shown = list(items[:visible])
    if not shown:
        return 0

    theme = b.ctx.theme
    indent = BULLET_INDENT
    badge = 0.0
    if numbered:
        badge = min(28.0, row_h - 8)
        indent = badge + 12
    longest = max(shown, key=len)
    font = fit_multi_line(
        longest, area.width - indent, row_h, base_font, MIN_BULLET_FONT, b.ctx.measurer
    )

    for i, text in enumerate(shown):
        row = Box(x=area.x, y=area.y + i * row_h, width=area.width, height=row_h)
        if numbered:
            number_badge(
                b,
                Box(x=row.x, y=row.center_y - badge / 2, width=badge, height=badge),
                str(i + 1),
                b.ctx.color(i),
                "bullet_number",
                font_size=min(14.0, max(MIN_BULLET_FONT, badge * 0.5)),
            )
        else:
            _marker(b, row, font, marker_color or theme.secondary)
        b.text(
            text,
            Box(x=row.x + indent, y=row.y, width=row.width - indent, height=row.height),
            role,
            font,
            color=color,
        )
    return len(shown)

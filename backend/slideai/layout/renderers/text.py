"""Text-centric layouts: standard, two columns, quote, section and summary."""

from __future__ import annotations

from slideai.layout.builder import SlideBuilder
from slideai.layout.chrome import render_chrome
from slideai.layout.measure import (
    fit_multi_line,
    fit_single_line,
    measure_message_block_height,
)
from slideai.layout.renderers.common import (
    BLOCK_GAP,
    has_text,
    paragraph_height,
    place_bullet_block,
    place_message,
    place_rows,
)
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import Align, Box, ShapeKind

BODY_FONT = 14
BODY_MIN_FONT = 10
BODY_MIN_HEIGHT = 45
BODY_MAX_HEIGHT = 100

HIGHLIGHT_CAP = 4
HIGHLIGHT_HEIGHT = 36
HIGHLIGHT_GAP = 10

COLUMN_GAP = 30
COLUMN_TITLE_HEIGHT = 28
COLUMN_MIN_ROW = 32

QUOTE_GLYPH_FONT = 96
QUOTE_FONT = 24

SECTION_TITLE_FONT = 36
SECTION_TITLE_MIN_FONT = 20

SUMMARY_ROW_CAP = 48
SUMMARY_MIN_ROW = 22


def render_standard(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    y = place_message(b, region, item.message)

    if has_text(item.body):
        height = min(
            region.remaining_height(y),
            paragraph_height(b, item.body, region.width, BODY_FONT, BODY_MIN_HEIGHT, BODY_MAX_HEIGHT),
        )
        if height > 0:
            size = fit_multi_line(
                item.body, region.width, height, BODY_FONT, BODY_MIN_FONT, b.ctx.measurer
            )
            b.text(item.body, Box(x=region.x, y=y, width=region.width, height=height), "body", size)
            y += height + BLOCK_GAP

    highlights = item.highlights[:HIGHLIGHT_CAP]
    if highlights and region.remaining_height(y) >= HIGHLIGHT_HEIGHT:
        row = Box(x=region.x, y=y, width=region.width, height=HIGHLIGHT_HEIGHT)
        for chip, text in zip(row.split_columns(len(highlights), HIGHLIGHT_GAP), highlights):
            b.shape(ShapeKind.round_rectangle, chip, theme.accent, "highlight_chip")
            size = fit_single_line(text, chip.width - 12, 14, 9, b.ctx.measurer)
            b.text(
                text,
                chip.inset(6),
                "highlight",
                size,
                color=theme.light_text,
                bold=True,
                align=Align.center,
            )
        y += HIGHLIGHT_HEIGHT + BLOCK_GAP

    place_bullet_block(b, item.bullets, region.below(y))


def render_two_column(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    b.rect(
        Box(x=area.center_x - 1, y=area.y, width=2, height=area.height),
        theme.panel,
        "column_divider",
    )

    columns = (item.left_column, item.right_column)
    for i, (column, box) in enumerate(zip(columns, area.split_columns(2, COLUMN_GAP))):
        if column is None:
            continue
        y = box.y
        if has_text(column.title):
            title_h = min(COLUMN_TITLE_HEIGHT, box.height * 0.2)
            size = fit_single_line(column.title, box.width, 16, 11, b.ctx.measurer)
            b.text(
                column.title,
                Box(x=box.x, y=y, width=box.width, height=title_h),
                "column_title",
                size,
                color=b.ctx.color(i),
                bold=True,
            )
            y += title_h + 6
        place_rows(
            b,
            column.bullets,
            box.below(y),
            min_row=COLUMN_MIN_ROW,
            marker_color=b.ctx.color(i),
        )


def render_quote(b: SlideBuilder, item: ContentItem) -> None:
    """Full-bleed quote on the title background; no header chrome."""
    theme = b.ctx.theme
    canvas = b.ctx.canvas
    w, h = canvas.width, canvas.height
    b.background = theme.title_bg

    b.rect(Box(x=0, y=0, width=canvas.accent_bar_width, height=h), theme.accent, "accent_bar")
    b.text(
        "“",
        Box(x=w * 0.06, y=h * 0.04, width=w * 0.14, height=h * 0.27),
        "quote_mark",
        QUOTE_GLYPH_FONT,
        color=theme.accent,
        bold=True,
    )
    b.text(
        item.quote or "",
        Box(x=w * 0.125, y=h * 0.28, width=w * 0.75, height=h * 0.38),
        "quote",
        QUOTE_FONT,
        color=theme.light_text,
        italic=True,
        align=Align.center,
    )
    if has_text(item.source):
        b.text(
            f"— {item.source}",
            Box(x=w * 0.125, y=h * 0.69, width=w * 0.75, height=h * 0.07),
            "attribution",
            14,
            color=theme.subtle_text,
            align=Align.end,
        )
    b.text(
        str(b.ctx.slide_number),
        Box(x=w - 70, y=h - 36, width=50, height=22),
        "slide_number",
        12,
        color=theme.subtle_text,
        align=Align.end,
    )


def render_section(b: SlideBuilder, item: ContentItem) -> None:
    """Divider slide: large title, accent rule, optional message and bullets."""
    theme = b.ctx.theme
    canvas = b.ctx.canvas
    w, h = canvas.width, canvas.height
    left = 60
    width = w - 2 * left
    bottom = h - canvas.bottom_margin
    b.background = theme.dark_bg

    b.rect(Box(x=0, y=0, width=canvas.accent_bar_width, height=h), theme.accent, "accent_bar")
    b.text(
        f"{b.ctx.slide_number:02d}",
        Box(x=left, y=h * 0.2, width=120, height=h * 0.08),
        "section_number",
        22,
        color=theme.accent,
        bold=True,
    )

    title = item.title or item.message or ""
    title_box = Box(x=left, y=h * 0.3, width=width, height=h * 0.17)
    size = fit_single_line(
        title, width, SECTION_TITLE_FONT, SECTION_TITLE_MIN_FONT, b.ctx.measurer
    )
    b.text(title, title_box, "title", size, color=theme.light_text, bold=True)
    b.rect(
        Box(x=left, y=title_box.bottom + h * 0.01, width=80, height=4), theme.accent, "accent_line"
    )
    y = title_box.bottom + h * 0.055

    if item.title and has_text(item.message):
        height = min(
            measure_message_block_height(item.message, width, 16, measurer=b.ctx.measurer),
            max(0.0, bottom - y),
        )
        size = fit_multi_line(item.message, width, height, 16, 11, b.ctx.measurer)
        b.text(
            item.message,
            Box(x=left, y=y, width=width, height=height),
            "message",
            size,
            color=theme.subtle_text,
        )
        y += height + 8

    area = Box(x=left, y=y, width=width, height=max(0.0, bottom - y))
    place_bullet_block(b, item.bullets, area, color=theme.light_text, marker_color=theme.accent)


def render_summary(b: SlideBuilder, item: ContentItem) -> None:
    """Closing slide: numbered takeaways on the dark background.

    Title band, accent rule and list start are fractions of the canvas height.
    """
    theme = b.ctx.theme
    canvas = b.ctx.canvas
    w, h = canvas.width, canvas.height
    left = 40
    width = w - 2 * left
    bottom = h - canvas.bottom_margin
    b.background = theme.dark_bg

    title = item.title or "Summary"
    size = fit_single_line(title, width, 28, 16, b.ctx.measurer)
    b.text(
        title,
        Box(x=left, y=h * 0.054, width=width, height=h * 0.12),
        "title",
        size,
        color=theme.light_text,
        bold=True,
    )
    b.rect(Box(x=left, y=h * 0.188, width=60, height=4), theme.accent, "accent_line")
    y = h * 0.227

    if has_text(item.message):
        height = min(
            measure_message_block_height(item.message, width, 16, measurer=b.ctx.measurer),
            max(0.0, bottom - y),
        )
        size = fit_multi_line(item.message, width, height, 16, 11, b.ctx.measurer)
        b.text(
            item.message,
            Box(x=left, y=y, width=width, height=height),
            "message",
            size,
            color=theme.accent,
            bold=True,
        )
        y += height + BLOCK_GAP

    area = Box(x=left, y=y, width=width, height=max(0.0, bottom - y))
    place_rows(
        b,
        item.bullets,
        area,
        min_row=SUMMARY_MIN_ROW,
        max_row=SUMMARY_ROW_CAP,
        base_font=15,
        color=theme.light_text,
        numbered=True,
    )

"""Data-centric layouts: stats, comparison, table, Q&A and case study."""

from __future__ import annotations

from slideai.layout.builder import SlideBuilder
from slideai.layout.chrome import render_chrome
from slideai.layout.measure import fit_multi_line, fit_single_line
from slideai.layout.renderers.common import (
    fit_gap,
    has_text,
    number_badge,
    place_message,
    place_rows,
)
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import Align, Box, ShapeKind

STAT_CAP = 4
STAT_GAP = 20
STAT_VALUE_FONT = 40
STAT_VALUE_MIN_FONT = 18
STAT_FOOTNOTE_HEIGHT = 24

COMPARISON_ARROW_GAP = 50
COMPARISON_ROW_CAP = 32
COMPARISON_MIN_ROW = 15

TABLE_COLUMN_CAP = 6
TABLE_ROW_CAP = 7

QA_CAP = 4
QA_GAP = 10

CASE_SECTION_GAP = 10
CASE_CHIP_WIDTH = 92


def render_stats(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    y = place_message(b, region, item.message)

    footnote = item.body if has_text(item.body) else None
    reserved = STAT_FOOTNOTE_HEIGHT + 8
    if footnote is None or region.remaining_height(y) < 2 * reserved:
        footnote, reserved = None, 0
    area = Box(
        x=region.x, y=y, width=region.width, height=max(0.0, region.bottom - y - reserved)
    )

    stats = [s for s in item.stats or [] if has_text(s.value) or has_text(s.label)][:STAT_CAP]
    cards = area.split_columns(len(stats), fit_gap(area.width, len(stats), STAT_GAP))
    for i, (card, stat) in enumerate(zip(cards, stats)):
        b.shape(ShapeKind.round_rectangle, card, b.ctx.color(i), "stat_card")
        value_box = Box(
            x=card.x + 10,
            y=card.y + card.height * 0.18,
            width=card.width - 20,
            height=card.height * 0.42,
        )
        value_font = fit_single_line(
            stat.value,
            value_box.width,
            min(STAT_VALUE_FONT, value_box.height * 0.8),
            STAT_VALUE_MIN_FONT,
            b.ctx.measurer,
        )
        b.text(
            stat.value,
            value_box,
            "stat_value",
            value_font,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        label_box = Box(
            x=card.x + 10,
            y=value_box.bottom + card.height * 0.02,
            width=card.width - 20,
            height=card.height * 0.28,
        )
        label_font = fit_multi_line(
            stat.label, label_box.width, label_box.height, 14, 9, b.ctx.measurer
        )
        b.text(
            stat.label,
            label_box,
            "stat_label",
            label_font,
            color=theme.light_text,
            align=Align.center,
        )

    if footnote:
        b.text(
            footnote,
            Box(
                x=region.x,
                y=region.bottom - STAT_FOOTNOTE_HEIGHT,
                width=region.width,
                height=STAT_FOOTNOTE_HEIGHT,
            ),
            "footnote",
            11,
            color=theme.muted_text,
        )


def render_comparison(b: SlideBuilder, item: ContentItem) -> None:
    """Before / after panels with an arrow between them."""
    theme = b.ctx.theme
    comparison = item.comparison
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    panel_width = (area.width - COMPARISON_ARROW_GAP) / 2
    panels = (
        (
            Box(x=area.x, y=area.y, width=panel_width, height=area.height),
            comparison.before_title or "Before",
            comparison.before_items,
            theme.panel,
            theme.muted_text,
            theme.text,
        ),
        (
            Box(x=area.right - panel_width, y=area.y, width=panel_width, height=area.height),
            comparison.after_title or "After",
            comparison.after_items,
            theme.primary,
            theme.light_text,
            theme.light_text,
        ),
    )
    for box, title, items, fill, heading_color, text_color in panels:
        b.shape(ShapeKind.round_rectangle, box, fill, "comparison_panel")
        inner = box.inset(12, min(10.0, box.height * 0.04))
        title_h = min(28.0, inner.height * 0.25)
        size = fit_single_line(title, inner.width, 16, 11, b.ctx.measurer)
        b.text(
            title,
            Box(x=inner.x, y=inner.y, width=inner.width, height=title_h),
            "comparison_title",
            size,
            color=heading_color,
            bold=True,
        )
        place_rows(
            b,
            items,
            inner.below(inner.y + title_h + min(8.0, inner.height * 0.03)),
            min_row=COMPARISON_MIN_ROW,
            max_row=COMPARISON_ROW_CAP,
            color=text_color,
            marker_color=theme.accent,
        )

    arrow_h = min(30.0, area.height)
    b.shape(
        ShapeKind.right_arrow,
        Box(
            x=area.x + panel_width + 10,
            y=area.center_y - arrow_h / 2,
            width=COMPARISON_ARROW_GAP - 20,
            height=arrow_h,
        ),
        theme.accent,
        "comparison_arrow",
    )


def render_table(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    data = item.table_data
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    headers = data.headers[:TABLE_COLUMN_CAP]
    rows = [row[:TABLE_COLUMN_CAP] for row in data.rows[:TABLE_ROW_CAP]]
    columns = len(headers) or max((len(row) for row in rows), default=0)
    row_count = (1 if headers else 0) + len(rows)
    if columns == 0 or row_count == 0:
        return

    cell_w = area.width / columns
    cell_h = area.height / row_count

    def cell(r: int, c: int) -> Box:
        return Box(x=area.x + c * cell_w, y=area.y + r * cell_h, width=cell_w, height=cell_h)

    r = 0
    if headers:
        for c, header in enumerate(headers):
            box = cell(0, c)
            b.rect(box, theme.primary, "table_header")
            size = fit_multi_line(header, cell_w - 8, cell_h - 4, 12, 9, b.ctx.measurer)
            b.text(
                header,
                box.inset(4, 2),
                "table_header",
                size,
                color=theme.light_text,
                bold=True,
                align=Align.center,
            )
        r = 1

    for i, row in enumerate(rows):
        fill = theme.card if i % 2 == 0 else theme.panel_alt
        for c in range(columns):
            box = cell(r + i, c)
            b.rect(box, fill, "table_cell")
            value = row[c] if c < len(row) else ""
            size = fit_multi_line(value, cell_w - 8, cell_h - 4, 11, 9, b.ctx.measurer)
            b.text(value, box.inset(4, 2), "table_cell", size, align=Align.center)


def render_qa(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    pairs = [q for q in item.qa_items or [] if has_text(q.question)][:QA_CAP]
    gap = fit_gap(area.height, len(pairs), QA_GAP)
    for slot, pair in zip(area.split_rows(len(pairs), gap), pairs):
        b.shape(ShapeKind.round_rectangle, slot, theme.panel_alt, "qa_card")
        inner = slot.inset(10, 4)
        half = inner.height / 2
        badge = max(0.0, min(26.0, half - 4))
        text_x = inner.x + badge + 10
        text_w = inner.width - badge - 10

        for row_y, label, fill, text, base, bold in (
            (inner.y, "Q", theme.primary, pair.question, 15, True),
            (inner.y + half, "A", theme.accent, pair.answer, 13, False),
        ):
            number_badge(
                b,
                Box(x=inner.x, y=row_y + (half - badge) / 2, width=badge, height=badge),
                label,
                fill,
                "qa_badge",
            )
            size = fit_multi_line(text, text_w, half, base, 9, b.ctx.measurer)
            b.text(
                text,
                Box(x=text_x, y=row_y, width=text_w, height=half),
                "question" if label == "Q" else "answer",
                size,
                bold=bold,
            )


def render_case_study(b: SlideBuilder, item: ContentItem) -> None:
    theme = b.ctx.theme
    case = item.case_study
    region = render_chrome(b, item.title)
    y = region.y
    if has_text(case.company):
        b.text(
            case.company,
            Box(x=region.x, y=y, width=region.width, height=24),
            "company",
            14,
            color=theme.primary,
            bold=True,
        )
        y += 24 + 4
    y = place_message(b, region.below(y), item.message)

    sections = [
        (label, text)
        for label, text in (
            ("Challenge", case.challenge),
            ("Solution", case.solution),
            ("Result", case.result),
        )
        if has_text(text)
    ]
    area = region.below(y)
    gap = fit_gap(area.height, len(sections), CASE_SECTION_GAP)
    for i, (slot, (label, text)) in enumerate(zip(area.split_rows(len(sections), gap), sections)):
        b.shape(ShapeKind.round_rectangle, slot, theme.panel_alt, "case_section")
        pad = min(10.0, slot.height * 0.2)
        chip = Box(
            x=slot.x + 10,
            y=slot.y + pad,
            width=CASE_CHIP_WIDTH,
            height=min(24.0, slot.height - 2 * pad),
        )
        b.shape(ShapeKind.round_rectangle, chip, b.ctx.color(i), "case_chip")
        b.text(
            label,
            chip,
            "case_label",
            12,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        text_box = Box(
            x=chip.right + 12,
            y=slot.y + pad * 0.6,
            width=slot.right - chip.right - 22,
            height=slot.height - pad * 1.2,
        )
        size = fit_multi_line(text, text_box.width, text_box.height, 14, 9, b.ctx.measurer)
        b.text(text, text_box, "case_text", size)

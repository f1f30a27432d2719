"""
Deck assembly.

``build_presentation`` turns a ``PresentationPayload`` into a
``RenderedDeck``: a title slide, an agenda slide when the deck is long
enough, then one slide per content item in input order.  The result is plain
data; ``slideai.adapters`` replays it onto a rendering host.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

from slideai.layout.builder import RenderContext, SlideBuilder
from slideai.layout.chrome import render_chrome
from slideai.layout.geometry import DEFAULT_CANVAS, CanvasConfig
from slideai.layout.measure import DEFAULT_MEASURER, TextMeasurer, fit_single_line
from slideai.layout.renderers import render_content_slide
from slideai.layout.renderers.common import has_text, number_badge
from slideai.layout.theme import Theme, get_theme
from slideai.schemas.presentation import ContentItem, PresentationPayload, parse_payload
from slideai.schemas.rendered import Align, Box, RenderedDeck, RenderedSlide

logger = logging.getLogger(__name__)

TOC_MIN_SLIDES = 5
TOC_MAX_ENTRIES = 10
TOC_TITLE = "Agenda"
FOOTER_TEXT = "Generated by SlideAI"

# (max title length, font size, box height)
TITLE_BRACKETS = (
    (15, 40, 60),
    (25, 34, 80),
    (40, 28, 100),
)
TITLE_BRACKET_OVERFLOW = (24, 120)
SUBTITLE_FONT = 18


def title_metrics(title: str) -> tuple[float, float]:
    """Font size and box height for the title-slide heading, by character count."""
    length = len(title)
    for max_length, size, height in TITLE_BRACKETS:
        if length <= max_length:
            return size, height
    return TITLE_BRACKET_OVERFLOW


def format_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def render_title_slide(title: str, subtitle: str, ctx: RenderContext) -> RenderedSlide:
    theme = ctx.theme
    w, h = ctx.canvas.width, ctx.canvas.height
    b = SlideBuilder(ctx, "title", theme.title_bg)

    b.rect(Box(x=0, y=h * 0.69, width=w, height=6), theme.accent, "accent_line")

    size, height = title_metrics(title)
    baseline = h * 0.47
    b.text(
        title,
        Box(x=w * 0.07, y=baseline - height, width=w * 0.86, height=height),
        "title",
        size,
        color=theme.light_text,
        bold=True,
        align=Align.center,
    )
    b.text(
        subtitle,
        Box(x=w * 0.07, y=baseline + 12, width=w * 0.86, height=30),
        "subtitle",
        SUBTITLE_FONT,
        color=theme.subtle_text,
        align=Align.center,
    )
    b.text(
        FOOTER_TEXT,
        Box(x=w - 220, y=h - 30, width=200, height=20),
        "footer",
        10,
        color=theme.subtle_text,
        align=Align.end,
    )
    return b.build(0)


def _entry_title(item: ContentItem, i: int) -> str:
    for candidate in (item.title, item.message):
        if has_text(candidate):
            return candidate
    return f"Slide {i + 1}"


def render_toc(
    items: list[ContentItem], ctx: RenderContext, max_entries: int = TOC_MAX_ENTRIES
) -> RenderedSlide:
    """Agenda slide listing the first *max_entries* content slides."""
    b = SlideBuilder(ctx, "toc", ctx.theme.background)
    region = render_chrome(b, TOC_TITLE, show_number=False)

    entries = items[:max_entries]
    row_h = region.height / len(entries) if entries else 0
    for i, item in enumerate(entries):
        row = Box(x=region.x, y=region.y + i * row_h, width=region.width, height=row_h)
        badge = max(0.0, min(24.0, row_h - 4))
        number_badge(
            b,
            Box(x=row.x, y=row.center_y - badge / 2, width=badge, height=badge),
            str(i + 1),
            ctx.color(i),
            "toc_number",
            font_size=min(12.0, max(8.0, badge * 0.5)),
        )
        title = _entry_title(item, i)
        text_box = Box(x=row.x + badge + 12, y=row.y, width=row.width - badge - 12, height=row_h)
        size = fit_single_line(title, text_box.width, min(16.0, row_h * 0.6), 9, ctx.measurer)
        b.text(title, text_box, "toc_entry", size)
    return b.build(1)


def build_presentation(
    payload: PresentationPayload | Mapping[str, Any],
    *,
    theme: Theme | None = None,
    canvas: CanvasConfig | None = None,
    measurer: TextMeasurer | None = None,
    today: date | None = None,
    toc_min_slides: int = TOC_MIN_SLIDES,
    toc_max_entries: int = TOC_MAX_ENTRIES,
) -> RenderedDeck:
    """Lay out a whole deck.

    Raises ``InvalidPayload`` when the payload lacks a title or a slides list;
    nothing inside the slides is fatal.
    """
    payload = parse_payload(payload)
    theme = theme or get_theme(payload.theme)
    canvas = canvas or DEFAULT_CANVAS
    measurer = measurer or DEFAULT_MEASURER

    def context(index: int) -> RenderContext:
        return RenderContext(index=index, theme=theme, canvas=canvas, measurer=measurer)

    subtitle = payload.subtitle if has_text(payload.subtitle) else format_date(today or date.today())
    slides = [render_title_slide(payload.title, subtitle, context(0))]
    if len(payload.slides) >= toc_min_slides:
        slides.append(render_toc(payload.slides, context(0), toc_max_entries))

    for i, item in enumerate(payload.slides):
        slides.append(render_content_slide(item, context(i), len(slides)))

    logger.info(
        "Laid out %r: %d content slides, %d total", payload.title, len(payload.slides), len(slides)
    )
    return RenderedDeck(title=payload.title, width=canvas.width, height=canvas.height, slides=slides)

"""Header band, slide-number badge and accent bar shared by content layouts."""

from __future__ import annotations

from slideai.layout.builder import SlideBuilder
from slideai.layout.measure import fit_single_line
from slideai.schemas.rendered import Align, Box

HEADER_TITLE_FONT = 22
HEADER_TITLE_MIN_FONT = 14
BADGE_SIZE = 35
BADGE_FONT = 16


def render_chrome(b: SlideBuilder, title: str | None, show_number: bool = True) -> Box:
    """Draw the fixed chrome and return the content region below the header."""
    canvas = b.ctx.canvas
    theme = b.ctx.theme
    header_h = canvas.header_height

    b.rect(Box(x=0, y=0, width=canvas.width, height=header_h), theme.header_bg, "header")
    b.rect(
        Box(x=0, y=header_h, width=canvas.accent_bar_width, height=canvas.height - header_h),
        theme.secondary,
        "accent_bar",
    )

    title_right = canvas.width - 20
    if show_number:
        badge = Box(
            x=canvas.width - BADGE_SIZE - 15,
            y=(header_h - BADGE_SIZE) / 2,
            width=BADGE_SIZE,
            height=BADGE_SIZE,
        )
        b.rect(badge, theme.accent, "slide_number")
        b.text(
            str(b.ctx.slide_number),
            badge,
            "slide_number",
            BADGE_FONT,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        title_right = badge.x - 10

    title_box = Box(x=20, y=(header_h - 40) / 2, width=title_right - 20, height=40)
    size = fit_single_line(
        title or "",
        title_box.width,
        HEADER_TITLE_FONT,
        HEADER_TITLE_MIN_FONT,
        b.ctx.measurer,
    )
    b.text(title or "", title_box, "title", size, color=theme.light_text, bold=True)

    return canvas.content_region()

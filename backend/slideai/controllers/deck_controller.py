import logging
import re
from typing import Any, Mapping

from fastapi import HTTPException

from slideai.adapters.base import replay_deck
from slideai.adapters.html_adapter import HtmlAdapter
from slideai.adapters.pptx_adapter import PptxAdapter
from slideai.core.ai_generators import generate_presentation_payload
from slideai.core.config import settings
from slideai.core.exceptions import ContentGenerationError
from slideai.layout.deck import build_presentation
from slideai.layout.renderers import data, process, structure
from slideai.layout.selector import LayoutKind
from slideai.layout.theme import get_theme
from slideai.schemas.generation import ChatTurn, LayoutInfo
from slideai.schemas.presentation import PresentationPayload, parse_payload
from slideai.schemas.rendered import RenderedDeck

logger = logging.getLogger(__name__)

# Layout name -> (max rendered items, payload fields it reads)
LAYOUT_CATALOG: dict[LayoutKind, tuple[int | None, list[str]]] = {
    LayoutKind.standard: (None, ["message", "body", "highlights", "bullets"]),
    LayoutKind.two_column: (None, ["leftColumn", "rightColumn"]),
    LayoutKind.stats: (data.STAT_CAP, ["stats", "body"]),
    LayoutKind.comparison: (None, ["comparison"]),
    LayoutKind.quote: (None, ["quote", "source"]),
    LayoutKind.section: (None, ["title", "message", "bullets"]),
    LayoutKind.summary: (None, ["message", "bullets"]),
    LayoutKind.flow: (process.FLOW_CAP, ["flow"]),
    LayoutKind.vertical_flow: (process.VERTICAL_FLOW_CAP, ["flow"]),
    LayoutKind.pyramid: (process.PYRAMID_CAP, ["pyramid"]),
    LayoutKind.matrix: (4, ["matrix"]),
    LayoutKind.parallel: (structure.PARALLEL_CAP, ["parallel"]),
    LayoutKind.timeline: (process.TIMELINE_CAP, ["timeline"]),
    LayoutKind.cycle: (process.CYCLE_CAP, ["cycle", "message"]),
    LayoutKind.funnel: (process.FUNNEL_CAP, ["funnel"]),
    LayoutKind.table: (data.TABLE_ROW_CAP, ["tableData"]),
    LayoutKind.grid: (structure.GRID_CAP, ["grid"]),
    LayoutKind.venn: (structure.VENN_ITEM_CAP, ["venn"]),
    LayoutKind.tree: (structure.TREE_CHILD_CAP, ["tree"]),
    LayoutKind.qa: (data.QA_CAP, ["qaItems"]),
    LayoutKind.case_study: (3, ["caseStudy"]),
}


def list_layouts() -> list[LayoutInfo]:
    return [
        LayoutInfo(name=kind.value, max_items=cap, fields=fields)
        for kind, (cap, fields) in LAYOUT_CATALOG.items()
    ]


def layout_deck(payload: PresentationPayload | Mapping[str, Any]) -> RenderedDeck:
    """Validate *payload* and lay it out with the configured theme and TOC rules."""
    parsed = parse_payload(payload)
    theme = get_theme(parsed.theme, default=settings.DEFAULT_THEME).model_copy(
        update={"font_family": settings.FONT_FAMILY}
    )
    return build_presentation(
        parsed,
        theme=theme,
        toc_min_slides=settings.TOC_MIN_SLIDES,
        toc_max_entries=settings.TOC_MAX_ENTRIES,
    )


def download_name(title: str, extension: str) -> str:
    stem = re.sub(r"[^\w\-]+", "_", title).strip("_")[:80] or "presentation"
    return f"{stem}.{extension}"


def export_pptx(deck: RenderedDeck) -> bytes:
    return replay_deck(deck, PptxAdapter(deck.width, deck.height))


def export_html(deck: RenderedDeck) -> str:
    return replay_deck(deck, HtmlAdapter(deck.title, deck.width, deck.height))


async def generate_payload(history: list[ChatTurn]) -> PresentationPayload:
    """Ask the content agent for a payload; agent failures surface as 502."""
    try:
        return await generate_presentation_payload(history)
    except ContentGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

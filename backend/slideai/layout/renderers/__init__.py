"""Layout renderers and the registry that dispatches ``LayoutKind`` to them.

Every renderer has the signature ``(SlideBuilder, ContentItem) -> None`` and
places its elements in z-order on the builder.  Renderers may assume the item
carries enough data for their layout; ``resolve_layout`` guarantees that.
"""

from __future__ import annotations

import logging
from typing import Callable

from slideai.layout.builder import RenderContext, SlideBuilder
from slideai.layout.renderers.data import (
    render_case_study,
    render_comparison,
    render_qa,
    render_stats,
    render_table,
)
from slideai.layout.renderers.process import (
    render_cycle,
    render_flow,
    render_funnel,
    render_pyramid,
    render_timeline,
    render_vertical_flow,
)
from slideai.layout.renderers.structure import (
    render_grid,
    render_matrix,
    render_parallel,
    render_tree,
    render_venn,
)
from slideai.layout.renderers.text import (
    render_quote,
    render_section,
    render_standard,
    render_summary,
    render_two_column,
)
from slideai.layout.selector import LayoutKind, resolve_layout
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import RenderedSlide

logger = logging.getLogger(__name__)

Renderer = Callable[[SlideBuilder, ContentItem], None]

RENDERERS: dict[LayoutKind, Renderer] = {
    LayoutKind.standard: render_standard,
    LayoutKind.two_column: render_two_column,
    LayoutKind.stats: render_stats,
    LayoutKind.comparison: render_comparison,
    LayoutKind.quote: render_quote,
    LayoutKind.section: render_section,
    LayoutKind.summary: render_summary,
    LayoutKind.flow: render_flow,
    LayoutKind.vertical_flow: render_vertical_flow,
    LayoutKind.pyramid: render_pyramid,
    LayoutKind.matrix: render_matrix,
    LayoutKind.parallel: render_parallel,
    LayoutKind.timeline: render_timeline,
    LayoutKind.cycle: render_cycle,
    LayoutKind.funnel: render_funnel,
    LayoutKind.table: render_table,
    LayoutKind.grid: render_grid,
    LayoutKind.venn: render_venn,
    LayoutKind.tree: render_tree,
    LayoutKind.qa: render_qa,
    LayoutKind.case_study: render_case_study,
}


def render_content_slide(item: ContentItem, ctx: RenderContext, position: int) -> RenderedSlide:
    """Lay out one content item; *position* is its index in the whole deck."""
    kind = resolve_layout(item)
    logger.debug("Slide %d: %s", position, kind.value)
    builder = SlideBuilder(ctx, kind.value, ctx.theme.background)
    RENDERERS[kind](builder, item)
    return builder.build(position, notes=item.notes)

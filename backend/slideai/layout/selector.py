"""
Layout classification.

``select_layout`` maps a ``ContentItem`` to exactly one ``LayoutKind``: an
explicit ``layout`` discriminator wins, otherwise the first matching
inference rule does.  ``resolve_layout`` then checks that the item carries
enough data for that layout and falls back to ``LayoutKind.standard``.

Neither function raises.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable

from slideai.schemas.presentation import ContentItem

logger = logging.getLogger(__name__)


class LayoutKind(str, Enum):
    standard = "standard"
    two_column = "twoColumn"
    stats = "stats"
    comparison = "comparison"
    quote = "quote"
    section = "section"
    summary = "summary"
    flow = "flow"
    vertical_flow = "verticalFlow"
    pyramid = "pyramid"
    matrix = "matrix"
    parallel = "parallel"
    timeline = "timeline"
    cycle = "cycle"
    funnel = "funnel"
    table = "table"
    grid = "grid"
    venn = "venn"
    tree = "tree"
    qa = "qa"
    case_study = "caseStudy"


def _normalize(name: str) -> str:
    return re.sub(r"[\s_\-]", "", name).lower()


_KIND_BY_NAME: dict[str, LayoutKind] = {_normalize(k.value): k for k in LayoutKind}
_KIND_BY_NAME.update(
    {
        "content": LayoutKind.standard,
        "twocolumns": LayoutKind.two_column,
        "compare": LayoutKind.comparison,
        "process": LayoutKind.flow,
        "horizontalflow": LayoutKind.flow,
        "tabledata": LayoutKind.table,
        "qaitems": LayoutKind.qa,
        "faq": LayoutKind.qa,
        "case": LayoutKind.case_study,
        "conclusion": LayoutKind.summary,
    }
)

SUMMARY_MARKERS = re.compile(
    r"summary|conclusion|recap|takeaways?|まとめ|結論|総括",
    re.IGNORECASE,
)


def parse_layout_name(name: str | None) -> LayoutKind | None:
    """Return the ``LayoutKind`` for an explicit discriminator, or ``None``."""
    if not name:
        return None
    return _KIND_BY_NAME.get(_normalize(name))


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


# ── Per-layout data sufficiency ───────────────────────────────


def has_stats(item: ContentItem) -> bool:
    return any(_has_text(s.value) or _has_text(s.label) for s in item.stats or [])


def has_comparison(item: ContentItem) -> bool:
    c = item.comparison
    return c is not None and bool(c.before_items or c.after_items)


def has_columns(item: ContentItem) -> bool:
    return any(
        col is not None and (_has_text(col.title) or bool(col.bullets))
        for col in (item.left_column, item.right_column)
    )


def has_quote(item: ContentItem) -> bool:
    return _has_text(item.quote)


def has_section(item: ContentItem) -> bool:
    return _has_text(item.title) or _has_text(item.message)


def has_summary(item: ContentItem) -> bool:
    return bool(item.bullets) or _has_text(item.message) or _has_text(item.title)


def _has_steps(steps) -> bool:
    return any(_has_text(s.title) for s in steps or [])


def has_flow(item: ContentItem) -> bool:
    return _has_steps(item.flow)


def has_pyramid(item: ContentItem) -> bool:
    return _has_steps(item.pyramid)


def has_matrix(item: ContentItem) -> bool:
    m = item.matrix
    return m is not None and any(q is not None and _has_text(q.title) for q in m.quadrants())


def has_parallel(item: ContentItem) -> bool:
    return _has_steps(item.parallel)


def has_timeline(item: ContentItem) -> bool:
    return any(_has_text(e.title) or _has_text(e.date) for e in item.timeline or [])


def has_cycle(item: ContentItem) -> bool:
    return _has_steps(item.cycle)


def has_funnel(item: ContentItem) -> bool:
    return _has_steps(item.funnel)


def has_table(item: ContentItem) -> bool:
    t = item.table_data
    return t is not None and bool(t.headers or t.rows)


def has_grid(item: ContentItem) -> bool:
    return _has_steps(item.grid)


def has_venn(item: ContentItem) -> bool:
    v = item.venn
    return v is not None and any(
        side is not None and _has_text(side.title) for side in (v.left, v.right)
    )


def has_tree(item: ContentItem) -> bool:
    t = item.tree
    return t is not None and (_has_text(t.title) or bool(t.children))


def has_qa(item: ContentItem) -> bool:
    return any(_has_text(q.question) for q in item.qa_items or [])


def has_case_study(item: ContentItem) -> bool:
    c = item.case_study
    return c is not None and any(
        _has_text(part) for part in (c.challenge, c.solution, c.result)
    )


SUFFICIENT_DATA: dict[LayoutKind, Callable[[ContentItem], bool]] = {
    LayoutKind.standard: lambda item: True,
    LayoutKind.two_column: has_columns,
    LayoutKind.stats: has_stats,
    LayoutKind.comparison: has_comparison,
    LayoutKind.quote: has_quote,
    LayoutKind.section: has_section,
    LayoutKind.summary: has_summary,
    LayoutKind.flow: has_flow,
    LayoutKind.vertical_flow: has_flow,
    LayoutKind.pyramid: has_pyramid,
    LayoutKind.matrix: has_matrix,
    LayoutKind.parallel: has_parallel,
    LayoutKind.timeline: has_timeline,
    LayoutKind.cycle: has_cycle,
    LayoutKind.funnel: has_funnel,
    LayoutKind.table: has_table,
    LayoutKind.grid: has_grid,
    LayoutKind.venn: has_venn,
    LayoutKind.tree: has_tree,
    LayoutKind.qa: has_qa,
    LayoutKind.case_study: has_case_study,
}

# Rule 11, in declaration order.
_STRUCTURED_RULES: tuple[tuple[LayoutKind, Callable[[ContentItem], bool]], ...] = (
    (LayoutKind.timeline, has_timeline),
    (LayoutKind.cycle, has_cycle),
    (LayoutKind.funnel, has_funnel),
    (LayoutKind.table, has_table),
    (LayoutKind.grid, has_grid),
    (LayoutKind.venn, has_venn),
    (LayoutKind.tree, has_tree),
    (LayoutKind.qa, has_qa),
    (LayoutKind.case_study, has_case_study),
)


def select_layout(item: ContentItem) -> LayoutKind:
    """Choose the layout for *item*.

    Inference order (first match wins):
    flow, pyramid, matrix, parallel (3+ entries), stats, comparison, quote,
    section, summary, two columns, the remaining structured layouts, standard.
    """
    explicit = parse_layout_name(item.layout)
    if explicit is not None:
        return explicit

    if item.flow:
        return LayoutKind.flow
    if item.pyramid:
        return LayoutKind.pyramid
    if has_matrix(item):
        return LayoutKind.matrix
    if item.parallel and len(item.parallel) >= 3:
        return LayoutKind.parallel
    if item.stats:
        return LayoutKind.stats
    if item.comparison is not None:
        return LayoutKind.comparison
    if item.quote is not None:
        return LayoutKind.quote
    if item.is_section or (
        not _has_text(item.body) and not item.bullets and _has_text(item.message)
    ):
        return LayoutKind.section
    if item.is_summary or (item.title and SUMMARY_MARKERS.search(item.title)):
        return LayoutKind.summary
    if item.left_column is not None or item.right_column is not None:
        return LayoutKind.two_column
    for kind, populated in _STRUCTURED_RULES:
        if populated(item):
            return kind
    return LayoutKind.standard


def resolve_layout(item: ContentItem) -> LayoutKind:
    """``select_layout`` plus the insufficient-data fallback to ``standard``."""
    kind = select_layout(item)
    if not SUFFICIENT_DATA[kind](item):
        logger.debug("Layout %s lacks data for %r; using standard", kind.value, item.title)
        return LayoutKind.standard
    return kind

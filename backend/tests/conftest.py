"""
Pytest configuration and fixtures.
"""

from datetime import date
from typing import Any, Callable

import pytest

from slideai.layout.builder import RenderContext
from slideai.layout.geometry import DEFAULT_CANVAS, CanvasConfig
from slideai.layout.renderers import render_content_slide
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import RenderedSlide

TODAY = date(2026, 10, 19)

LONG = "Pathologically long text that keeps going " * 40


# One fully populated item per layout.
RICH_ITEMS: dict[str, dict[str, Any]] = {
    "standard": {
        "title": "Revenue",
        "message": "Revenue grew 150% year over year and beat the target",
        "body": "Growth came from the enterprise segment and two new regions.",
        "highlights": ["150%", "2 regions", "+40 clients"],
        "bullets": ["Enterprise deals doubled", "APAC launch", "Churn fell to 3%"],
        "notes": "Mention the APAC partner.",
    },
    "twoColumn": {
        "title": "Options",
        "leftColumn": {"title": "Build", "bullets": ["Full control", "Slower"]},
        "rightColumn": {"title": "Buy", "bullets": ["Fast", "License cost", "Vendor lock-in"]},
    },
    "stats": {
        "title": "Results",
        "stats": [{"value": "150%", "label": "Growth"}, {"value": "40", "label": "Clients"}],
        "body": "Source: internal finance report",
    },
    "comparison": {
        "title": "Before and after",
        "comparison": {
            "beforeTitle": "Today",
            "beforeItems": ["Manual reports", "Two-week lag"],
            "afterTitle": "Tomorrow",
            "afterItems": ["Automated", "Daily refresh"],
        },
    },
    "quote": {"title": "Voice", "quote": "The best way to predict the future is to invent it.", "source": "Alan Kay"},
    "section": {"title": "Part 2", "message": "Market analysis", "isSection": True},
    "summary": {"title": "Summary", "message": "Invest now", "bullets": ["Grow", "Hire", "Expand"]},
    "flow": {"title": "Process", "flow": [{"title": "Plan", "description": "Scope"}, {"title": "Build"}, {"title": "Ship"}]},
    "verticalFlow": {"layout": "verticalFlow", "title": "Steps", "flow": [{"title": "One", "description": "first"}, {"title": "Two"}]},
    "pyramid": {"title": "Needs", "pyramid": [{"title": "Vision", "description": "Why"}, {"title": "Strategy"}, {"title": "Tactics"}]},
    "matrix": {
        "title": "Priorities",
        "matrix": {
            "xAxisLabel": "Effort",
            "yAxisLabel": "Impact",
            "topLeft": {"title": "Quick wins", "description": "Do now"},
            "topRight": {"title": "Big bets"},
            "bottomLeft": {"title": "Fill-ins"},
            "bottomRight": {"title": "Avoid"},
        },
    },
    "parallel": {
        "title": "Pillars",
        "parallel": [
            {"title": "People", "icon": "P", "description": "Hire well", "bullets": ["a", "b"]},
            {"title": "Process", "bullets": ["c"]},
            {"title": "Product"},
        ],
    },
    "timeline": {"title": "Roadmap", "timeline": [{"date": "Q1", "title": "Beta"}, {"date": "Q2", "title": "GA", "description": "Launch"}]},
    "cycle": {"layout": "cycle", "title": "Loop", "message": "Learn", "cycle": [{"title": "Build"}, {"title": "Measure"}, {"title": "Learn", "description": "Iterate"}]},
    "funnel": {"title": "Pipeline", "funnel": [{"title": "Leads", "value": "1000"}, {"title": "Trials", "value": "200"}, {"title": "Paid"}]},
    "table": {"title": "Plans", "tableData": {"headers": ["Plan", "Price"], "rows": [["Free", "0"], ["Pro", "20"]]}},
    "grid": {"title": "Features", "grid": [{"title": "Fast", "icon": "F", "description": "Sub-second"}, {"title": "Secure"}, {"title": "Open"}, {"title": "Cheap"}]},
    "venn": {"title": "Fit", "venn": {"left": {"title": "Skills", "items": ["Python"]}, "right": {"title": "Needs", "items": ["APIs"]}, "center": {"title": "Us"}}},
    "tree": {"title": "Org", "tree": {"title": "CEO", "children": [{"title": "CTO", "children": [{"title": "Eng"}]}, {"title": "CFO"}]}},
    "qa": {"title": "FAQ", "qaItems": [{"question": "Why now?", "answer": "Timing"}, {"question": "Cost?", "answer": "Low"}]},
    "caseStudy": {"title": "Acme", "caseStudy": {"company": "Acme Corp", "challenge": "Slow", "solution": "Automate", "result": "3x faster"}},
}


def pathological_item(layout: str) -> dict[str, Any]:
    """Oversized and overlong input for *layout*."""
    many = [LONG] * 15
    return {
        "layout": layout,
        "title": LONG,
        "message": LONG,
        "body": LONG,
        "bullets": many,
        "highlights": many,
        "stats": [{"value": LONG, "label": LONG}] * 9,
        "comparison": {"beforeTitle": LONG, "beforeItems": many, "afterItems": many},
        "leftColumn": {"title": LONG, "bullets": many},
        "rightColumn": {"title": LONG, "bullets": many},
        "quote": LONG,
        "source": LONG,
        "flow": [{"title": LONG, "description": LONG}] * 12,
        "pyramid": [{"title": LONG, "description": LONG}] * 12,
        "matrix": {
            "xAxisLabel": LONG,
            "yAxisLabel": LONG,
            "topLeft": {"title": LONG, "description": LONG},
            "bottomRight": {"title": LONG},
        },
        "parallel": [{"title": LONG, "icon": "X", "description": LONG, "bullets": many}] * 8,
        "timeline": [{"date": LONG, "title": LONG, "description": LONG}] * 12,
        "cycle": [{"title": LONG, "description": LONG}] * 12,
        "funnel": [{"title": LONG, "value": LONG}] * 12,
        "tableData": {"headers": [LONG] * 10, "rows": [[LONG] * 10] * 15},
        "grid": [{"title": LONG, "icon": "G", "description": LONG}] * 15,
        "venn": {
            "left": {"title": LONG, "items": many},
            "right": {"title": LONG, "items": many},
            "center": {"title": LONG, "items": many},
        },
        "tree": {"title": LONG, "children": [{"title": LONG, "children": [{"title": LONG}] * 8}] * 9},
        "qaItems": [{"question": LONG, "answer": LONG}] * 9,
        "caseStudy": {"company": LONG, "challenge": LONG, "solution": LONG, "result": LONG},
    }


@pytest.fixture
def render() -> Callable[..., RenderedSlide]:
    """Render one content item dict as the first content slide."""

    def _render(
        data: dict[str, Any], index: int = 0, canvas: CanvasConfig = DEFAULT_CANVAS
    ) -> RenderedSlide:
        item = ContentItem.model_validate(data)
        return render_content_slide(item, RenderContext(index=index, canvas=canvas), index + 1)

    return _render


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return {
        "title": "Q1 Review",
        "subtitle": "Board meeting",
        "slides": [RICH_ITEMS["standard"], RICH_ITEMS["stats"], RICH_ITEMS["flow"]],
    }


class RecordingAdapter:
    """Rendering host that records every call it receives."""

    def __init__(self):
        self.calls: list[tuple] = []
        self._next = 0

    def _handle(self, kind: str) -> str:
        self._next += 1
        return f"{kind}-{self._next}"

    def add_slide(self):
        handle = self._handle("slide")
        self.calls.append(("add_slide", handle))
        return handle

    def set_background(self, slide, color):
        self.calls.append(("set_background", slide, color))

    def insert_shape(self, slide, kind, x, y, width, height):
        handle = self._handle("shape")
        self.calls.append(("insert_shape", slide, kind, x, y, width, height))
        return handle

    def set_fill(self, shape, color):
        self.calls.append(("set_fill", shape, color))

    def insert_text_box(self, slide, text, x, y, width, height):
        handle = self._handle("text")
        self.calls.append(("insert_text_box", slide, text, x, y, width, height))
        return handle

    def set_text_style(self, text_box, style):
        self.calls.append(("set_text_style", text_box, style))

    def set_paragraph_alignment(self, text_box, align):
        self.calls.append(("set_paragraph_alignment", text_box, align))

    def set_speaker_notes(self, slide, text):
        self.calls.append(("set_speaker_notes", slide, text))

    def finish(self):
        self.calls.append(("finish",))
        return "done"

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    return RecordingAdapter()

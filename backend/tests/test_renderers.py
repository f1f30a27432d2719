"""
Tests for the layout renderers.
"""

import pytest

from slideai.layout.builder import RenderContext, SlideBuilder
from slideai.layout.geometry import DEFAULT_CANVAS, CanvasConfig
from slideai.layout.renderers import RENDERERS
from slideai.layout.renderers.common import fit_gap
from slideai.layout.renderers.data import STAT_GAP
from slideai.layout.renderers.process import FLOW_ARROW_GAP, VERTICAL_FLOW_MIN_ROW
from slideai.layout.selector import LayoutKind
from slideai.layout.theme import Theme
from slideai.schemas.rendered import Box, ShapeKind

from conftest import LONG, RICH_ITEMS, pathological_item

REGION = DEFAULT_CANVAS.content_region()
THEME = Theme()
SMALL_CANVAS = CanvasConfig(width=480, height=270)
LARGE_CANVAS = CanvasConfig(width=960, height=540)
CHROME_ROLES = {"header", "accent_bar", "slide_number", "title"}


def shapes(slide, role):
    return [e for e in slide.by_role(role) if e.type == "shape"]


def texts(slide, role):
    return [e for e in slide.by_role(role) if e.type == "text"]


def assert_in_bounds(slide, canvas=DEFAULT_CANVAS):
    """Every box is on the canvas; below a header, content stays in the content region."""
    region = canvas.content_region()
    has_header = bool(slide.by_role("header"))
    for element in slide.elements:
        box = element.box
        assert box.width >= 0 and box.height >= 0, element
        assert canvas.bounds.contains(box), element
        if has_header and element.role not in CHROME_ROLES:
            assert region.contains(box), element


def steps(n, **extra):
    return [{"title": f"Step {i}", **extra} for i in range(n)]


@pytest.fixture
def unclipped(monkeypatch):
    """Disable canvas clipping so assertions see the geometry renderers produce."""
    monkeypatch.setattr(SlideBuilder, "_clip", lambda self, box: box)


class TestRegistry:
    def test_every_layout_has_a_renderer(self):
        assert set(RENDERERS) == set(LayoutKind)


@pytest.mark.usefixtures("unclipped")
class TestBounds:
    """Every element of every layout stays on the canvas without relying on clipping."""

    @pytest.mark.parametrize("name", sorted(RICH_ITEMS))
    def test_rich_items(self, render, name):
        slide = render(RICH_ITEMS[name])
        assert slide.kind == name
        assert slide.elements
        assert_in_bounds(slide)

    @pytest.mark.parametrize("kind", [k.value for k in LayoutKind])
    def test_pathological_items(self, render, kind):
        slide = render(pathological_item(kind), index=7)
        assert slide.kind == kind
        assert_in_bounds(slide)

    @pytest.mark.parametrize("kind", [k.value for k in LayoutKind])
    def test_minimal_items(self, render, kind):
        slide = render({"layout": kind, "title": "T"})
        assert_in_bounds(slide)

    def test_unclipped_geometry_is_checked(self):
        b = SlideBuilder(RenderContext(index=0), "standard", "#ffffff")
        element = b.rect(Box(x=700, y=-20, width=100, height=50), "#000000", "x")
        assert element.box == Box(x=700, y=-20, width=100, height=50)
        assert not DEFAULT_CANVAS.bounds.contains(element.box)


@pytest.mark.usefixtures("unclipped")
class TestCanvasSizes:
    """Layouts scale with the canvas instead of assuming 720x405."""

    @pytest.mark.parametrize("canvas", [SMALL_CANVAS, LARGE_CANVAS], ids=["480x270", "960x540"])
    @pytest.mark.parametrize("kind", [k.value for k in LayoutKind])
    def test_pathological_items(self, render, kind, canvas):
        slide = render(pathological_item(kind), index=2, canvas=canvas)
        assert slide.kind == kind
        assert_in_bounds(slide, canvas)

    @pytest.mark.parametrize("name", sorted(RICH_ITEMS))
    def test_rich_items_on_a_small_canvas(self, render, name):
        slide = render(RICH_ITEMS[name], canvas=SMALL_CANVAS)
        assert slide.kind == name
        assert_in_bounds(slide, SMALL_CANVAS)

    def test_vertical_flow_drops_rows_that_do_not_fit(self, render):
        slide = render({"layout": "verticalFlow", "title": "T", "flow": steps(6)}, canvas=SMALL_CANVAS)
        rows = shapes(slide, "flow_step")
        assert len(rows) == 5
        assert len(shapes(slide, "flow_arrow")) == 4
        assert all(r.box.height >= VERTICAL_FLOW_MIN_ROW for r in rows)

    @pytest.mark.parametrize("name", ["section", "summary"])
    def test_divider_slides_scale_with_height(self, render, name):
        default = render(RICH_ITEMS[name])
        large = render(RICH_ITEMS[name], canvas=LARGE_CANVAS)
        ratio = LARGE_CANVAS.height / DEFAULT_CANVAS.height
        for role in ("title", "accent_line"):
            assert large.by_role(role)[0].box.y == pytest.approx(default.by_role(role)[0].box.y * ratio)

class TestChrome:
    def test_z_order_starts_with_header(self, render):
        slide = render(RICH_ITEMS["standard"])
        assert [e.role for e in slide.elements[:2]] == ["header", "accent_bar"]
        assert slide.elements[0].box == Box(x=0, y=0, width=720, height=DEFAULT_CANVAS.header_height)

    def test_slide_number_badge(self, render):
        slide = render(RICH_ITEMS["standard"], index=3)
        assert texts(slide, "slide_number")[0].text == "4"

    def test_long_title_is_shrunk_not_dropped(self, render):
        slide = render({"title": LONG})
        title = texts(slide, "title")[0]
        assert title.style.font_size == 14


class TestStandard:
    def test_empty_slide_has_chrome_only(self, render):
        slide = render({"title": "Empty slide"})
        assert slide.kind == "standard"
        roles = {e.role for e in slide.elements}
        assert roles == {"header", "accent_bar", "slide_number", "title"}

    def test_highlights_are_capped(self, render):
        slide = render({"title": "T", "highlights": [f"h{i}" for i in range(6)], "bullets": ["a"]})
        assert len(shapes(slide, "highlight_chip")) == 4

    def test_blocks_stack_top_to_bottom(self, render):
        slide = render(RICH_ITEMS["standard"])
        message = texts(slide, "message")[0]
        body = texts(slide, "body")[0]
        first_bullet = texts(slide, "bullet")[0]
        assert message.box.y == REGION.y
        assert message.box.bottom <= body.box.y
        assert body.box.bottom <= first_bullet.box.y

    def test_bullets_truncate_instead_of_overflowing(self, render):
        slide = render({"title": "T", "message": LONG, "body": LONG, "bullets": [f"b{i}" for i in range(40)]})
        bullets = texts(slide, "bullet")
        assert 0 < len(bullets) < 40
        assert bullets[-1].box.bottom <= REGION.bottom + 1e-6


class TestStats:
    def test_two_cards_share_the_width(self, render):
        slide = render(
            {
                "layout": "stats",
                "title": "Results",
                "stats": [{"value": "150%", "label": "Growth"}, {"value": "40", "label": "Clients"}],
            }
        )
        cards = shapes(slide, "stat_card")
        assert len(cards) == 2
        for card in cards:
            assert card.box.width == pytest.approx((REGION.width - STAT_GAP) / 2)

    def test_at_most_four_cards(self, render):
        slide = render({"title": "T", "stats": [{"value": str(i)} for i in range(6)]})
        assert len(shapes(slide, "stat_card")) == 4

    def test_palette_rotates_with_slide_index(self, render):
        slide = render(RICH_ITEMS["stats"], index=1)
        assert shapes(slide, "stat_card")[0].fill == THEME.palette_color(1)


class TestComparison:
    def test_empty_comparison_renders_as_standard(self, render):
        data = {"layout": "comparison", "title": "Compare", "message": "m", "bullets": ["x"],
                "comparison": {"beforeItems": [], "afterItems": []}}
        fallback = render(data)
        standard = render({**data, "layout": "standard"})
        assert fallback.kind == "standard"
        assert fallback.elements == standard.elements

    def test_panels_and_arrow(self, render):
        slide = render(RICH_ITEMS["comparison"])
        panels = shapes(slide, "comparison_panel")
        assert len(panels) == 2
        arrow = shapes(slide, "comparison_arrow")[0]
        assert arrow.kind is ShapeKind.right_arrow
        assert panels[0].box.right < arrow.box.x < arrow.box.right < panels[1].box.x

    def test_default_panel_titles(self, render):
        slide = render({"title": "T", "comparison": {"beforeItems": ["a"], "afterItems": ["b"]}})
        assert [t.text for t in texts(slide, "comparison_title")] == ["Before", "After"]


class TestFlow:
    def test_three_steps(self, render):
        slide = render({"layout": "flow", "title": "Steps", "flow": [{"title": "A"}, {"title": "B"}, {"title": "C"}]})
        boxes = shapes(slide, "flow_step")
        assert len(boxes) == 3
        assert len(shapes(slide, "flow_arrow")) == 2
        for box in boxes:
            assert box.box.width == pytest.approx((REGION.width - 2 * FLOW_ARROW_GAP) / 3)

    def test_eight_steps_are_capped_at_five(self, render):
        slide = render({"layout": "flow", "title": "Steps", "flow": steps(8)})
        assert len(shapes(slide, "flow_step")) == 5
        assert len(shapes(slide, "flow_arrow")) == 4

    def test_vertical_flow_cap_and_arrows(self, render):
        slide = render({"layout": "verticalFlow", "title": "T", "flow": steps(9)})
        assert len(shapes(slide, "flow_step")) == 6
        arrows = shapes(slide, "flow_arrow")
        assert len(arrows) == 5
        assert all(a.kind is ShapeKind.down_arrow for a in arrows)


@pytest.mark.usefixtures("unclipped")
class TestCaps:
    @pytest.mark.parametrize(
        "data,role,expected",
        [
            ({"pyramid": steps(7)}, "pyramid_layer", 5),
            ({"layout": "funnel", "funnel": steps(8)}, "funnel_stage", 5),
            ({"timeline": [{"date": str(i), "title": "t"} for i in range(9)]}, "timeline_dot", 6),
            ({"layout": "cycle", "cycle": steps(8)}, "cycle_node", 6),
            ({"grid": steps(12)}, "grid_cell", 9),
            ({"qaItems": [{"question": "q", "answer": "a"}] * 6}, "qa_card", 4),
            ({"parallel": steps(6)}, "parallel_column", 4),
        ],
    )
    def test_item_caps(self, render, data, role, expected):
        slide = render({"title": "T", **data})
        assert len(shapes(slide, role)) == expected
        assert_in_bounds(slide)

    def test_table_caps_columns_and_rows(self, render):
        slide = render(
            {"title": "T", "tableData": {"headers": [f"h{i}" for i in range(8)], "rows": [["c"] * 8] * 10}}
        )
        assert len(shapes(slide, "table_header")) == 6
        assert len(shapes(slide, "table_cell")) == 6 * 7

    def test_tree_caps_children_and_grandchildren(self, render):
        child = {"title": "c", "children": [{"title": "g"}] * 5}
        slide = render({"title": "T", "tree": {"title": "root", "children": [child] * 7}})
        assert len(shapes(slide, "tree_node")) == 1 + 5
        assert len(shapes(slide, "tree_leaf")) == 5 * 3


class TestLayoutDetails:
    def test_quote_has_no_header(self, render):
        slide = render(RICH_ITEMS["quote"])
        assert slide.background == THEME.title_bg
        assert not slide.by_role("header")
        assert texts(slide, "attribution")[0].text == "— Alan Kay"
        assert texts(slide, "quote")[0].style.italic

    def test_section_uses_dark_background(self, render):
        slide = render(RICH_ITEMS["section"])
        assert slide.background == THEME.dark_bg
        assert texts(slide, "title")[0].text == "Part 2"

    def test_summary_numbers_bullets(self, render):
        slide = render(RICH_ITEMS["summary"])
        assert [t.text for t in texts(slide, "bullet_number")] == ["1", "2", "3"]

    def test_matrix_draws_all_quadrants(self, render):
        slide = render({"title": "T", "matrix": {"topLeft": {"title": "Only"}}})
        assert len(shapes(slide, "matrix_quadrant")) == 4
        assert len(texts(slide, "quadrant_title")) == 1

    def test_two_column_with_one_side(self, render):
        slide = render({"title": "T", "leftColumn": {"title": "Left", "bullets": ["a", "b"]}})
        assert [t.text for t in texts(slide, "column_title")] == ["Left"]
        assert len(shapes(slide, "column_divider")) == 1

    def test_table_rows_alternate(self, render):
        slide = render(RICH_ITEMS["table"])
        cells = shapes(slide, "table_cell")
        assert cells[0].fill == THEME.card
        assert cells[2].fill == THEME.panel_alt

    def test_table_cells_share_the_height(self, render):
        slide = render(RICH_ITEMS["table"])
        heights = {round(e.box.height, 6) for e in shapes(slide, "table_header") + shapes(slide, "table_cell")}
        assert heights == {round(REGION.height / 3, 6)}

    def test_cycle_arrows_between_nodes(self, render):
        slide = render(RICH_ITEMS["cycle"])
        assert len(texts(slide, "cycle_arrow")) == 3
        assert texts(slide, "cycle_hub")[0].text == "Learn"

    def test_venn(self, render):
        slide = render(RICH_ITEMS["venn"])
        circles = shapes(slide, "venn_circle")
        assert len(circles) == 2
        assert circles[0].box.right > circles[1].box.x
        assert texts(slide, "venn_center")[0].text == "Us"

    def test_tree_connectors(self, render):
        slide = render({"title": "T", "tree": {"title": "R", "children": steps(3)}})
        assert len(shapes(slide, "tree_connector")) == 1 + 1 + 3

    def test_case_study_sections(self, render):
        slide = render(RICH_ITEMS["caseStudy"])
        assert [t.text for t in texts(slide, "case_label")] == ["Challenge", "Solution", "Result"]
        assert texts(slide, "company")[0].text == "Acme Corp"

    def test_pyramid_narrowest_on_top(self, render):
        slide = render(RICH_ITEMS["pyramid"])
        widths = [e.box.width for e in shapes(slide, "pyramid_layer")]
        assert widths == sorted(widths)
        assert len(texts(slide, "layer_description")) == 1


class TestSlideBuilder:
    def test_blank_text_places_nothing(self):
        b = SlideBuilder(RenderContext(index=0), "standard", "#ffffff")
        assert b.text("   ", Box(x=0, y=0, width=10, height=10), "body", 12) is None
        assert b.elements == []

    def test_boxes_are_clipped_to_the_canvas(self):
        b = SlideBuilder(RenderContext(index=0), "standard", "#ffffff")
        element = b.rect(Box(x=700, y=-20, width=100, height=50), "#000000", "x")
        assert element.box == Box(x=700, y=0, width=20, height=30)


class TestFitGap:
    def test_gap_kept_when_there_is_room(self):
        assert fit_gap(660, 3, 30) == 30

    def test_gaps_shrink_to_a_quarter_of_the_length(self):
        assert fit_gap(100, 5, 16) == pytest.approx(100 * 0.25 / 4)

    def test_single_block_has_no_gap_to_shrink(self):
        assert fit_gap(0, 1, 12) == 12

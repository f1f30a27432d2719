"""Relational layouts: matrix, parallel columns, grid, Venn diagram and tree."""

from __future__ import annotations

import math

from slideai.layout.builder import SlideBuilder
from slideai.layout.chrome import render_chrome
from slideai.layout.measure import estimate_line_count, fit_multi_line, fit_single_line
from slideai.layout.renderers.common import fit_gap, has_text, place_message, place_rows
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import Align, Box, ShapeKind

MATRIX_GAP = 10
MATRIX_Y_LABEL_WIDTH = 60
MATRIX_X_LABEL_HEIGHT = 22
MATRIX_TITLE_HEIGHT = 26

PARALLEL_CAP = 4
PARALLEL_GAP = 14
PARALLEL_HEADER_HEIGHT = 36
PARALLEL_BULLET_CAP = 5
PARALLEL_DESCRIPTION_MAX_HEIGHT = 70

GRID_CAP = 9
GRID_COLUMNS = 3
GRID_GAP = 12
GRID_TITLE_HEIGHT = 26

VENN_DIAMETER = 220
VENN_OVERLAP = 70
VENN_ITEM_CAP = 3

TREE_CHILD_CAP = 5
TREE_GRANDCHILD_CAP = 3
TREE_NODE_HEIGHT = 40
TREE_LEAF_HEIGHT = 30
TREE_ROOT_WIDTH = 160
TREE_CHILD_MAX_WIDTH = 150


def render_matrix(b: SlideBuilder, item: ContentItem) -> None:
    """2x2 quadrants with optional axis labels."""
    theme = b.ctx.theme
    matrix = item.matrix
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    y_label = matrix.y_axis_label if has_text(matrix.y_axis_label) else None
    x_label = matrix.x_axis_label if has_text(matrix.x_axis_label) else None
    left = MATRIX_Y_LABEL_WIDTH if y_label else 0
    label_h = min(MATRIX_X_LABEL_HEIGHT, area.height * 0.1) if x_label else 0
    grid = Box(
        x=area.x + left,
        y=area.y,
        width=area.width - left,
        height=area.height - label_h * 1.18,
    )

    gap = fit_gap(grid.height, 2, MATRIX_GAP)
    cells = [
        cell
        for row in grid.split_rows(2, gap)
        for cell in row.split_columns(2, MATRIX_GAP)
    ]
    for i, (cell, quadrant) in enumerate(zip(cells, matrix.quadrants())):
        b.shape(ShapeKind.round_rectangle, cell, theme.panel_alt, "matrix_quadrant")
        if quadrant is None:
            continue
        inner = cell.inset(12, min(10.0, cell.height * 0.1))
        title_h = min(MATRIX_TITLE_HEIGHT, inner.height * 0.3)
        size = fit_single_line(quadrant.title, inner.width, 16, 10, b.ctx.measurer)
        b.text(
            quadrant.title,
            Box(x=inner.x, y=inner.y, width=inner.width, height=title_h),
            "quadrant_title",
            size,
            color=b.ctx.color(i),
            bold=True,
        )
        if has_text(quadrant.description):
            desc_box = inner.below(inner.y + title_h * 1.15)
            size = fit_multi_line(
                quadrant.description, desc_box.width, desc_box.height, 12, 9, b.ctx.measurer
            )
            b.text(quadrant.description, desc_box, "quadrant_description", size)

    if x_label:
        b.text(
            x_label,
            Box(x=grid.x, y=area.bottom - label_h, width=grid.width, height=label_h),
            "axis_label",
            11,
            color=theme.muted_text,
            align=Align.center,
        )
    if y_label:
        size = fit_multi_line(y_label, MATRIX_Y_LABEL_WIDTH - 8, grid.height, 11, 9, b.ctx.measurer)
        b.text(
            y_label,
            Box(x=area.x, y=grid.y, width=MATRIX_Y_LABEL_WIDTH - 8, height=grid.height),
            "axis_label",
            size,
            color=theme.muted_text,
            align=Align.center,
        )


def render_parallel(b: SlideBuilder, item: ContentItem) -> None:
    """Side-by-side columns, each with a colored header band."""
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    entries = [p for p in item.parallel or [] if has_text(p.title)][:PARALLEL_CAP]
    gap = fit_gap(area.width, len(entries), PARALLEL_GAP)
    for i, (column, entry) in enumerate(zip(area.split_columns(len(entries), gap), entries)):
        b.shape(ShapeKind.round_rectangle, column, theme.panel_alt, "parallel_column")
        band = Box(
            x=column.x,
            y=column.y,
            width=column.width,
            height=min(PARALLEL_HEADER_HEIGHT, column.height * 0.2),
        )
        b.rect(band, b.ctx.color(i), "parallel_header")

        title_x = band.x + 10
        if has_text(entry.icon):
            b.text(
                entry.icon,
                Box(x=band.x + 8, y=band.y + band.height * 0.14, width=26, height=band.height * 0.72),
                "icon",
                16,
                color=theme.light_text,
                align=Align.center,
            )
            title_x = band.x + 40
        title_w = max(0.0, band.right - title_x - 8)
        size = fit_single_line(entry.title, title_w, 15, 9, b.ctx.measurer)
        b.text(
            entry.title,
            Box(x=title_x, y=band.y, width=title_w, height=band.height),
            "parallel_title",
            size,
            color=theme.light_text,
            bold=True,
        )

        inner = column.inset(10, 0).below(band.bottom + min(8.0, column.height * 0.03))
        y = inner.y
        if has_text(entry.description):
            lines = estimate_line_count(entry.description, inner.width, 11, b.ctx.measurer)
            height = min(
                PARALLEL_DESCRIPTION_MAX_HEIGHT,
                lines * 11 * 1.5 + 4,
                inner.remaining_height(y),
            )
            size = fit_multi_line(entry.description, inner.width, height, 11, 9, b.ctx.measurer)
            b.text(
                entry.description,
                Box(x=inner.x, y=y, width=inner.width, height=height),
                "parallel_description",
                size,
                color=theme.muted_text,
            )
            y += height + 6

        place_rows(
            b,
            entry.bullets[:PARALLEL_BULLET_CAP],
            Box(x=inner.x, y=y, width=inner.width, height=max(0.0, inner.bottom - 8 - y)),
            min_row=14,
            base_font=12,
            marker_color=b.ctx.color(i),
        )


def render_grid(b: SlideBuilder, item: ContentItem) -> None:
    """Cards in a fixed three-column grid.

    Card padding and the title band are fractions of the card height.
    """
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    cards = [g for g in item.grid or [] if has_text(g.title)][:GRID_CAP]
    row_count = math.ceil(len(cards) / GRID_COLUMNS)
    rows = area.split_rows(row_count, fit_gap(area.height, row_count, GRID_GAP))
    for i, card in enumerate(cards):
        r, c = divmod(i, GRID_COLUMNS)
        cell = rows[r].split_columns(GRID_COLUMNS, GRID_GAP)[c]
        b.shape(ShapeKind.round_rectangle, cell, theme.card, "grid_cell")
        b.rect(
            Box(x=cell.x, y=cell.y, width=cell.width, height=min(4.0, cell.height * 0.05)),
            b.ctx.color(i),
            "grid_accent",
        )

        pad = min(10.0, cell.height * 0.1)
        top = cell.y + pad
        title_h = min(GRID_TITLE_HEIGHT, cell.height * 0.3)
        title_x = cell.x + 10
        if has_text(card.icon):
            b.text(
                card.icon,
                Box(x=cell.x + 8, y=top, width=30, height=title_h),
                "icon",
                18,
                align=Align.center,
            )
            title_x = cell.x + 44
        title_w = max(0.0, cell.right - title_x - 10)
        size = fit_single_line(card.title, title_w, 14, 9, b.ctx.measurer)
        b.text(
            card.title,
            Box(x=title_x, y=top, width=title_w, height=title_h),
            "grid_title",
            size,
            color=b.ctx.color(i),
            bold=True,
        )
        if has_text(card.description):
            desc_top = top + title_h + pad * 0.4
            desc_box = Box(
                x=cell.x + 10,
                y=desc_top,
                width=cell.width - 20,
                height=cell.remaining_height(desc_top + pad * 0.6),
            )
            size = fit_multi_line(
                card.description, desc_box.width, desc_box.height, 11, 9, b.ctx.measurer
            )
            b.text(card.description, desc_box, "grid_description", size, color=theme.muted_text)


def _venn_side(b: SlideBuilder, venn_set, text_box: Box, role: str) -> None:
    theme = b.ctx.theme
    h = text_box.height
    size = fit_single_line(venn_set.title, text_box.width, 15, 9, b.ctx.measurer)
    b.text(
        venn_set.title,
        Box(x=text_box.x, y=text_box.y, width=text_box.width, height=h * 0.2),
        role,
        size,
        color=theme.light_text,
        bold=True,
        align=Align.center,
    )
    for j, entry in enumerate(venn_set.items[:VENN_ITEM_CAP]):
        size = fit_single_line(entry, text_box.width, 12, 9, b.ctx.measurer)
        b.text(
            entry,
            Box(
                x=text_box.x,
                y=text_box.y + h * (0.24 + j * 0.18),
                width=text_box.width,
                height=h * 0.167,
            ),
            "venn_item",
            size,
            color=theme.light_text,
            align=Align.center,
        )


def render_venn(b: SlideBuilder, item: ContentItem) -> None:
    """Two overlapping circles with an optional label on the intersection."""
    theme = b.ctx.theme
    venn = item.venn
    region = render_chrome(b, item.title)

    overlap_ratio = VENN_OVERLAP / VENN_DIAMETER
    diameter = max(
        0.0, min(VENN_DIAMETER, region.height - 10, region.width / (2 - overlap_ratio))
    )
    overlap = diameter * overlap_ratio
    left_x = region.center_x - (2 * diameter - overlap) / 2
    top = region.center_y - diameter / 2
    left = Box(x=left_x, y=top, width=diameter, height=diameter)
    right = Box(x=left.right - overlap, y=top, width=diameter, height=diameter)

    b.shape(ShapeKind.ellipse, left, b.ctx.color(0), "venn_circle")
    b.shape(ShapeKind.ellipse, right, b.ctx.color(1), "venn_circle")

    crescent_w = max(0.0, diameter * 0.86 - overlap - 6)
    text_top = top + diameter * 0.22
    text_h = diameter * 0.6
    if venn.left is not None:
        _venn_side(
            b,
            venn.left,
            Box(x=left.x + diameter * 0.14, y=text_top, width=crescent_w, height=text_h),
            "venn_left",
        )
    if venn.right is not None:
        _venn_side(
            b,
            venn.right,
            Box(x=right.x + overlap + 6, y=text_top, width=crescent_w, height=text_h),
            "venn_right",
        )

    center = venn.center
    if center is not None and (has_text(center.title) or center.items):
        label = "\n".join([t for t in [center.title, *center.items] if has_text(t)])
        label_w = overlap + 10
        label_h = min(60.0, diameter * 0.27)
        box = Box(
            x=left.right - overlap / 2 - label_w / 2,
            y=region.center_y - label_h / 2,
            width=label_w,
            height=label_h,
        )
        size = fit_multi_line(label, box.width, box.height, 11, 9, b.ctx.measurer)
        b.text(label, box, "venn_center", size, color=theme.light_text, bold=True, align=Align.center)


def render_tree(b: SlideBuilder, item: ContentItem) -> None:
    """Root node, up to five children and three grandchildren per child.

    Node height and level spacing scale with the region height; leaves that
    have no room left are not drawn.
    """
    theme = b.ctx.theme
    tree = item.tree
    region = render_chrome(b, item.title)
    node_h = min(TREE_NODE_HEIGHT, region.height * 0.13)

    root = Box(
        x=region.center_x - TREE_ROOT_WIDTH / 2,
        y=region.y,
        width=TREE_ROOT_WIDTH,
        height=node_h,
    )
    children = [c for c in tree.children if has_text(c.title)][:TREE_CHILD_CAP]

    if children:
        mid_y = root.bottom + node_h / 2
        child_y = root.bottom + node_h
        slot_w = region.width / len(children)
        centers = [region.x + slot_w * (i + 0.5) for i in range(len(children))]
        connector = theme.muted_text

        b.rect(Box(x=root.center_x - 1, y=root.bottom, width=2, height=mid_y - root.bottom), connector, "tree_connector")
        if len(children) > 1:
            b.rect(
                Box(x=centers[0], y=mid_y - 1, width=centers[-1] - centers[0], height=2),
                connector,
                "tree_connector",
            )
        for center in centers:
            b.rect(Box(x=center - 1, y=mid_y, width=2, height=child_y - mid_y), connector, "tree_connector")

    b.shape(ShapeKind.round_rectangle, root, theme.primary, "tree_node")
    size = fit_single_line(tree.title, root.width - 12, 16, 9, b.ctx.measurer)
    b.text(tree.title, root.inset(6), "tree_root", size, color=theme.light_text, bold=True, align=Align.center)

    if not children:
        return
    slot_w = region.width / len(children)
    child_w = min(TREE_CHILD_MAX_WIDTH, slot_w - 12)
    leaf_top = root.bottom + 2 * node_h + node_h * 0.3
    leaf_gap = node_h * 0.2
    leaf_h = min(
        TREE_LEAF_HEIGHT,
        region.remaining_height(leaf_top) / TREE_GRANDCHILD_CAP - leaf_gap,
    )
    for i, child in enumerate(children):
        center = region.x + slot_w * (i + 0.5)
        node = Box(
            x=center - child_w / 2,
            y=root.bottom + node_h,
            width=child_w,
            height=node_h,
        )
        b.shape(ShapeKind.round_rectangle, node, b.ctx.color(i), "tree_node")
        size = fit_single_line(child.title, child_w - 12, 14, 9, b.ctx.measurer)
        b.text(child.title, node.inset(6), "tree_child", size, color=theme.light_text, bold=True, align=Align.center)

        leaves = [g for g in child.children if has_text(g.title)][:TREE_GRANDCHILD_CAP]
        if not leaves or leaf_h <= 0:
            continue
        for k, leaf in enumerate(leaves):
            box = Box(
                x=node.x + 6,
                y=leaf_top + k * (leaf_h + leaf_gap),
                width=child_w - 12,
                height=leaf_h,
            )
            b.shape(ShapeKind.round_rectangle, box, theme.panel_alt, "tree_leaf")
            size = fit_single_line(leaf.title, box.width - 8, 11, 9, b.ctx.measurer)
            b.text(leaf.title, box.inset(4), "tree_leaf", size, align=Align.center)

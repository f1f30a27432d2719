"""Sequential layouts: flow, vertical flow, pyramid, funnel, timeline and cycle."""

from __future__ import annotations

import math

from slideai.layout.builder import SlideBuilder
from slideai.layout.chrome import render_chrome
from slideai.layout.measure import fit_multi_line, fit_single_line
from slideai.layout.renderers.common import fit_gap, has_text, number_badge, place_message
from slideai.schemas.presentation import ContentItem
from slideai.schemas.rendered import Align, Box, ShapeKind

FLOW_CAP = 5
FLOW_ARROW_GAP = 30
FLOW_BOX_MAX_HEIGHT = 200
FLOW_BADGE = 30

VERTICAL_FLOW_CAP = 6
VERTICAL_FLOW_GAP = 16
VERTICAL_FLOW_MIN_ROW = 24

PYRAMID_CAP = 5
PYRAMID_BASE_RATIO = 0.2
PYRAMID_STEP_RATIO = 0.16

FUNNEL_CAP = 5
FUNNEL_WIDTH_RATIO = 0.7
FUNNEL_SHRINK = 0.18

TIMELINE_CAP = 6
TIMELINE_DOT = 16

CYCLE_CAP = 6
CYCLE_RADIUS = 110
CYCLE_HUB = 96
CYCLE_NODE_HEIGHT = 56
CYCLE_ARROW = 16


def _steps(steps, cap: int) -> list:
    return [s for s in steps or [] if has_text(s.title)][:cap]


def render_flow(b: SlideBuilder, item: ContentItem) -> None:
    """Left-to-right process boxes joined by arrows.

    Inside each box the badge, title and description bands are fractions of
    the box height, so the layout follows the canvas size.
    """
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    steps = _steps(item.flow, FLOW_CAP)
    if not steps:
        return
    box_h = min(area.height, FLOW_BOX_MAX_HEIGHT)
    row = Box(x=area.x, y=area.y + (area.height - box_h) / 2, width=area.width, height=box_h)
    boxes = row.split_columns(len(steps), fit_gap(area.width, len(steps), FLOW_ARROW_GAP))

    for i, (box, step) in enumerate(zip(boxes, steps)):
        b.shape(ShapeKind.round_rectangle, box, theme.card, "flow_step")
        badge = min(FLOW_BADGE, box.height * 0.15, box.width)
        number_badge(
            b,
            Box(x=box.center_x - badge / 2, y=box.y + box.height * 0.06, width=badge, height=badge),
            str(i + 1),
            b.ctx.color(i),
            "step_number",
            font_size=14,
        )
        inner = box.inset(min(8.0, box.width / 4))
        title_box = Box(
            x=inner.x, y=box.y + box.height * 0.25, width=inner.width, height=box.height * 0.2
        )
        size = fit_multi_line(step.title, title_box.width, title_box.height, 15, 9, b.ctx.measurer)
        b.text(step.title, title_box, "step_title", size, bold=True, align=Align.center)
        if has_text(step.description):
            desc_top = title_box.bottom + box.height * 0.02
            desc_box = Box(
                x=inner.x,
                y=desc_top,
                width=inner.width,
                height=box.bottom - box.height * 0.06 - desc_top,
            )
            size = fit_multi_line(
                step.description, desc_box.width, desc_box.height, 12, 9, b.ctx.measurer
            )
            b.text(
                step.description,
                desc_box,
                "step_description",
                size,
                color=theme.muted_text,
                align=Align.center,
            )

    for left, right in zip(boxes, boxes[1:]):
        gap = right.x - left.right
        arrow_h = min(20.0, box_h)
        b.shape(
            ShapeKind.right_arrow,
            Box(x=left.right + gap / 6, y=left.center_y - arrow_h / 2, width=gap * 2 / 3, height=arrow_h),
            theme.accent,
            "flow_arrow",
        )


def render_vertical_flow(b: SlideBuilder, item: ContentItem) -> None:
    """Top-to-bottom process rows joined by down arrows.

    Steps that cannot get a row of at least ``VERTICAL_FLOW_MIN_ROW`` are
    dropped from the end.
    """
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    steps = _steps(item.flow, VERTICAL_FLOW_CAP)
    gap = fit_gap(area.height, len(steps), VERTICAL_FLOW_GAP)
    fitting = int((area.height + gap + 1e-6) // (VERTICAL_FLOW_MIN_ROW + gap))
    steps = steps[:fitting]
    rows = area.split_rows(len(steps), gap)
    badge = 0.0
    for i, (row, step) in enumerate(zip(rows, steps)):
        b.shape(ShapeKind.round_rectangle, row, theme.card, "flow_step")
        badge = max(0.0, min(28.0, row.height - 8))
        number_badge(
            b,
            Box(x=row.x + 12, y=row.center_y - badge / 2, width=badge, height=badge),
            str(i + 1),
            b.ctx.color(i),
            "step_number",
        )
        title_box = Box(
            x=row.x + badge + 24, y=row.y, width=row.width * 0.32, height=row.height
        )
        size = fit_multi_line(step.title, title_box.width, row.height, 15, 9, b.ctx.measurer)
        b.text(step.title, title_box, "step_title", size, bold=True)
        if has_text(step.description):
            desc_box = Box(
                x=title_box.right + 10,
                y=row.y,
                width=row.right - title_box.right - 20,
                height=row.height,
            )
            size = fit_multi_line(
                step.description, desc_box.width, row.height, 12, 9, b.ctx.measurer
            )
            b.text(step.description, desc_box, "step_description", size, color=theme.muted_text)

    for row in rows[:-1]:
        b.shape(
            ShapeKind.down_arrow,
            Box(
                x=row.x + 12 + badge / 2 - 8,
                y=row.bottom + gap / 8,
                width=16,
                height=gap * 3 / 4,
            ),
            theme.accent,
            "flow_arrow",
        )


def render_pyramid(b: SlideBuilder, item: ContentItem) -> None:
    """Stacked layers, narrowest on top; descriptions beside them."""
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    layers = _steps(item.pyramid, PYRAMID_CAP)
    if not layers:
        return
    described = any(has_text(layer.description) for layer in layers)
    stack = Box(
        x=area.x,
        y=area.y,
        width=area.width * (0.6 if described else 1.0),
        height=area.height,
    )
    layer_h = stack.height / len(layers)
    pad = min(2.0, layer_h / 4)

    for i, layer in enumerate(layers):
        width = stack.width * (PYRAMID_BASE_RATIO + i * PYRAMID_STEP_RATIO)
        box = Box(
            x=stack.center_x - width / 2,
            y=stack.y + i * layer_h + pad,
            width=width,
            height=layer_h - 2 * pad,
        )
        b.shape(ShapeKind.round_rectangle, box, b.ctx.color(i), "pyramid_layer")
        size = fit_single_line(layer.title, width - 10, 16, 9, b.ctx.measurer)
        b.text(
            layer.title,
            box.inset(5),
            "layer_title",
            size,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        if described and has_text(layer.description):
            desc_box = Box(
                x=stack.right + 16, y=box.y, width=area.right - stack.right - 16, height=box.height
            )
            size = fit_multi_line(
                layer.description, desc_box.width, desc_box.height, 12, 9, b.ctx.measurer
            )
            b.text(layer.description, desc_box, "layer_description", size)


def render_funnel(b: SlideBuilder, item: ContentItem) -> None:
    """Centered bars that shrink stage by stage, values on the right."""
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    stages = _steps(item.funnel, FUNNEL_CAP)
    if not stages:
        return
    max_width = area.width * FUNNEL_WIDTH_RATIO
    stage_h = area.height / len(stages)
    pad = min(2.0, stage_h / 4)

    for i, stage in enumerate(stages):
        width = max_width * (1 - i * FUNNEL_SHRINK)
        box = Box(
            x=area.x + (max_width - width) / 2,
            y=area.y + i * stage_h + pad,
            width=width,
            height=stage_h - 2 * pad,
        )
        b.shape(ShapeKind.round_rectangle, box, b.ctx.color(i), "funnel_stage")
        size = fit_single_line(stage.title, width - 10, 16, 9, b.ctx.measurer)
        b.text(
            stage.title,
            box.inset(5),
            "stage_title",
            size,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        if has_text(stage.value):
            value_box = Box(
                x=area.x + max_width + 16,
                y=box.y,
                width=area.width - max_width - 16,
                height=box.height,
            )
            size = fit_single_line(stage.value, value_box.width, 20, 10, b.ctx.measurer)
            b.text(stage.value, value_box, "stage_value", size, color=b.ctx.color(i), bold=True)


def render_timeline(b: SlideBuilder, item: ContentItem) -> None:
    """Horizontal line with dated milestones.

    Bands as fractions of the area height: dates on top, the line at about a
    quarter, titles and descriptions underneath.
    """
    theme = b.ctx.theme
    region = render_chrome(b, item.title)
    area = region.below(place_message(b, region, item.message))

    events = [e for e in item.timeline or [] if has_text(e.title) or has_text(e.date)][
        :TIMELINE_CAP
    ]
    if not events:
        return
    h = area.height
    date_h = h * 0.2
    line_y = area.y + h * 0.245
    line_w = min(3.0, h * 0.01)
    dot = min(TIMELINE_DOT, h * 0.05)
    slot_w = area.width / len(events)

    b.rect(
        Box(x=area.x, y=line_y - line_w / 2, width=area.width, height=line_w),
        theme.panel,
        "timeline_line",
    )

    for i, event in enumerate(events):
        slot_x = area.x + i * slot_w
        center = slot_x + slot_w / 2
        text_w = slot_w - 8
        size = fit_single_line(event.date, text_w, 14, 9, b.ctx.measurer)
        b.text(
            event.date,
            Box(x=slot_x + 4, y=area.y, width=text_w, height=date_h),
            "timeline_date",
            size,
            color=b.ctx.color(i),
            bold=True,
            align=Align.center,
        )
        b.shape(
            ShapeKind.ellipse,
            Box(x=center - dot / 2, y=line_y - dot / 2, width=dot, height=dot),
            b.ctx.color(i),
            "timeline_dot",
        )
        title_box = Box(x=slot_x + 4, y=line_y + h * 0.05, width=text_w, height=h * 0.13)
        size = fit_multi_line(event.title, text_w, title_box.height, 14, 9, b.ctx.measurer)
        b.text(event.title, title_box, "timeline_title", size, bold=True, align=Align.center)
        if has_text(event.description):
            desc_top = title_box.bottom + h * 0.013
            desc_box = Box(
                x=slot_x + 4,
                y=desc_top,
                width=text_w,
                height=area.remaining_height(desc_top),
            )
            size = fit_multi_line(
                event.description, text_w, desc_box.height, 11, 9, b.ctx.measurer
            )
            b.text(
                event.description,
                desc_box,
                "timeline_description",
                size,
                color=theme.muted_text,
                align=Align.center,
            )


def render_cycle(b: SlideBuilder, item: ContentItem) -> None:
    """Nodes on a circle around a hub, arrows between neighbours.

    Hub and node sizes scale with the region height; the radius keeps every
    node inside the region.
    """
    theme = b.ctx.theme
    region = render_chrome(b, item.title)

    nodes = _steps(item.cycle, CYCLE_CAP)
    if not nodes:
        return
    count = len(nodes)
    node_w = min(120.0 if count <= 4 else 92.0, region.width / 3)
    node_h = min(CYCLE_NODE_HEIGHT, region.height * 0.18)
    hub_d = min(CYCLE_HUB, region.height * 0.31)
    cx, cy = region.center_x, region.center_y
    radius = max(
        0.0,
        min(CYCLE_RADIUS, region.height / 2 - node_h / 2, region.width / 2 - node_w / 2),
    )

    hub = Box(x=cx - hub_d / 2, y=cy - hub_d / 2, width=hub_d, height=hub_d)
    b.shape(ShapeKind.ellipse, hub, theme.primary, "cycle_hub")
    if has_text(item.message):
        inner = hub.inset(hub_d * 0.15, hub_d * 0.15)
        size = fit_multi_line(item.message, inner.width, inner.height, 13, 9, b.ctx.measurer)
        b.text(
            item.message,
            inner,
            "cycle_hub",
            size,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )

    for i, node in enumerate(nodes):
        angle = i * 2 * math.pi / count - math.pi / 2
        box = Box(
            x=cx + radius * math.cos(angle) - node_w / 2,
            y=cy + radius * math.sin(angle) - node_h / 2,
            width=node_w,
            height=node_h,
        )
        b.shape(ShapeKind.round_rectangle, box, b.ctx.color(i), "cycle_node")
        described = has_text(node.description)
        title_box = Box(
            x=box.x + 6,
            y=box.y + node_h * 0.07,
            width=node_w - 12,
            height=node_h * (0.39 if described else 0.86),
        )
        size = fit_single_line(node.title, title_box.width, 13, 9, b.ctx.measurer)
        b.text(
            node.title,
            title_box,
            "cycle_title",
            size,
            color=theme.light_text,
            bold=True,
            align=Align.center,
        )
        if described:
            desc_box = Box(
                x=box.x + 6, y=box.y + node_h * 0.46, width=node_w - 12, height=node_h * 0.46
            )
            size = fit_multi_line(
                node.description, desc_box.width, desc_box.height, 10, 9, b.ctx.measurer
            )
            b.text(
                node.description,
                desc_box,
                "cycle_description",
                size,
                color=theme.light_text,
                align=Align.center,
            )

    if count < 2:
        return
    arrow = min(CYCLE_ARROW, node_h / 2)
    for i in range(count):
        mid = (i + 0.5) * 2 * math.pi / count - math.pi / 2
        ax = cx + radius * math.cos(mid)
        ay = cy + radius * math.sin(mid)
        b.text(
            "→",
            Box(x=ax - arrow / 2, y=ay - arrow / 2, width=arrow, height=arrow),
            "cycle_arrow",
            14,
            color=theme.accent,
            bold=True,
            align=Align.center,
        )

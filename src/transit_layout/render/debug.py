"""SVG debug drawing of computed station placements.

Each laid-out line is drawn in its own column: the line through its
markers, the markers, the label text at its anchor, and the label box
and safe areas as outlines.
"""

from __future__ import annotations

__all__ = ["render_debug_svg"]

from collections.abc import Mapping, Sequence

import drawsvg as draw

from transit_layout.geometry.point import Box
from transit_layout.layout.config import LayoutConfig
from transit_layout.layout.constants import DEFAULT_FONT_FAMILY
from transit_layout.layout.positions import StationPosition
from transit_layout.render.constants import (
    BACKGROUND_COLOR,
    DEBUG_LINE_GAP,
    DEBUG_MARGIN,
    DEBUG_STROKE_WIDTH,
    DEFAULT_LINE_COLOR,
    LABEL_BOX_COLOR,
    LABEL_COLOR,
    MARKER_FILL,
    SAFE_AREA_COLOR,
    SAFE_AREA_DASH,
)


def render_debug_svg(
    layouts: Mapping[str, Sequence[StationPosition]],
    config: LayoutConfig,
    colors: Mapping[str, str | None] | None = None,
    font_family: str | None = None,
    show_boxes: bool = True,
) -> str:
    """Draw every line of *layouts* side by side and return the SVG text.

    *layouts* maps line ids to their placements; *colors* maps line ids
    to stroke colours.
    """
    colors = colors or {}
    family = font_family or DEFAULT_FONT_FAMILY

    columns = []
    x = DEBUG_MARGIN
    height = 0.0
    for line_id, positions in layouts.items():
        if not positions:
            continue
        bounds = _extent(positions)
        columns.append((line_id, positions, x - bounds.min.x, DEBUG_MARGIN - bounds.min.y))
        x += bounds.width + DEBUG_LINE_GAP
        height = max(height, bounds.height)

    width = max(x - DEBUG_LINE_GAP + DEBUG_MARGIN, 2 * DEBUG_MARGIN)
    d = draw.Drawing(width, height + 2 * DEBUG_MARGIN)
    d.append(draw.Rectangle(0, 0, width, height + 2 * DEBUG_MARGIN, fill=BACKGROUND_COLOR))

    for line_id, positions, dx, dy in columns:
        group = draw.Group(id=f"line-{line_id}", transform=f"translate({dx},{dy})")
        color = colors.get(line_id) or DEFAULT_LINE_COLOR
        _draw_track(group, positions, config, color)
        for position in positions:
            if show_boxes:
                _draw_boxes(group, position)
            _draw_marker(group, position, config, color)
            _draw_label(group, position, config, family)
        d.append(group)

    return d.as_svg()


def _extent(positions: Sequence[StationPosition]) -> Box:
    return Box.bounds(
        [p.marker for p in positions],
        [p.label for p in positions],
        [p.safe_areas for p in positions],
    )


def _draw_track(
    group: draw.Group,
    positions: Sequence[StationPosition],
    config: LayoutConfig,
    color: str,
) -> None:
    if len(positions) < 2:
        return
    coords = [c for p in positions for c in (p.marker.x, p.marker.y)]
    group.append(
        draw.Lines(
            *coords,
            close=False,
            fill="none",
            stroke=color,
            stroke_width=config.line_width,
            stroke_linecap="round",
            stroke_linejoin="round",
        )
    )


def _draw_marker(
    group: draw.Group, position: StationPosition, config: LayoutConfig, color: str
) -> None:
    # Markers on diagonal lines are shrunk; scale the circle with them
    scale = position.marker.width / config.station_width if config.station_width else 1
    group.append(
        draw.Circle(
            position.marker.x,
            position.marker.y,
            config.marker.radius * scale,
            fill=MARKER_FILL,
            stroke=color,
            stroke_width=config.marker.stroke_width * scale,
        )
    )


def _draw_label(
    group: draw.Group, position: StationPosition, config: LayoutConfig, family: str
) -> None:
    spacing = config.label.line_spacing
    for i, text in enumerate(position.lines):
        group.append(
            draw.Text(
                text,
                config.label.font_size,
                position.label.x,
                position.label.y + i * spacing,
                fill=LABEL_COLOR,
                font_family=family,
                font_weight=config.label.font_weight,
                text_anchor=position.text_anchor,
                dominant_baseline=position.dominant_baseline,
            )
        )


def _draw_boxes(group: draw.Group, position: StationPosition) -> None:
    for box in position.safe_areas:
        group.append(_outline(box, SAFE_AREA_COLOR, dash=SAFE_AREA_DASH))
    group.append(_outline(position.label.box, LABEL_BOX_COLOR))


def _outline(box: Box, color: str, dash: str | None = None) -> draw.Rectangle:
    kwargs = {"stroke_dasharray": dash} if dash else {}
    return draw.Rectangle(
        box.min.x,
        box.min.y,
        box.width,
        box.height,
        fill="none",
        stroke=color,
        stroke_width=DEBUG_STROKE_WIDTH,
        **kwargs,
    )

"""Candidate marker/label positions for a single station.

Generators know nothing about neighbouring stations. For a line heading
in some compass direction and a chosen side, they place the marker at
the origin and the label beside it, once per available wrapping of the
label text. The line orchestrator picks among these candidates.

Vertical lines (n/s) put labels to the left or right of the marker,
horizontal lines (e/w) above or below it, and diagonal lines put them
off a corner of the (shrunken) marker.
"""

from __future__ import annotations

__all__ = [
    "GENERATORS",
    "LINE_ENDS",
    "PositionGenerator",
    "StationPosition",
    "generate_positions",
]

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.padding import Padding
from transit_layout.geometry.point import ORIGIN, Box, Point, RangedPoint
from transit_layout.layout.config import LayoutConfig
from transit_layout.layout.constants import DIAGONAL_SHRINK
from transit_layout.layout.direction import Direction, Side
from transit_layout.layout.measure import LabelBoxGetter
from transit_layout.layout.text_wrap import TextBox
from transit_layout.parser.model import Station

LINE_ENDS = ("start", "end")


@dataclass(frozen=True)
class StationPosition:
    """Where a station's marker and label go, and how to judge the choice.

    ``safe_areas`` are padded boxes that later stations must keep clear
    of. ``trim`` holds the label box with the part beyond the line's
    start or end clipped away, for use at the first and last station.
    ``score`` maps the previous station's side (or "none" when there is
    no previous side) to a cost; other sides cost ``score["default"]``.
    """

    station: Station
    marker: RangedPoint
    label: RangedPoint
    lines: tuple[str, ...]
    side: Side
    direction: Direction
    text_anchor: str
    dominant_baseline: str
    safe_areas: tuple[Box, ...]
    trim: Mapping[str, Box] = field(default_factory=dict)
    score: Mapping[str, int] = field(default_factory=dict)
    # Minimal distance along the line from the previous station
    offset: float = 0.0
    cost: int | None = None

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def score_for(self, previous_side: Side | None) -> int:
        key = previous_side.value if previous_side is not None else "none"
        return self.score.get(key, self.score["default"])

    def label_box(self, end: str | None = None) -> Box:
        """The label box, trimmed for *end* ("start"/"end") when a rule exists."""
        if end is not None and end in self.trim:
            return self.trim[end]
        return self.label.box

    def offset_by(self, shift: PointOffset) -> StationPosition:
        return replace(
            self,
            marker=self.marker.offset(shift),
            label=self.label.offset(shift),
            safe_areas=tuple(box.offset(shift) for box in self.safe_areas),
            trim={end: box.offset(shift) for end, box in self.trim.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "station": self.station.name,
            "side": self.side.value,
            "direction": self.direction.value,
            "lines": list(self.lines),
            "textAnchor": self.text_anchor,
            "dominantBaseline": self.dominant_baseline,
            "marker": _ranged_point_dict(self.marker),
            "label": _ranged_point_dict(self.label),
            "safeAreas": [_box_dict(box) for box in self.safe_areas],
            "offset": self.offset,
            "cost": self.cost,
        }


Generate = Callable[
    [Station, Direction, Side, LayoutConfig, LabelBoxGetter], list[StationPosition]
]


@dataclass(frozen=True)
class PositionGenerator:
    name: str
    directions: frozenset[Direction]
    generate: Generate


def generate_positions(
    station: Station,
    direction: Direction,
    side: Side,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
) -> list[StationPosition]:
    """All candidates for *station* on a line heading in *direction*."""
    positions: list[StationPosition] = []
    for generator in GENERATORS:
        if direction in generator.directions:
            positions.extend(
                generator.generate(station, direction, side, config, get_label_boxes)
            )
    return positions


def _vertical_positions(
    station: Station,
    direction: Direction,
    side: Side,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
) -> list[StationPosition]:
    label_direction = direction.label_direction(side)
    to_right = label_direction.vector.dx > 0
    text_anchor = "start" if to_right else "end"
    gap = config.marker_label_gap
    marker = _marker(config)

    positions = []
    for box in get_label_boxes(
        station, text_anchor=text_anchor, dominant_baseline="alphabetic"
    ):
        x = marker.max.x + gap.x if to_right else marker.min.x - gap.x
        # Centre the whole label block on the marker, whatever its line count
        y = marker.y - (box.y + box.height / 2)
        label = Point(x, y).with_size_from_box(box)
        positions.append(
            _position(
                station,
                marker,
                label,
                box,
                side,
                label_direction,
                text_anchor,
                "alphabetic",
                safe_areas=_safe_areas(config, marker, label),
                trim=_trim(label.box, "y", marker.y, direction.vector.dy),
            )
        )
    return positions


def _horizontal_positions(
    station: Station,
    direction: Direction,
    side: Side,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
) -> list[StationPosition]:
    label_direction = direction.label_direction(side)
    above = label_direction.vector.dy < 0
    gap = config.marker_label_gap
    marker = _marker(config)

    positions = []
    for box in get_label_boxes(
        station, text_anchor="middle", dominant_baseline="alphabetic"
    ):
        if above:
            y = marker.min.y - gap.y - (box.y + box.height)
        else:
            y = marker.max.y + gap.y - box.y
        label = Point(marker.x, y).with_size_from_box(box)
        positions.append(
            _position(
                station,
                marker,
                label,
                box,
                side,
                label_direction,
                "middle",
                "alphabetic",
                safe_areas=_safe_areas(config, marker, label, extra_y=gap.y * 2),
                trim=_trim(label.box, "x", marker.x, direction.vector.dx),
            )
        )
    return positions


def _diagonal_positions(
    station: Station,
    direction: Direction,
    side: Side,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
) -> list[StationPosition]:
    label_direction = direction.label_direction(side)
    ux, uy = label_direction.vector.dx, label_direction.vector.dy
    text_anchor = "start" if ux > 0 else "end"
    baseline = "hanging" if uy > 0 else "alphabetic"
    gap = config.marker_label_gap
    marker = _marker(config, scale=DIAGONAL_SHRINK)

    anchor = Point(
        marker.x + ux * (marker.width / 2 + gap.x * DIAGONAL_SHRINK),
        marker.y + uy * (marker.height / 2 + gap.y * DIAGONAL_SHRINK),
    )
    positions = []
    for box in get_label_boxes(
        station, text_anchor=text_anchor, dominant_baseline=baseline
    ):
        # Below the marker the label hangs from the anchor, above it rests on it
        dy = -box.y if uy > 0 else -(box.y + box.height)
        label = anchor.offset(0, dy).with_size_from_box(box)
        positions.append(
            _position(
                station,
                marker,
                label,
                box,
                side,
                label_direction,
                text_anchor,
                baseline,
                safe_areas=_safe_areas(config, marker, label, extra_y=gap.y * 2),
            )
        )
    return positions


GENERATORS: tuple[PositionGenerator, ...] = (
    PositionGenerator(
        "vertical", frozenset({Direction.N, Direction.S}), _vertical_positions
    ),
    PositionGenerator(
        "horizontal", frozenset({Direction.E, Direction.W}), _horizontal_positions
    ),
    PositionGenerator(
        "diagonal",
        frozenset({Direction.NE, Direction.SE, Direction.SW, Direction.NW}),
        _diagonal_positions,
    ),
)


def _marker(config: LayoutConfig, scale: float = 1.0) -> RangedPoint:
    marker = ORIGIN.with_size(
        config.station_width * scale, config.station_height * scale
    )
    return marker.with_box(marker.box.with_(label="marker"))


def _position(
    station: Station,
    marker: RangedPoint,
    label: RangedPoint,
    box: TextBox,
    side: Side,
    label_direction: Direction,
    text_anchor: str,
    dominant_baseline: str,
    safe_areas: tuple[Box, ...],
    trim: Mapping[str, Box] | None = None,
) -> StationPosition:
    return StationPosition(
        station=station,
        marker=marker,
        label=label,
        lines=box.lines,
        side=side,
        direction=label_direction,
        text_anchor=text_anchor,
        dominant_baseline=dominant_baseline,
        safe_areas=safe_areas,
        trim=trim or {},
        score={
            side.value: box.line_count,
            "none": box.line_count,
            # Switching sides costs as much as one more line of text
            "default": box.line_count + 1,
        },
    )


def _safe_areas(
    config: LayoutConfig,
    marker: RangedPoint,
    label: RangedPoint,
    extra_y: float = 0.0,
) -> tuple[Box, ...]:
    return (
        marker.box.with_padding(_padding(config.marker_spacing, extra_y)).with_(
            label="marker-safe"
        ),
        label.box.with_padding(_padding(config.label_spacing, extra_y)).with_(
            label="label-safe"
        ),
    )


def _padding(spacing, extra_y: float) -> Padding:
    return Padding(
        top=spacing.y + extra_y,
        bottom=spacing.y + extra_y,
        left=spacing.x,
        right=spacing.x,
    )


def _trim(box: Box, axis: str, center: float, sign: float) -> dict[str, Box]:
    """Label boxes clipped at the marker centre beyond the line's start/end.

    *sign* is the line's heading along *axis*: the start lies on the
    negative side of a line heading positive, and vice versa.
    """
    if axis == "x":
        lo, hi = box.min.x, box.max.x
    else:
        lo, hi = box.min.y, box.max.y
    low_clipped = (max(lo, min(center, hi)), hi)
    high_clipped = (lo, min(hi, max(center, lo)))
    start, end = (low_clipped, high_clipped) if sign > 0 else (high_clipped, low_clipped)

    def clipped(bounds: tuple[float, float]) -> Box:
        if axis == "x":
            return box.with_(min_x=bounds[0], max_x=bounds[1])
        return box.with_(min_y=bounds[0], max_y=bounds[1])

    return {"start": clipped(start), "end": clipped(end)}


def _box_dict(box: Box) -> dict[str, float]:
    return {"minX": box.min.x, "minY": box.min.y, "maxX": box.max.x, "maxY": box.max.y}


def _ranged_point_dict(point: RangedPoint) -> dict[str, Any]:
    return {"x": point.x, "y": point.y, "box": _box_dict(point.box)}

"""Layout configuration: user overrides merged over fixed defaults.

Network documents carry a partial, camelCase configuration. Partials
can be layered with ``merge_layout_config`` and are finally resolved by
``complete_layout_config`` into a frozen ``LayoutConfig`` in which every
field is set.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LAYOUT_CONFIG",
    "LabelConfig",
    "LayoutConfig",
    "LayoutConfigError",
    "MarkerConfig",
    "complete_layout_config",
    "merge_layout_config",
]

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from transit_layout.geometry.bounded_box import BoundedBox
from transit_layout.geometry.padding import Padding, Spacing
from transit_layout.layout.constants import (
    CURVE_RADIUS,
    LABEL_FONT_SIZE,
    LABEL_FONT_WEIGHT,
    LABEL_FONT_WEIGHT_MAX,
    LABEL_FONT_WEIGHT_MIN,
    LINE_HEIGHT_EM,
    LINE_WIDTH,
    MARKER_RADIUS,
    MARKER_STROKE_WIDTH,
)


class LayoutConfigError(ValueError):
    """A layout configuration value is out of range or malformed."""


@dataclass(frozen=True)
class MarkerConfig:
    radius: float = MARKER_RADIUS
    stroke_width: float = MARKER_STROKE_WIDTH


@dataclass(frozen=True)
class LabelConfig:
    font_size: float = LABEL_FONT_SIZE
    font_weight: int = LABEL_FONT_WEIGHT
    line_height: float | None = None

    @property
    def line_spacing(self) -> float:
        """Distance in pixels between consecutive baselines."""
        factor = LINE_HEIGHT_EM if self.line_height is None else self.line_height
        return self.font_size * factor


@dataclass(frozen=True)
class LayoutConfig:
    padding: Padding = field(default_factory=Padding)
    marker_spacing: Spacing = field(default_factory=Spacing)
    label_spacing: Spacing = field(default_factory=Spacing)
    marker_label_gap: Spacing = field(default_factory=Spacing)
    line_width: float = LINE_WIDTH
    # Exactly one of curve_radius / curve_curvature is set. They shape the
    # track drawn between stations; placement does not read them.
    curve_radius: float | None = CURVE_RADIUS
    curve_curvature: float | None = None
    marker: MarkerConfig = field(default_factory=MarkerConfig)
    label: LabelConfig = field(default_factory=LabelConfig)

    @property
    def station_width(self) -> float:
        """Marker footprint: the line itself or the stroked marker, whichever is larger."""
        return max(
            self.line_width, self.marker.radius * 2 + self.marker.stroke_width * 2
        )

    @property
    def station_height(self) -> float:
        return self.station_width

    def drawing_bounds(
        self, max_width: float | None = None, max_height: float | None = None
    ) -> BoundedBox:
        """Bounds for placements in a drawing of at most the given size.

        The configured padding surrounds the placements, so it comes off
        each cap.
        """
        pad = self.padding
        return BoundedBox.unbounded(
            max_width=None if max_width is None else max_width - pad.left - pad.right,
            max_height=None if max_height is None else max_height - pad.top - pad.bottom,
        )


DEFAULT_LAYOUT_CONFIG = LayoutConfig()

_GROUPS = ("spacing", "gap", "marker", "label")


def merge_layout_config(
    partial: Mapping[str, Any] | None, other: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Layer *partial* over *other*: per field, the first non-None value wins.

    Grouped settings (spacing, gap, marker, label) merge one level deep;
    ``padding`` and ``curve`` are replaced as a whole.
    """
    partial = partial or {}
    other = other or {}
    merged: dict[str, Any] = {}
    for key in ("padding", "lineWidth", "curve"):
        value = _first(partial.get(key), other.get(key))
        if value is not None:
            merged[key] = value
    for group in _GROUPS:
        mine = partial.get(group) or {}
        theirs = other.get(group) or {}
        combined = {
            k: _first(mine.get(k), theirs.get(k)) for k in {**theirs, **mine}
        }
        combined = {k: v for k, v in combined.items() if v is not None}
        if combined:
            merged[group] = combined
    return merged


def complete_layout_config(partial: Mapping[str, Any] | None = None) -> LayoutConfig:
    """Resolve a partial (document-style) configuration over the defaults."""
    data = merge_layout_config(partial, None)
    spacing = data.get("spacing", {})
    gap = data.get("gap", {})
    marker = data.get("marker", {})
    label = data.get("label", {})

    curve_radius, curve_curvature = _curve(data.get("curve"))
    try:
        padding = Padding.of(data.get("padding", 0))
        marker_spacing = Spacing.of(spacing.get("marker", 0))
        label_spacing = Spacing.of(spacing.get("label", 0))
        marker_label_gap = Spacing.of(gap.get("markerLabel", 0))
    except (TypeError, ValueError) as e:
        raise LayoutConfigError(str(e)) from e

    for name, value in (
        ("padding", padding),
        ("spacing.marker", marker_spacing),
        ("spacing.label", label_spacing),
        ("gap.markerLabel", marker_label_gap),
    ):
        _check_non_negative(name, *vars(value).values())

    line_width = _number("lineWidth", data.get("lineWidth", LINE_WIDTH))
    marker_radius = _number("marker.radius", marker.get("radius", MARKER_RADIUS))
    stroke_width = _number(
        "marker.strokeWidth", marker.get("strokeWidth", MARKER_STROKE_WIDTH)
    )
    _check_non_negative("lineWidth", line_width)
    _check_non_negative("marker.radius", marker_radius)
    _check_non_negative("marker.strokeWidth", stroke_width)

    font_size = _number("label.fontSize", label.get("fontSize", LABEL_FONT_SIZE))
    if font_size < 1:
        raise LayoutConfigError(f"label.fontSize must be at least 1, got {font_size}")
    font_weight = _number(
        "label.fontWeight", label.get("fontWeight", LABEL_FONT_WEIGHT)
    )
    if not LABEL_FONT_WEIGHT_MIN <= font_weight <= LABEL_FONT_WEIGHT_MAX:
        raise LayoutConfigError(
            f"label.fontWeight must be between {LABEL_FONT_WEIGHT_MIN} and "
            f"{LABEL_FONT_WEIGHT_MAX}, got {font_weight}"
        )
    line_height = label.get("lineHeight")
    if line_height is not None:
        line_height = _number("label.lineHeight", line_height)

    return LayoutConfig(
        padding=padding,
        marker_spacing=marker_spacing,
        label_spacing=label_spacing,
        marker_label_gap=marker_label_gap,
        line_width=line_width,
        curve_radius=curve_radius,
        curve_curvature=curve_curvature,
        marker=MarkerConfig(radius=marker_radius, stroke_width=stroke_width),
        label=LabelConfig(
            font_size=font_size, font_weight=int(font_weight), line_height=line_height
        ),
    )


def _curve(curve: Mapping[str, Any] | None) -> tuple[float | None, float | None]:
    if curve is None:
        return CURVE_RADIUS, None
    if "radius" in curve:
        radius = _number("curve.radius", curve["radius"])
        _check_non_negative("curve.radius", radius)
        return radius, None
    if "curvature" in curve:
        curvature = _number("curve.curvature", curve["curvature"])
        _check_non_negative("curve.curvature", curvature)
        return None, curvature
    raise LayoutConfigError("curve must specify either 'radius' or 'curvature'")


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutConfigError(f"{name} must be a number, got {value!r}")
    return value


def _check_non_negative(name: str, *values: float) -> None:
    for value in values:
        _number(name, value)
        if value < 0:
            raise LayoutConfigError(f"{name} must not be negative, got {value}")


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None

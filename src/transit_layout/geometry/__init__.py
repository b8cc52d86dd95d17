"""Geometric value objects used by the layout engine."""

from transit_layout.geometry.bounded_box import BoundedBox
from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.padding import Padding, PaddingLike, Spacing, SpacingLike
from transit_layout.geometry.point import ORIGIN, Box, Boxlike, Point, RangedPoint
from transit_layout.geometry.separation import pair_separation_factor, separation_factor

__all__ = [
    "ORIGIN",
    "BoundedBox",
    "Box",
    "Boxlike",
    "Padding",
    "PaddingLike",
    "Point",
    "PointOffset",
    "RangedPoint",
    "Spacing",
    "SpacingLike",
    "pair_separation_factor",
    "separation_factor",
]

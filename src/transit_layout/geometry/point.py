"""Immutable points and axis-aligned boxes.

``RangedPoint`` pairs an anchor point with the box it occupies so a
station's coordinate and its extent are always offset together. It is
exposed through two views: ``.point`` for point operations and ``.box``
for box operations.
"""

from __future__ import annotations

__all__ = ["ORIGIN", "Box", "Boxlike", "Point", "RangedPoint"]

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Protocol, Union

from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.padding import Padding, PaddingLike


class _SizedBox(Protocol):
    """Anything shaped like a text metric box (origin relative to an anchor)."""

    x: float
    y: float
    width: float
    height: float


def _delta(dx: float | PointOffset, dy: float) -> tuple[float, float]:
    if isinstance(dx, PointOffset):
        return dx.dx, dx.dy
    return dx, dy


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def with_(self, x: float | None = None, y: float | None = None) -> Point:
        return Point(self.x if x is None else x, self.y if y is None else y)

    def offset(self, dx: float | PointOffset = 0.0, dy: float = 0.0) -> Point:
        dx, dy = _delta(dx, dy)
        return Point(self.x + dx, self.y + dy)

    def offset_to(self, other: Point) -> PointOffset:
        return PointOffset(other.x - self.x, other.y - self.y)

    def to_box(self) -> Box:
        return Box(self, self)

    def with_range(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> RangedPoint:
        """Attach raw min/max bounds to this point."""
        return RangedPoint(self, Box.from_coords(min_x, min_y, max_x, max_y))

    def with_size(self, width: float, height: float) -> RangedPoint:
        """Attach a box of the given size centred on this point."""
        return self.with_range(
            self.x - width / 2,
            self.y - height / 2,
            self.x + width / 2,
            self.y + height / 2,
        )

    def with_box(self, box: Box) -> RangedPoint:
        return RangedPoint(self, box)

    def with_size_from_box(self, box: _SizedBox, label: str | None = None) -> RangedPoint:
        """Attach a text-metric box whose origin is relative to this point.

        ``box.x``/``box.y`` carry the bearing of the measured text
        relative to its anchor (e.g. a negative ``y`` for the ascent
        above an alphabetic baseline).
        """
        return RangedPoint(
            self,
            Box.from_coords(
                self.x + box.x,
                self.y + box.y,
                self.x + box.x + box.width,
                self.y + box.y + box.height,
                label=label if label is not None else getattr(box, "label", None),
            ),
        )


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle.

    ``min <= max`` is not enforced; empty bounds are represented by an
    inverted infinite box. ``label`` tags the role of the box (marker,
    label, safe area) and never affects geometry.
    """

    min: Point
    max: Point
    label: str | None = None

    @classmethod
    def from_coords(
        cls,
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
        label: str | None = None,
    ) -> Box:
        return cls(Point(min_x, min_y), Point(max_x, max_y), label)

    @classmethod
    def empty(cls) -> Box:
        return cls.from_coords(math.inf, math.inf, -math.inf, -math.inf)

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)

    def to_box(self) -> Box:
        return self

    def offset(self, dx: float | PointOffset = 0.0, dy: float = 0.0) -> Box:
        dx, dy = _delta(dx, dy)
        return Box(self.min.offset(dx, dy), self.max.offset(dx, dy), self.label)

    def with_(
        self,
        min_x: float | None = None,
        min_y: float | None = None,
        max_x: float | None = None,
        max_y: float | None = None,
        label: str | None = None,
    ) -> Box:
        return Box.from_coords(
            self.min.x if min_x is None else min_x,
            self.min.y if min_y is None else min_y,
            self.max.x if max_x is None else max_x,
            self.max.y if max_y is None else max_y,
            label=self.label if label is None else label,
        )

    def with_padding(self, padding: PaddingLike) -> Box:
        pad = Padding.of(padding)
        return Box.from_coords(
            self.min.x - pad.left,
            self.min.y - pad.top,
            self.max.x + pad.right,
            self.max.y + pad.bottom,
            label=self.label,
        )

    def contains(self, other: Box) -> bool:
        return (
            self.min.x <= other.min.x
            and self.min.y <= other.min.y
            and self.max.x >= other.max.x
            and self.max.y >= other.max.y
        )

    @staticmethod
    def bounds(*items: Boxlike | Iterable[Boxlike]) -> Box:
        """Smallest box enclosing every given point or box.

        Accepts points and boxes as separate arguments or as iterables.
        With nothing to enclose the result is ``Box.empty()``.
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for item in _flatten(items):
            box = item.to_box()
            min_x = min(min_x, box.min.x)
            min_y = min(min_y, box.min.y)
            max_x = max(max_x, box.max.x)
            max_y = max(max_y, box.max.y)
        return Box.from_coords(min_x, min_y, max_x, max_y)

    @staticmethod
    def overlaps(a: Boxlike, b: Boxlike) -> bool:
        """Strict overlap test: boxes sharing only an edge do not overlap."""
        a = a.to_box()
        b = b.to_box()
        return (
            a.max.x > b.min.x
            and a.min.x < b.max.x
            and a.max.y > b.min.y
            and a.min.y < b.max.y
        )


@dataclass(frozen=True)
class RangedPoint:
    """A point carrying the box it occupies."""

    point: Point
    box: Box

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    @property
    def min(self) -> Point:
        return self.box.min

    @property
    def max(self) -> Point:
        return self.box.max

    @property
    def label(self) -> str | None:
        return self.box.label

    @property
    def width(self) -> float:
        return self.box.width

    @property
    def height(self) -> float:
        return self.box.height

    @property
    def area(self) -> float:
        return self.box.area

    def to_box(self) -> Box:
        return self.box

    def offset(self, dx: float | PointOffset = 0.0, dy: float = 0.0) -> RangedPoint:
        dx, dy = _delta(dx, dy)
        return RangedPoint(self.point.offset(dx, dy), self.box.offset(dx, dy))

    def with_box(self, box: Box) -> RangedPoint:
        return replace(self, box=box)

    def with_padding(self, padding: PaddingLike) -> RangedPoint:
        return replace(self, box=self.box.with_padding(padding))


Boxlike = Union[Point, Box, RangedPoint]


def _flatten(items: Iterable) -> Iterable[Boxlike]:
    for item in items:
        if isinstance(item, (Point, Box, RangedPoint)):
            yield item
        else:
            yield from _flatten(item)

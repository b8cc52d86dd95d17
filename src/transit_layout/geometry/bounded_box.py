"""Running bounding box checked against maximum dimensions."""

from __future__ import annotations

__all__ = ["BoundedBox"]

import math
from dataclasses import dataclass, field
from functools import cached_property

from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.point import Box, Boxlike


@dataclass(frozen=True)
class BoundedBox:
    """The bounds of everything placed so far, plus width/height caps.

    Instances never change: ``add`` returns a new BoundedBox, so a
    layout attempt can be abandoned and retried from any earlier state.
    """

    min_box: Box = field(default_factory=Box.empty)
    max_width: float = math.inf
    max_height: float = math.inf

    @classmethod
    def unbounded(
        cls, max_width: float | None = None, max_height: float | None = None
    ) -> BoundedBox:
        """An empty box with optional caps (None means no cap)."""
        return cls(
            max_width=math.inf if max_width is None else max_width,
            max_height=math.inf if max_height is None else max_height,
        )

    @classmethod
    def from_box(
        cls, box: Box, max_width: float = math.inf, max_height: float = math.inf
    ) -> BoundedBox:
        return cls(min_box=box, max_width=max_width, max_height=max_height)

    @property
    def is_bounded(self) -> bool:
        return not (math.isinf(self.max_width) and math.isinf(self.max_height))

    @cached_property
    def valid(self) -> bool:
        return self._fits(self.min_box)

    def to_box(self) -> Box:
        return self.min_box

    def add(self, *boxes: Boxlike) -> BoundedBox:
        return BoundedBox(
            min_box=Box.bounds(self.min_box, boxes),
            max_width=self.max_width,
            max_height=self.max_height,
        )

    def offset(self, dx: float | PointOffset = 0.0, dy: float = 0.0) -> BoundedBox:
        """The same contents and caps, seen from a shifted origin."""
        return BoundedBox(
            min_box=self.min_box.offset(dx, dy),
            max_width=self.max_width,
            max_height=self.max_height,
        )

    def can_fit(self, *boxes: Boxlike) -> bool:
        return self._fits(Box.bounds(self.min_box, boxes))

    def headroom(self) -> tuple[float, float]:
        """Remaining (width, height) before the caps are reached."""
        return (
            _remaining(self.max_width, self.min_box.width),
            _remaining(self.max_height, self.min_box.height),
        )

    def _fits(self, box: Box) -> bool:
        return box.width <= self.max_width and box.height <= self.max_height


def _remaining(cap: float, size: float) -> float:
    if math.isinf(cap):
        return math.inf
    # An empty box has a size of -inf; nothing is used yet.
    return cap - max(size, 0.0)

"""Displacement vectors."""

from __future__ import annotations

__all__ = ["PointOffset"]

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PointOffset:
    """A displacement ``(dx, dy)`` in drawing coordinates (y grows downward)."""

    dx: float = 0.0
    dy: float = 0.0

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    def scale(self, factor: float) -> PointOffset:
        return PointOffset(self.dx * factor, self.dy * factor)

    def unit(self) -> PointOffset:
        """Same direction, length 1. A zero vector stays zero."""
        length = self.length
        if length == 0:
            return PointOffset(0.0, 0.0)
        return PointOffset(self.dx / length, self.dy / length)

    def perpendicular(self) -> PointOffset:
        """Rotate by 90 degrees clockwise on screen."""
        return PointOffset(-self.dy, self.dx)

    def parallel_in_same_direction(self, other: PointOffset) -> bool:
        """True if both vectors are parallel and point the same way."""
        cross = self.dx * other.dy - self.dy * other.dx
        dot = self.dx * other.dx + self.dy * other.dy
        return cross == 0 and dot > 0

    def __neg__(self) -> PointOffset:
        return PointOffset(-self.dx, -self.dy)

"""Compass directions and the left/right side of a line.

Directions form an 8-step ring. A label on the *left* of a line heading
in direction ``d`` sits two steps counter-clockwise from ``d``; on the
*right*, two steps clockwise.
"""

from __future__ import annotations

__all__ = ["Direction", "Side"]

from enum import Enum

from transit_layout.geometry.offset import PointOffset


class Side(Enum):
    """Side of the line a label sits on, independent of compass direction."""

    LEFT = "left"
    RIGHT = "right"


class Direction(Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"

    @property
    def vector(self) -> PointOffset:
        """Canonical offset for this direction (screen coordinates, y down)."""
        return _VECTORS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.N, Direction.S)

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.E, Direction.W)

    @property
    def is_diagonal(self) -> bool:
        return not (self.is_vertical or self.is_horizontal)

    def rotate(self, steps: int) -> Direction:
        """Rotate clockwise by *steps* eighths of a turn."""
        return _RING[(_RING.index(self) + steps) % len(_RING)]

    def label_direction(self, side: Side) -> Direction:
        """Where a label sits for a line running in this direction."""
        return self.rotate(_SIDE_STEPS[side])

    def side_of(self, label_direction: Direction) -> Side | None:
        """Inverse of ``label_direction``; None if neither side matches."""
        for side in Side:
            if self.label_direction(side) is label_direction:
                return side
        return None


_RING = list(Direction)

_SIDE_STEPS = {Side.LEFT: -2, Side.RIGHT: 2}

_VECTORS = {
    Direction.N: PointOffset(0, -1),
    Direction.NE: PointOffset(1, -1),
    Direction.E: PointOffset(1, 0),
    Direction.SE: PointOffset(1, 1),
    Direction.S: PointOffset(0, 1),
    Direction.SW: PointOffset(-1, 1),
    Direction.W: PointOffset(-1, 0),
    Direction.NW: PointOffset(-1, -1),
}

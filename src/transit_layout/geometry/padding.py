"""Asymmetric padding and symmetric spacing values.

Both accept the loose forms used in network documents: a single number
for a uniform value, or a mapping of per-edge / per-axis values.
"""

from __future__ import annotations

__all__ = ["Padding", "PaddingLike", "Spacing", "SpacingLike"]

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

PaddingLike = Union[float, Mapping[str, float], "Padding"]
SpacingLike = Union[float, Mapping[str, float], "Spacing"]

_PADDING_KEYS = frozenset({"top", "bottom", "left", "right", "x", "y"})
_SPACING_KEYS = frozenset({"x", "y"})


@dataclass(frozen=True)
class Padding:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def of(cls, value: PaddingLike | None = None, **edges: float) -> Padding:
        """Build a Padding from a number, a mapping, or keyword edges.

        ``x`` and ``y`` are shorthands for left+right and top+bottom; an
        explicit edge wins over its shorthand. Missing edges are 0.
        """
        if isinstance(value, Padding):
            return value
        if value is None:
            value = edges
        if isinstance(value, Mapping):
            unknown = set(value) - _PADDING_KEYS
            if unknown:
                raise ValueError(f"Unknown padding keys: {sorted(unknown)}")
            x = value.get("x")
            y = value.get("y")
            return cls(
                top=_first(value.get("top"), y),
                bottom=_first(value.get("bottom"), y),
                left=_first(value.get("left"), x),
                right=_first(value.get("right"), x),
            )
        return cls(top=value, bottom=value, left=value, right=value)

    def scale(self, factor: float) -> Padding:
        return Padding(
            top=self.top * factor,
            bottom=self.bottom * factor,
            left=self.left * factor,
            right=self.right * factor,
        )


@dataclass(frozen=True)
class Spacing:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, value: SpacingLike | None = None, **axes: float) -> Spacing:
        if isinstance(value, Spacing):
            return value
        if value is None:
            value = axes
        if isinstance(value, Mapping):
            unknown = set(value) - _SPACING_KEYS
            if unknown:
                raise ValueError(f"Unknown spacing keys: {sorted(unknown)}")
            return cls(x=_first(value.get("x")), y=_first(value.get("y")))
        return cls(x=value, y=value)

    def scale(self, factor: float) -> Spacing:
        return Spacing(x=self.x * factor, y=self.y * factor)

    def to_padding(self) -> Padding:
        return Padding(top=self.y, bottom=self.y, left=self.x, right=self.x)


def _first(*values: float | None) -> float:
    for value in values:
        if value is not None:
            return value
    return 0.0

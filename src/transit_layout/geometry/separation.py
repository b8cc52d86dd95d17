"""Minimal push needed to separate two groups of boxes.

The new boxes may only move along a given direction vector. The answer
is a scale factor for that vector: 0 when nothing overlaps, ``inf``
when no finite push along the direction can clear an overlap.
"""

from __future__ import annotations

__all__ = ["pair_separation_factor", "separation_factor"]

import logging
import math
from collections.abc import Sequence

from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.point import Box, Boxlike

SEPARATION_MAX_ITERATIONS = 1000

logger = logging.getLogger(__name__)


def pair_separation_factor(old: Box, new: Box, direction: PointOffset) -> float:
    """Factor by which *new* must move along *direction* to clear *old*.

    Each axis gives the larger of its two penetration depths over the
    signed direction component; an axis with a zero component cannot
    help. Clearing either axis separates the boxes, so the smaller axis
    factor wins.
    """
    if not Box.overlaps(old, new):
        return 0.0

    if direction.dx:
        factor_x = max(
            (old.max.x - new.min.x) / direction.dx,
            (new.max.x - old.min.x) / -direction.dx,
        )
    else:
        factor_x = math.inf
    if direction.dy:
        factor_y = max(
            (old.max.y - new.min.y) / direction.dy,
            (new.max.y - old.min.y) / -direction.dy,
        )
    else:
        factor_y = math.inf
    return min(factor_x, factor_y)


def separation_factor(
    old_boxes: Sequence[Boxlike],
    new_boxes: Sequence[Boxlike],
    direction: PointOffset,
) -> float:
    """Smallest factor that moves every new box clear of every old box.

    Pushing one pair apart can push another pair into overlap, so the
    largest pair factor is applied repeatedly until all pairs report 0.
    """
    olds = [box.to_box() for box in old_boxes]
    moved = [box.to_box() for box in new_boxes]
    if not olds or not moved:
        return 0.0

    factor = 0.0
    for _ in range(SEPARATION_MAX_ITERATIONS):
        step = max(
            pair_separation_factor(old, new, direction)
            for old in olds
            for new in moved
        )
        if step == 0:
            return factor
        factor += step
        if math.isinf(factor):
            return math.inf
        shift = direction.scale(step)
        moved = [box.offset(shift) for box in moved]

    logger.debug(
        "Separation did not settle after %d iterations along %s",
        SEPARATION_MAX_ITERATIONS,
        direction,
    )
    return math.inf

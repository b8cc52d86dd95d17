"""Tests for the separation factor solver."""

import math

import pytest

from transit_layout.geometry import separation
from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.point import Box
from transit_layout.geometry.separation import pair_separation_factor, separation_factor

DOWN = PointOffset(0, 1)
RIGHT = PointOffset(1, 0)


def _box(min_x, min_y, max_x, max_y):
    return Box.from_coords(min_x, min_y, max_x, max_y)


class TestPairSeparationFactor:
    def test_disjoint_boxes_need_no_push(self):
        assert pair_separation_factor(_box(0, 0, 10, 10), _box(20, 0, 30, 10), DOWN) == 0

    def test_push_down(self):
        assert pair_separation_factor(_box(0, 0, 10, 10), _box(0, 4, 10, 14), DOWN) == 6

    def test_push_against_the_direction_takes_the_long_way(self):
        """A box above the old one must still move down, past it."""
        assert pair_separation_factor(_box(0, 0, 10, 10), _box(0, -4, 10, 6), DOWN) == 14

    def test_zero_direction_cannot_help(self):
        assert pair_separation_factor(_box(0, 0, 10, 10), _box(0, 5, 10, 15), PointOffset(0, 0)) == math.inf

    def test_diagonal_takes_cheaper_axis(self):
        old = _box(0, 0, 10, 10)
        new = _box(8, 2, 18, 12)
        # x clears after 2, y after 8
        assert pair_separation_factor(old, new, PointOffset(1, 1)) == 2


class TestSeparationFactor:
    def test_nothing_to_separate(self):
        assert separation_factor([], [_box(0, 0, 1, 1)], DOWN) == 0

    def test_chained_pushes_accumulate(self):
        """Clearing the first old box lands the new one on the second."""
        olds = [_box(0, 0, 10, 10), _box(0, 12, 10, 20)]
        new = [_box(0, 5, 10, 9)]
        assert separation_factor(olds, new, DOWN) == 15

    def test_result_clears_every_pair(self):
        olds = [_box(0, 0, 10, 10), _box(5, 9, 15, 30)]
        news = [_box(0, 0, 4, 4), _box(6, 2, 12, 8)]
        factor = separation_factor(olds, news, RIGHT)
        moved = [box.offset(RIGHT.scale(factor)) for box in news]
        assert not any(Box.overlaps(old, new) for old in olds for new in moved)

    def test_infeasible_direction(self):
        assert separation_factor([_box(0, 0, 10, 10)], [_box(0, 0, 10, 10)], RIGHT.scale(0)) == math.inf

    def test_iteration_cap_returns_inf(self, monkeypatch):
        monkeypatch.setattr(separation, "SEPARATION_MAX_ITERATIONS", 1)
        olds = [_box(0, 0, 10, 10), _box(0, 12, 10, 20)]
        new = [_box(0, 5, 10, 9)]
        assert separation_factor(olds, new, DOWN) == math.inf

    def test_uses_unit_direction_scale(self):
        factor = separation_factor([_box(0, 0, 10, 10)], [_box(0, 0, 10, 10)], PointOffset(0, 2))
        assert factor == pytest.approx(5)

"""Tests for points, boxes, padding and bounded boxes."""

import math

import pytest

from transit_layout.geometry.bounded_box import BoundedBox
from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.padding import Padding, Spacing
from transit_layout.geometry.point import ORIGIN, Box, Point
from transit_layout.layout.text_wrap import LineBox


class TestPoint:
    def test_offset_accepts_vector_or_components(self):
        p = Point(1, 2)
        assert p.offset(3, 4) == Point(4, 6)
        assert p.offset(PointOffset(3, 4)) == Point(4, 6)

    def test_offset_to(self):
        assert Point(1, 1).offset_to(Point(4, 5)) == PointOffset(3, 4)

    def test_with_size_is_centred(self):
        rp = Point(10, 20).with_size(4, 6)
        assert rp.point == Point(10, 20)
        assert rp.box == Box.from_coords(8, 17, 12, 23)

    def test_with_size_from_box_uses_bearing(self):
        """Text boxes carry their origin relative to the anchor."""
        line = LineBox(text="Abc", x=-5, y=-8, width=10, height=10)
        rp = Point(100, 50).with_size_from_box(line)
        assert rp.box.min == Point(95, 42)
        assert rp.box.max == Point(105, 52)

    def test_offset_moves_point_and_box_together(self):
        rp = ORIGIN.with_size(2, 2).offset(5, 0)
        assert rp.x == 5
        assert rp.min.x == 4 and rp.max.x == 6


class TestBox:
    def test_bounds_of_mixed_items(self):
        box = Box.bounds(Point(0, 0), [Box.from_coords(2, -1, 3, 1)], Point(1, 4))
        assert box == Box.from_coords(0, -1, 3, 4)

    def test_bounds_of_nothing_is_empty(self):
        box = Box.bounds()
        assert box.min.x == math.inf
        assert box.max.x == -math.inf

    def test_overlap_is_strict(self):
        a = Box.from_coords(0, 0, 10, 10)
        touching = Box.from_coords(10, 0, 20, 10)
        inside = Box.from_coords(5, 5, 15, 15)
        assert not Box.overlaps(a, touching)
        assert Box.overlaps(a, inside)

    def test_overlap_is_symmetric(self):
        a = Box.from_coords(0, 0, 10, 10)
        for b in (Box.from_coords(10, 0, 20, 10), Box.from_coords(5, 5, 15, 15), Box.from_coords(3, 3, 3, 3)):
            assert Box.overlaps(a, b) == Box.overlaps(b, a)

    def test_with_padding(self):
        box = Box.from_coords(0, 0, 10, 10, label="label").with_padding({"x": 2, "top": 1})
        assert box == Box.from_coords(-2, -1, 12, 10, label="label")

    def test_label_survives_offset(self):
        assert Box.from_coords(0, 0, 1, 1, label="marker").offset(1, 1).label == "marker"


class TestPadding:
    def test_number_is_uniform(self):
        assert Padding.of(3) == Padding(3, 3, 3, 3)

    def test_explicit_edge_beats_shorthand(self):
        pad = Padding.of({"x": 4, "left": 1, "y": 2})
        assert pad == Padding(top=2, bottom=2, left=1, right=4)

    def test_axis_shorthand_with_edge(self):
        assert Padding.of({"x": 3, "top": 1}) == Padding(top=1, bottom=0, left=3, right=3)

    def test_missing_edges_are_zero(self):
        assert Padding.of(top=5) == Padding(top=5)

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown padding keys"):
            Padding.of({"middle": 1})

    def test_spacing_to_padding(self):
        assert Spacing.of({"x": 3}).to_padding() == Padding(0, 0, 3, 3)


class TestPointOffset:
    def test_unit(self):
        u = PointOffset(3, 4).unit()
        assert u.dx == pytest.approx(0.6)
        assert u.dy == pytest.approx(0.8)

    def test_zero_unit_stays_zero(self):
        assert PointOffset(0, 0).unit() == PointOffset(0, 0)

    def test_parallel(self):
        assert PointOffset(1, 1).parallel_in_same_direction(PointOffset(2, 2))
        assert not PointOffset(1, 1).parallel_in_same_direction(PointOffset(-1, -1))


class TestBoundedBox:
    def test_empty_is_valid(self):
        assert BoundedBox.unbounded(10, 10).valid

    def test_can_fit(self):
        bounded = BoundedBox.unbounded(max_width=10)
        assert bounded.can_fit(Box.from_coords(0, 0, 10, 100))
        assert not bounded.can_fit(Box.from_coords(0, 0, 10.5, 1))

    def test_add_returns_new_instance(self):
        bounded = BoundedBox.unbounded(max_width=10)
        grown = bounded.add(Box.from_coords(0, 0, 4, 4))
        assert bounded.min_box == Box.empty()
        assert grown.min_box == Box.from_coords(0, 0, 4, 4)

    def test_can_fit_considers_existing_contents(self):
        bounded = BoundedBox.unbounded(max_width=10).add(Box.from_coords(0, 0, 6, 1))
        assert bounded.can_fit(Box.from_coords(4, 0, 10, 1))
        assert not bounded.can_fit(Box.from_coords(-5, 0, 0, 1))

    def test_invalid_when_contents_exceed(self):
        bounded = BoundedBox.from_box(Box.from_coords(0, 0, 20, 1), max_width=10)
        assert not bounded.valid

    def test_headroom(self):
        bounded = BoundedBox.unbounded(max_height=50).add(Box.from_coords(0, 0, 5, 20))
        assert bounded.headroom() == (math.inf, 30)
        assert BoundedBox.unbounded(max_height=50).headroom() == (math.inf, 50)

    def test_is_bounded(self):
        assert not BoundedBox.unbounded().is_bounded
        assert BoundedBox.unbounded(max_width=1).is_bounded

    def test_offset_keeps_caps(self):
        bounded = BoundedBox.unbounded(max_height=50).add(Box.from_coords(10, 10, 20, 20))
        moved = bounded.offset(-10, -10)
        assert moved.min_box == Box.from_coords(0, 0, 10, 10)
        assert moved.max_height == 50
        assert BoundedBox.unbounded().offset(5, 5).min_box.width == -math.inf

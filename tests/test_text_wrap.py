"""Tests for label wrapping, hyphenation and text measurement."""

import pytest

from transit_layout.layout.measure import (
    MeasurementCache,
    TextStyle,
    estimate_line_box,
    make_label_box_getter,
)
from transit_layout.layout.text_wrap import (
    LineBox,
    TextBox,
    best_wrappings_by_line_count,
    hyphenation_alternatives,
    hyphenations,
    select_best_wrapping,
    wrapping_rank,
)
from transit_layout.parser.model import Station


def _wrapping(*widths: float) -> TextBox:
    return TextBox.from_lines(
        [LineBox(text="x", x=0, y=-8, width=w, height=10) for w in widths],
        line_spacing=12,
    )


class TestSelectBestWrapping:
    def test_narrower_widest_line_wins(self):
        """[110, 120] beats [90, 140] even though it has the wider short line."""
        a = _wrapping(90, 140)
        b = _wrapping(110, 120)
        assert select_best_wrapping([a, b]) is b

    def test_equal_width_prefers_wider_shortest_line(self):
        a = _wrapping(100, 60)
        b = _wrapping(80, 100)
        assert select_best_wrapping([a, b]) is b

    def test_then_wider_lines_first(self):
        a = _wrapping(80, 100, 80)
        b = _wrapping(100, 80, 80)
        assert select_best_wrapping([a, b]) is b

    def test_first_candidate_wins_full_ties(self):
        a = _wrapping(50, 60)
        b = _wrapping(50, 60)
        assert select_best_wrapping([a, b]) is a

    def test_rank_key(self):
        assert wrapping_rank(_wrapping(90, 140)) == (140, -90, (-90, -140))

    def test_no_candidates(self):
        with pytest.raises(ValueError):
            select_best_wrapping([])


class TestTextBoxFromLines:
    def test_aggregate_metrics(self):
        box = TextBox.from_lines(
            [
                LineBox(text="Alpha", x=-5, y=-24, width=90, height=30),
                LineBox(text="Beta", x=-2, y=-24, width=72, height=30),
            ],
            line_spacing=36,
        )
        assert box.lines == ("Alpha", "Beta")
        assert box.x == -5
        assert box.y == -24
        assert box.width == 90
        assert box.min_width == 72
        assert box.height == 66
        assert box.line_count == 2

    def test_best_per_line_count(self):
        boxes = best_wrappings_by_line_count(
            [
                [LineBox("a b c", 0, -8, 50, 10)],
                [LineBox("a", 0, -8, 10, 10), LineBox("b c", 0, -8, 30, 10)],
                [LineBox("a b", 0, -8, 30, 10), LineBox("c", 0, -8, 10, 10)],
                [LineBox("a", 0, -8, 10, 10), LineBox("b", 0, -8, 10, 10), LineBox("c", 0, -8, 10, 10)],
            ],
            line_spacing=12,
        )
        assert [b.line_count for b in boxes] == [1, 2, 3]
        # Same widths either way; the wider line goes first
        assert boxes[1].lines == ("a b", "c")


class TestHyphenations:
    def test_spaces(self):
        assert hyphenations("Alpha Beta") == ["Alpha Beta", "Alpha\nBeta"]

    def test_every_combination_in_order(self):
        assert hyphenations("A B C") == ["A B C", "A\nB C", "A B\nC", "A\nB\nC"]

    def test_existing_hyphen_is_kept(self):
        assert hyphenations("Saint-Denis") == ["Saint-Denis", "Saint-\nDenis"]

    def test_hyphenation_points(self):
        assert hyphenations("Waterfront", {"Waterfront": "Water~front"}) == [
            "Waterfront",
            "Water-\nfront",
        ]

    def test_hyphenation_inside_hyphenated_word(self):
        variants = hyphenations("Saint-Waterfront", {"Waterfront": "Water~front"})
        assert "Saint-Water-\nfront" in variants
        assert len(variants) == 4

    def test_single_word(self):
        assert hyphenations("Central") == ["Central"]

    def test_alternatives_skip_unbroken(self):
        assert hyphenation_alternatives("Old Town") == ["Old\nTown"]


class TestMeasurement:
    def test_estimate_anchors(self):
        start = estimate_line_box(TextStyle(font_size=10), "abcd")
        middle = estimate_line_box(TextStyle(font_size=10, text_anchor="middle"), "abcd")
        end = estimate_line_box(TextStyle(font_size=10, text_anchor="end"), "abcd")
        assert start.width == pytest.approx(24)
        assert (start.x, middle.x, end.x) == pytest.approx((0, -12, -24))

    def test_estimate_baselines(self):
        alphabetic = estimate_line_box(TextStyle(font_size=10), "a")
        hanging = estimate_line_box(TextStyle(font_size=10, dominant_baseline="hanging"), "a")
        central = estimate_line_box(TextStyle(font_size=10, dominant_baseline="central"), "a")
        assert alphabetic.y == pytest.approx(-8)
        assert hanging.y == 0
        assert central.y == pytest.approx(-5)
        assert alphabetic.height == pytest.approx(10)

    def test_cache_hits(self):
        calls = []

        def measure(style, text):
            calls.append(text)
            return estimate_line_box(style, text)

        cache = MeasurementCache(measure)
        style = TextStyle()
        cache(style, "Alpha")
        cache(style, "Alpha")
        cache(TextStyle(font_size=20), "Alpha")
        assert calls == ["Alpha", "Alpha"]
        assert cache.hits == 1
        assert len(cache) == 2

    def test_style_key_is_canonical(self):
        assert TextStyle().key("x") == TextStyle().key("x")
        assert TextStyle().key("x") != TextStyle(font_weight=700).key("x")


class TestLabelBoxGetter:
    def test_one_box_per_line_count(self, config, get_label_boxes):
        boxes = get_label_boxes(Station("Alpha Beta"))
        assert [b.line_count for b in boxes] == [1, 2]
        # 30px font, 0.6em per character
        assert boxes[0].width == pytest.approx(180)
        assert boxes[1].width == pytest.approx(90)
        assert boxes[1].height == pytest.approx(config.label.line_spacing + 30)

    def test_uses_hyphenation(self, config):
        get_label_boxes = make_label_box_getter(
            config, hyphenation={"Waterfront": "Water~front"}
        )
        boxes = get_label_boxes(Station("Waterfront"))
        assert [b.lines for b in boxes] == [("Waterfront",), ("Water-", "front")]

    def test_text_hints_reach_measurer(self, config):
        seen = []

        def measure(style, text):
            seen.append((style.text_anchor, style.dominant_baseline, style.font_family))
            return estimate_line_box(style, text)

        get_label_boxes = make_label_box_getter(
            config, measure=measure, font_family="Open Sans", cache=False
        )
        get_label_boxes(Station("A"), text_anchor="end", dominant_baseline="hanging")
        assert seen == [("end", "hanging", "Open Sans")]

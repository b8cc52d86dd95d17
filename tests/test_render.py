"""Tests for the debug SVG drawing."""

import xml.etree.ElementTree as ET

from transit_layout.layout.engine import layout_network_line
from transit_layout.render.debug import render_debug_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def _render(network, config, get_label_boxes, **kwargs):
    layouts = {
        line.id: layout_network_line(network, line.id, config, get_label_boxes)
        for line in network.lines
    }
    colors = {line.id: line.color for line in network.lines}
    return layouts, render_debug_svg(layouts, config, colors=colors, **kwargs)


def test_render_produces_valid_svg(sample_network, config, get_label_boxes):
    _, svg = _render(sample_network, config, get_label_boxes)
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg")


def test_one_marker_per_station(sample_network, config, get_label_boxes):
    layouts, svg = _render(sample_network, config, get_label_boxes)
    root = ET.fromstring(svg)
    circles = list(root.iter(f"{SVG_NS}circle"))
    assert len(circles) == sum(len(p) for p in layouts.values())


def test_label_lines_drawn_with_hints(sample_network, config, get_label_boxes):
    layouts, svg = _render(sample_network, config, get_label_boxes)
    root = ET.fromstring(svg)
    texts = list(root.iter(f"{SVG_NS}text"))
    assert {t.text for t in texts} == {
        line for positions in layouts.values() for p in positions for line in p.lines
    }
    anchors = {t.get("text-anchor") for t in texts}
    assert anchors <= {"start", "middle", "end"}


def test_lines_use_their_colours(sample_network, config, get_label_boxes):
    _, svg = _render(sample_network, config, get_label_boxes)
    assert "#e03c31" in svg
    assert "#0070c0" in svg


def test_boxes_can_be_hidden(sample_network, config, get_label_boxes):
    _, with_boxes = _render(sample_network, config, get_label_boxes)
    _, without = _render(sample_network, config, get_label_boxes, show_boxes=False)
    assert "stroke-dasharray" in with_boxes
    assert "stroke-dasharray" not in without


def test_font_family(sample_network, config, get_label_boxes):
    _, svg = _render(sample_network, config, get_label_boxes, font_family="Open Sans")
    assert 'font-family="Open Sans"' in svg


def test_empty_layouts(config):
    root = ET.fromstring(render_debug_svg({}, config))
    assert root.tag.endswith("svg")

"""Tests for the transit-layout command line."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from conftest import SAMPLE_NETWORK
from transit_layout.cli import cli


@pytest.fixture
def network_file(tmp_path):
    path = tmp_path / "network.json"
    path.write_text(json.dumps(SAMPLE_NETWORK))
    return path


def test_layout_prints_json(network_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["layout", str(network_file)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert set(data) == {"red", "blue"}
    assert [p["station"] for p in data["red"]] == ["Alpha", "Bravo", "Charlie", "Delta"]
    assert data["red"][0]["marker"]["x"] == 0


def test_layout_single_line_to_file(network_file, tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["layout", str(network_file), "--line", "blue", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert list(json.loads(out.read_text())) == ["blue"]


def test_layout_direction_option(network_file, tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["layout", str(network_file), "--line", "blue", "--direction", "e", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    blue = json.loads(out.read_text())["blue"]
    assert {p["direction"] for p in blue} <= {"n", "s"}


def test_layout_debug_svg(network_file, tmp_path):
    svg = tmp_path / "debug.svg"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["layout", str(network_file), "-o", str(tmp_path / "out.json"), "--debug-svg", str(svg)],
    )
    assert result.exit_code == 0, result.output
    assert "<svg" in svg.read_text()


def test_unknown_line_warns(network_file):
    runner = CliRunner()
    with pytest.warns(UserWarning, match="No line with id 'green'"):
        result = runner.invoke(cli, ["layout", str(network_file), "--line", "green"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {}


def test_unsatisfiable_bounds_fail(network_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["layout", str(network_file), "--max-width", "5"])
    assert result.exit_code == 1
    assert "Could not lay out line" in result.output


def test_invalid_network_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"lines": []}))
    runner = CliRunner()
    result = runner.invoke(cli, ["layout", str(path)])
    assert result.exit_code == 1
    assert "Invalid network file" in result.output


def test_invalid_config_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps({**SAMPLE_NETWORK, "layoutConfig": {"label": {"fontSize": 0}}})
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["layout", str(path)])
    assert result.exit_code == 1
    assert "Invalid layout configuration" in result.output


def test_segments(network_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["segments", str(network_file)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "red:"
    assert lines[1].split() == ["s", "Alpha,", "Bravo"]
    assert lines[2].split() == ["e", "Charlie,", "Delta"]
    assert lines[3] == "blue:"
    assert lines[4].split() == ["-", "Echo,", "Bravo,", "Foxtrot"]


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "transit-layout" in result.output


def test_bounds_include_padding(tmp_path):
    path = tmp_path / "padded.json"
    path.write_text(json.dumps({**SAMPLE_NETWORK, "layoutConfig": {"padding": {"x": 50}}}))
    runner = CliRunner()
    # 110 wide less 100 of padding leaves no room for a marker
    result = runner.invoke(cli, ["layout", str(path), "--max-width", "110"])
    assert result.exit_code == 1
    assert "Could not lay out line" in result.output

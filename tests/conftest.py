"""Shared test fixtures and helpers for the transit-layout test suite."""

from __future__ import annotations

import pytest

from transit_layout.layout.config import LayoutConfig, complete_layout_config
from transit_layout.layout.measure import make_label_box_getter
from transit_layout.parser.loader import load_network
from transit_layout.parser.model import Network, Station

# --- Network documents ---

SAMPLE_NETWORK = {
    "name": "Sample",
    "lines": [
        {
            "id": "red",
            "name": "Red Line",
            "color": "#e03c31",
            "stations": ["Alpha", "Bravo", "Charlie", "Delta"],
            "directions": [
                {"direction": "s", "end": "Bravo"},
                {"direction": "e", "start": "Charlie"},
            ],
        },
        {
            "id": "blue",
            "name": "Blue Line",
            "color": "#0070c0",
            "stations": ["Echo", "Bravo", "Foxtrot"],
        },
    ],
}


# --- Helpers ---


def stations(*names: str) -> list[Station]:
    """Plain stations, in order."""
    return [Station(name=name) for name in names]


# --- Pytest fixtures ---


@pytest.fixture
def config() -> LayoutConfig:
    """The default layout configuration."""
    return complete_layout_config()


@pytest.fixture
def get_label_boxes(config):
    """Character-width label measurement for the default configuration."""
    return make_label_box_getter(config)


@pytest.fixture
def sample_network() -> Network:
    """Two lines crossing at Bravo; red turns from south to east."""
    return load_network(SAMPLE_NETWORK)

"""transit-layout: station marker and label placement for transit maps."""

from transit_layout.geometry import BoundedBox, Box, Point, PointOffset, RangedPoint
from transit_layout.layout.config import LayoutConfig, complete_layout_config
from transit_layout.layout.direction import Direction, Side
from transit_layout.layout.engine import (
    LayoutError,
    get_offset,
    layout_line,
    layout_network_line,
)
from transit_layout.layout.measure import make_label_box_getter
from transit_layout.layout.positions import StationPosition
from transit_layout.parser.loader import load_network, load_network_file
from transit_layout.parser.model import Line, Network, Station

__version__ = "0.1.0"

__all__ = [
    "BoundedBox",
    "Box",
    "Direction",
    "LayoutConfig",
    "LayoutError",
    "Line",
    "Network",
    "Point",
    "PointOffset",
    "RangedPoint",
    "Side",
    "Station",
    "StationPosition",
    "complete_layout_config",
    "get_offset",
    "layout_line",
    "layout_network_line",
    "load_network",
    "load_network_file",
    "make_label_box_getter",
]

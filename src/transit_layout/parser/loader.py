"""Build network records from plain JSON documents.

This is a thin constructor over already-validated data; it checks only
what the layout needs and raises ``NetworkFormatError`` otherwise.
"""

from __future__ import annotations

__all__ = ["NetworkFormatError", "load_network", "load_network_file"]

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from transit_layout.layout.direction import Direction
from transit_layout.parser.model import (
    DirectionSpec,
    Line,
    Network,
    Station,
    parse_font_reference,
)


class NetworkFormatError(ValueError):
    """A network document is missing required data or has invalid values."""


def load_network_file(path: str | Path) -> Network:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise NetworkFormatError(f"{path}: not valid JSON ({e})") from e
    return load_network(data)


def load_network(data: Mapping[str, Any]) -> Network:
    if not isinstance(data, Mapping):
        raise NetworkFormatError("A network document must be a JSON object")
    raw_lines = data.get("lines")
    if not raw_lines:
        raise NetworkFormatError("A network needs at least one line")

    font = None
    if data.get("font") is not None:
        try:
            font = parse_font_reference(data["font"])
        except ValueError as e:
            raise NetworkFormatError(str(e)) from e

    hyphenation = {
        word.replace("~", ""): word for word in data.get("hyphenation") or []
    }

    return Network(
        lines=[_load_line(raw, i) for i, raw in enumerate(raw_lines)],
        name=data.get("name"),
        font=font,
        layout_config=data.get("layoutConfig") or {},
        hyphenation=hyphenation,
    )


def _load_line(raw: Mapping[str, Any], index: int) -> Line:
    name = raw.get("name")
    if not name:
        raise NetworkFormatError(f"Line {index} has no name")

    stations = []
    for raw_station in raw.get("stations") or []:
        if isinstance(raw_station, str):
            stations.append(Station(name=raw_station))
        elif isinstance(raw_station, Mapping) and raw_station.get("name"):
            stations.append(
                Station(
                    name=raw_station["name"],
                    lines=tuple(raw_station.get("lines") or ()),
                )
            )
        else:
            raise NetworkFormatError(f"Line {name!r} has a station without a name")

    directions = [
        DirectionSpec(
            direction=_direction(spec.get("direction"), name),
            start=spec.get("start"),
            end=spec.get("end"),
        )
        for spec in raw.get("directions") or []
    ]
    label_positions = {
        station: _direction(value, name)
        for station, value in (raw.get("labelPositions") or {}).items()
        if value is not None
    }

    return Line(
        name=name,
        stations=stations,
        id=raw.get("id"),
        color=raw.get("color"),
        overlay_color=raw.get("overlayColor"),
        line_type=raw.get("lineType"),
        directions=directions,
        label_positions=label_positions,
    )


def _direction(value: Any, line_name: str) -> Direction:
    try:
        return Direction(value)
    except ValueError:
        raise NetworkFormatError(
            f"Line {line_name!r} uses unknown direction {value!r}; expected one of "
            f"{', '.join(d.value for d in Direction)}"
        ) from None

"""Data model for transit networks: stations, lines and the network."""

from __future__ import annotations

__all__ = [
    "DirectionSegment",
    "DirectionSpec",
    "FontReference",
    "Line",
    "Network",
    "Station",
    "StationData",
    "font_family",
    "parse_font_reference",
    "split_into_direction_segments",
]

import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from functools import cached_property
from pathlib import PurePosixPath
from typing import Any

from transit_layout.layout.direction import Direction

GOOGLE_FONTS_PREFIX = "google-fonts:"
BROWSER_FONT_PREFIX = "browser:"
RELATIVE_FONT_PREFIX = "./"


@dataclass(frozen=True)
class Station:
    """A stop on a line. ``terminus`` is derived from its position."""

    name: str
    lines: tuple[str, ...] = ()
    terminus: bool = False


@dataclass(frozen=True)
class DirectionSpec:
    """Compass direction for the stretch of a line from *start* to *end*."""

    direction: Direction
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True)
class DirectionSegment:
    direction: Direction | None
    stations: tuple[Station, ...]


@dataclass(frozen=True)
class FontReference:
    url: str
    family: str | None = None


@dataclass
class Line:
    """An ordered run of stations drawn in one colour."""

    name: str
    stations: Sequence[Station] = ()
    id: str | None = None
    color: str | None = None
    overlay_color: str | None = None
    line_type: str | None = None
    directions: Sequence[DirectionSpec] = ()
    label_positions: Mapping[str, Direction] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = self.name
        last = len(self.stations) - 1
        self.stations = tuple(
            replace(station, terminus=i in (0, last))
            for i, station in enumerate(self.stations)
        )
        self.directions = tuple(self.directions)

    @cached_property
    def direction_segments(self) -> list[DirectionSegment]:
        return split_into_direction_segments(self.stations, self.directions, self.id)

    def termini(self) -> list[Station]:
        return [station for station in self.stations if station.terminus]

    def station(self, name: str) -> Station | None:
        for station in self.stations:
            if station.name == name:
                return station
        return None

    def neighbouring_stations(self, name: str) -> set[str]:
        """Names of the stations directly before and after *name*."""
        names = [station.name for station in self.stations]
        if name not in names:
            return set()
        i = names.index(name)
        return {names[j] for j in (i - 1, i + 1) if 0 <= j < len(names)}


@dataclass(frozen=True)
class StationData:
    """Everything the network knows about one station name."""

    name: str
    lines: frozenset[str]
    terminus_lines: frozenset[str]
    # line id -> group number; lines sharing neighbours share a group
    parallel_line_groups: Mapping[str, int]


@dataclass
class Network:
    lines: list[Line]
    name: str | None = None
    font: FontReference | None = None
    layout_config: Mapping[str, Any] = field(default_factory=dict)
    # plain word -> word with "~" at each hyphenation point
    hyphenation: Mapping[str, str] = field(default_factory=dict)

    def line(self, line_id: str) -> Line:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise KeyError(f"No line with id {line_id!r} in network")

    @cached_property
    def stations(self) -> dict[str, StationData]:
        lines_at: dict[str, list[Line]] = {}
        for line in self.lines:
            for station in line.stations:
                served = lines_at.setdefault(station.name, [])
                if line not in served:
                    served.append(line)

        result: dict[str, StationData] = {}
        for name, lines in lines_at.items():
            groups: list[set[str]] = []
            parallel: dict[str, int] = {}
            for line in lines:
                neighbours = line.neighbouring_stations(name)
                if neighbours in groups:
                    parallel[line.id] = groups.index(neighbours)
                else:
                    groups.append(neighbours)
                    parallel[line.id] = len(groups) - 1
            result[name] = StationData(
                name=name,
                lines=frozenset(line.id for line in lines),
                terminus_lines=frozenset(
                    line.id
                    for line in lines
                    if any(s.terminus for s in line.stations if s.name == name)
                ),
                parallel_line_groups=parallel,
            )
        return result


def parse_font_reference(value: str | Mapping[str, Any]) -> FontReference:
    """Parse a font reference from a network document.

    Strings must start with ``google-fonts:`` or ``browser:``; mappings
    carry a ``url`` relative to the document (``./...``) and an optional
    ``family``.
    """
    if isinstance(value, str):
        if value.startswith((GOOGLE_FONTS_PREFIX, BROWSER_FONT_PREFIX)):
            return FontReference(url=value)
        raise ValueError(
            f"Font references must start with {GOOGLE_FONTS_PREFIX!r} or "
            f"{BROWSER_FONT_PREFIX!r}, got {value!r}"
        )
    url = value.get("url")
    if not isinstance(url, str) or not url.startswith(RELATIVE_FONT_PREFIX):
        raise ValueError(
            f"Font file URLs must start with {RELATIVE_FONT_PREFIX!r}, got {url!r}"
        )
    return FontReference(url=url, family=value.get("family"))


def font_family(font: FontReference) -> str:
    """The CSS font family a reference resolves to."""
    if font.url.startswith(GOOGLE_FONTS_PREFIX):
        spec = font.url[len(GOOGLE_FONTS_PREFIX) :]
        return spec.split(":", 1)[0].replace("+", " ")
    if font.url.startswith(BROWSER_FONT_PREFIX):
        return font.url[len(BROWSER_FONT_PREFIX) :]
    if font.url.startswith(RELATIVE_FONT_PREFIX):
        return font.family or PurePosixPath(font.url).stem
    raise ValueError(f"Invalid font URL: {font.url!r}")


def split_into_direction_segments(
    stations: Sequence[Station],
    specs: Sequence[DirectionSpec],
    line_id: str | None = None,
) -> list[DirectionSegment]:
    """Cut a line's stations into runs that share a compass direction.

    A direction spec opens a segment at its ``start`` station (or at the next
    unassigned station when it has none) and closes it at its ``end``
    station. Stations not covered by any direction spec form segments with no
    direction. Every station lands in exactly one segment, in order.
    """
    names = {station.name for station in stations}
    resolved: list[DirectionSpec] = []
    for spec in specs:
        if spec.start is not None and spec.start not in names:
            warnings.warn(
                f"Direction spec for line {line_id} has a start station "
                f"{spec.start!r} that does not exist on the line",
                stacklevel=2,
            )
            spec = replace(spec, start=None)
        if spec.end is not None and spec.end not in names:
            warnings.warn(
                f"Direction spec for line {line_id} has an end station "
                f"{spec.end!r} that does not exist on the line",
                stacklevel=2,
            )
            spec = replace(spec, end=None)
        resolved.append(spec)

    def spec_at(index: int) -> DirectionSpec | None:
        return resolved[index] if index < len(resolved) else None

    segments: list[DirectionSegment] = []
    current: list[Station] | None = None
    current_spec: DirectionSpec | None = None
    next_index = 0

    for station in stations:
        if current is None:
            next_spec = spec_at(next_index)
            # Specs with neither start nor end between two others cover no stations
            while (
                0 < next_index < len(resolved) - 1
                and next_spec is not None
                and next_spec.start is None
                and next_spec.end is None
            ):
                segments.append(DirectionSegment(next_spec.direction, ()))
                next_index += 1
                next_spec = spec_at(next_index)

            if next_spec is not None and next_spec.start in (None, station.name):
                current, current_spec = [station], next_spec
                next_index += 1
            else:
                current, current_spec = [station], None
        else:
            next_spec = spec_at(next_index)
            if (
                (current_spec is None or current_spec.end is None)
                and next_spec is not None
                and next_spec.start == station.name
            ):
                segments.append(
                    DirectionSegment(_direction_of(current_spec), tuple(current))
                )
                current, current_spec = [station], next_spec
                next_index += 1
            else:
                current.append(station)

        if current_spec is not None and current_spec.end == station.name:
            segments.append(DirectionSegment(current_spec.direction, tuple(current)))
            current, current_spec = None, None

    if current is not None:
        segments.append(DirectionSegment(_direction_of(current_spec), tuple(current)))

    if next_index < len(resolved):
        warnings.warn(
            f"Not all direction specs were used for line {line_id}: "
            f"{resolved[next_index]} was never reached",
            stacklevel=2,
        )

    return segments


def _direction_of(spec: DirectionSpec | None) -> Direction | None:
    return spec.direction if spec is not None else None

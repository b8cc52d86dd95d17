"""Which ends of a line have other lines approaching them.

A label at the first or last station of a line may hang off the end of
the line, unless another line continues from that terminus in a
direction this line does not go.
"""

from __future__ import annotations

__all__ = ["ALL_SIDES", "LineConflicts", "line_conflicts", "network_graph"]

from dataclasses import dataclass

import networkx as nx

from transit_layout.layout.direction import Side
from transit_layout.parser.model import Line, Network

ALL_SIDES = frozenset(Side)


@dataclass(frozen=True)
class LineConflicts:
    """Sides on which something approaches the line's start and end."""

    start: frozenset[Side] = frozenset()
    end: frozenset[Side] = frozenset()

    def blocks(self, end: str, side: Side) -> bool:
        return side in (self.start if end == "start" else self.end)


def network_graph(network: Network) -> nx.MultiGraph:
    """Station adjacency of the whole network, one edge per line and hop.

    Edges are keyed by line id.
    """
    G = nx.MultiGraph()
    for line in network.lines:
        for station in line.stations:
            G.add_node(station.name)
        for a, b in zip(line.stations, line.stations[1:]):
            G.add_edge(a.name, b.name, key=line.id)
    return G


def line_conflicts(
    network: Network, line: Line, graph: nx.MultiGraph | None = None
) -> LineConflicts:
    """Conflicts at both termini of *line*.

    Lines that merely run parallel (towards the same inward neighbour)
    do not conflict. Which side an approaching line ends up on is not
    known before layout, so an approach blocks both sides.
    """
    G = graph if graph is not None else network_graph(network)
    names = [station.name for station in line.stations]
    if not names:
        return LineConflicts()
    start_inward = names[1] if len(names) > 1 else None
    end_inward = names[-2] if len(names) > 1 else None
    return LineConflicts(
        start=_approaches(G, line.id, names[0], start_inward),
        end=_approaches(G, line.id, names[-1], end_inward),
    )


def _approaches(
    G: nx.MultiGraph, line_id: str, terminus: str, inward: str | None
) -> frozenset[Side]:
    for _, neighbour, key in G.edges(terminus, keys=True):
        if key != line_id and neighbour != inward:
            return ALL_SIDES
    return frozenset()

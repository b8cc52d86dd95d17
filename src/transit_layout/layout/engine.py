"""Line layout coordinator: places every station of a line in order.

For a line heading in one compass direction:

1. Generate candidate positions for every station (both sides unless a
   side is pinned), one per available label line count.
2. Try wrap budgets from the fewest lines upward. At each budget, fold
   over the stations left to right, committing for each the cheapest
   candidate that fits the bounds and clearing the previous station's
   safe areas with a push along the line.
3. The first budget at which every station commits wins; if none does,
   the line cannot be laid out within its bounds.
4. Spread the stations along the line, stretching gaps uniformly where
   the bounds leave room.
"""

from __future__ import annotations

__all__ = ["LayoutError", "get_offset", "layout_line", "layout_network_line"]

import logging
import math
import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from transit_layout.geometry.bounded_box import BoundedBox
from transit_layout.geometry.offset import PointOffset
from transit_layout.geometry.point import ORIGIN, Box
from transit_layout.geometry.separation import separation_factor
from transit_layout.layout.config import LayoutConfig
from transit_layout.layout.conflicts import ALL_SIDES, LineConflicts, line_conflicts
from transit_layout.layout.direction import Direction, Side
from transit_layout.layout.measure import LabelBoxGetter
from transit_layout.layout.positions import StationPosition, generate_positions
from transit_layout.parser.model import Network, Station

logger = logging.getLogger(__name__)


class LayoutError(RuntimeError):
    """No placement of the line's stations satisfies its bounds."""


@dataclass(frozen=True)
class _Step:
    """A committed station at its origin-relative position.

    ``fit_boxes`` are the boxes checked against (and added to) the
    bounds: the marker and the label, trimmed at an open line end.
    """

    position: StationPosition
    fit_boxes: tuple[Box, ...]


def layout_line(
    stations: Sequence[Station],
    direction: Direction,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
    side: Side | None = None,
    bounds: BoundedBox | None = None,
    compact: bool = False,
    initial_side: Side | None = None,
    debug_description: str = "",
    conflicts: LineConflicts | None = None,
    label_positions: Mapping[str, Direction] | None = None,
) -> list[StationPosition]:
    """Lay out *stations* along a line heading in *direction*.

    Args:
        stations: Stations in line order.
        direction: Heading of the line; stations advance this way.
        config: Resolved layout configuration.
        get_label_boxes: Returns the best label wrapping per line count
            for a station, given text anchor/baseline hints.
        side: Put every label on this side; both sides are tried if None.
        bounds: Maximum drawing size (and anything already placed).
        compact: Without bounds, use minimal gaps instead of uniform ones.
        initial_side: Side of the station before the first one, if any.
        debug_description: Names the line in diagnostics.
        conflicts: Sides on which other lines approach the line's ends.
        label_positions: Per-station label direction overrides.

    Returns the placements in line order, the first marker at the origin.

    Raises:
        LayoutError: if no wrap budget admits every station.
    """
    if not stations:
        return []
    bounds = bounds if bounds is not None else BoundedBox.unbounded()
    vector = direction.vector.unit()
    steps = _place_stations(
        stations,
        direction,
        config,
        get_label_boxes,
        side,
        bounds,
        initial_side,
        debug_description,
        conflicts,
        label_positions,
    )
    if len(steps) <= 1:
        return [step.position for step in steps]

    offsets = [step.position.offset for step in steps[1:]]
    max_growth = _max_growth(steps, vector, bounds, max(offsets))
    return _spread(steps, vector, get_offset(offsets, max_growth, compact))


def _place_stations(
    stations: Sequence[Station],
    direction: Direction,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
    side: Side | None,
    bounds: BoundedBox,
    initial_side: Side | None,
    debug_description: str,
    conflicts: LineConflicts | None,
    label_positions: Mapping[str, Direction] | None,
) -> list[_Step]:
    """Commit a candidate per station at the smallest workable wrap budget.

    Every step sits at the origin, carrying its minimal offset from the
    previous one.
    """
    conflicts = conflicts if conflicts is not None else LineConflicts()
    vector = direction.vector.unit()
    candidates = [
        _station_candidates(
            station,
            direction,
            _pinned_side(station, direction, side, label_positions, debug_description),
            config,
            get_label_boxes,
        )
        for station in stations
    ]
    line_counts = [c.line_count for cands in candidates for c in cands]
    if not line_counts:
        raise LayoutError(f"No label candidates for line {debug_description}")

    steps = None
    max_line_count = max(line_counts)
    for budget in range(min(line_counts), max_line_count + 1):
        steps = _reduce_step(
            candidates, budget, vector, bounds, conflicts, initial_side, debug_description
        )
        if steps is not None:
            logger.debug(
                "Line %s laid out with up to %d label line(s)", debug_description, budget
            )
            break
    if steps is None:
        raise LayoutError(
            f"Could not lay out line {debug_description} within bounds "
            f"(tried up to {max_line_count} label line(s))"
        )
    return steps


def _spread(
    steps: Sequence[_Step], vector: PointOffset, chosen: float
) -> list[StationPosition]:
    """Walk the steps along *vector*, each gap at least *chosen*."""
    positions = []
    distance = 0.0
    for i, step in enumerate(steps):
        if i:
            distance += max(step.position.offset, chosen)
        positions.append(step.position.offset_by(vector.scale(distance)))
    return positions


def get_offset(offsets: Sequence[float], max_growth: float, compact: bool = False) -> float:
    """Gap to apply between stations, given their minimal gaps.

    *max_growth* is the room left along the line once every gap is as
    wide as the widest minimal gap (negative if that does not fit;
    ``inf`` when unbounded). Unbounded lines get uniform gaps, or
    minimal ones when *compact*. Bounded lines spend all the room: spread
    evenly when every gap can reach the widest minimal gap, otherwise by
    widening the tightest gaps first until the room is used up.
    """
    if not offsets:
        return 0.0
    ordered = sorted(offsets)
    max_offset = ordered[-1]
    if math.isinf(max_growth):
        return 0.0 if compact else max_offset
    if max_growth >= 0:
        return max_offset + max_growth / len(ordered)

    # Room left over the all-minimal layout
    budget = max(max_growth + sum(max_offset - o for o in ordered), 0.0)
    chosen = ordered[0]
    for count, next_offset in enumerate(ordered[1:], start=1):
        # Raising the gap to next_offset widens every gap below it
        cost = (next_offset - chosen) * count
        if cost >= budget:
            return chosen + budget / count
        budget -= cost
        chosen = next_offset
    return chosen


def layout_network_line(
    network: Network,
    line_id: str,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
    bounds: BoundedBox | None = None,
    compact: bool = False,
    default_direction: Direction = Direction.S,
) -> list[StationPosition]:
    """Lay out a whole line of *network*, one direction segment at a time.

    Each segment continues from the previous one's last station; only
    the true ends of the line use the network's terminus conflicts.

    *bounds* cap the whole line. Segments are first placed with minimal
    gaps, each checked against everything placed before it; the room
    left under the caps is then shared out so every gap of the line may
    widen by the same amount.
    """
    line = network.line(line_id)
    conflicts = line_conflicts(network, line)
    segments = [segment for segment in line.direction_segments if segment.stations]
    placed = bounds if bounds is not None else BoundedBox.unbounded()

    laid_out: list[tuple[Direction, list[_Step]]] = []
    positions: list[StationPosition] = []
    for i, segment in enumerate(segments):
        direction = segment.direction or default_direction
        segment_conflicts = LineConflicts(
            start=conflicts.start if i == 0 else ALL_SIDES,
            end=conflicts.end if i == len(segments) - 1 else ALL_SIDES,
        )
        # Seen from the station this segment continues from
        start = positions[-1].marker.point if positions else ORIGIN
        steps = _place_stations(
            segment.stations,
            direction,
            config,
            get_label_boxes,
            None,
            placed.offset(start.offset_to(ORIGIN)),
            positions[-1].side if positions else None,
            f"{line.id} (segment {i + 1})",
            segment_conflicts,
            line.label_positions,
        )
        minimal = _spread(steps, direction.vector.unit(), 0.0)
        if positions:
            minimal = _continue_from(positions[-1], minimal, direction, line.id)
        placed = placed.add(*_fit_boxes_at(steps, minimal))
        laid_out.append((direction, steps))
        positions.extend(minimal)

    growth = _growth_per_gap(laid_out, *placed.headroom())
    positions = []
    for direction, steps in laid_out:
        vector = direction.vector.unit()
        offsets = [step.position.offset for step in steps[1:]]
        chosen = 0.0
        if offsets:
            # Room over uniform gaps, with each gap allowed `growth` more
            max_growth = sum(offsets) + (growth - max(offsets)) * len(offsets)
            chosen = get_offset(offsets, max_growth, compact)
        spread = _spread(steps, vector, chosen)
        if positions:
            spread = _continue_from(positions[-1], spread, direction, line.id)
        positions.extend(spread)
    return positions


def _station_candidates(
    station: Station,
    direction: Direction,
    side: Side | None,
    config: LayoutConfig,
    get_label_boxes: LabelBoxGetter,
) -> list[StationPosition]:
    sides = [side] if side is not None else list(Side)
    return [
        position
        for s in sides
        for position in generate_positions(
            station, direction, s, config, get_label_boxes
        )
    ]


def _pinned_side(
    station: Station,
    direction: Direction,
    side: Side | None,
    label_positions: Mapping[str, Direction] | None,
    debug_description: str,
) -> Side | None:
    override = (label_positions or {}).get(station.name)
    if override is None:
        return side
    pinned = direction.side_of(override)
    if pinned is None:
        warnings.warn(
            f"Label position {override.value!r} for station {station.name!r} on "
            f"line {debug_description} is on neither side of a line heading "
            f"{direction.value!r}; ignoring it",
            stacklevel=3,
        )
        return side
    return pinned


def _reduce_step(
    candidates: Sequence[Sequence[StationPosition]],
    budget: int,
    vector: PointOffset,
    bounds: BoundedBox,
    conflicts: LineConflicts,
    initial_side: Side | None,
    debug_description: str,
) -> list[_Step] | None:
    """Commit one candidate per station using at most *budget* label lines.

    Returns None if some station has no admissible candidate.
    """
    steps: list[_Step] = []
    placed = bounds
    previous: StationPosition | None = None
    previous_side = initial_side
    last = len(candidates) - 1

    for index, station_candidates in enumerate(candidates):
        best: list[tuple[StationPosition, tuple[Box, ...]]] = []
        best_cost = math.inf
        for candidate in station_candidates:
            if candidate.line_count > budget:
                continue
            fit_boxes = (
                candidate.marker.box,
                _fit_label(candidate, index, last, conflicts),
            )
            # Along-line growth is handled afterwards, so bounds are
            # checked before the push away from the previous station.
            if not placed.can_fit(*fit_boxes):
                continue
            offset = 0.0
            if previous is not None:
                offset = separation_factor(
                    previous.safe_areas,
                    (candidate.marker.box, candidate.label.box),
                    vector,
                )
                if math.isinf(offset):
                    continue
            cost = candidate.score_for(previous_side)
            if cost < best_cost:
                best_cost = cost
                best = []
            if cost == best_cost:
                best.append((replace(candidate, offset=offset, cost=cost), fit_boxes))

        if not best:
            return None
        if len(best) > 1:
            logger.debug(
                "Line %s: %d equally good placements for station %r, using the first",
                debug_description,
                len(best),
                station_candidates[0].station.name,
            )
        position, fit_boxes = best[0]
        steps.append(_Step(position, fit_boxes))
        placed = placed.add(*fit_boxes)
        previous = position
        previous_side = position.side

    return steps


def _fit_label(
    candidate: StationPosition, index: int, last: int, conflicts: LineConflicts
) -> Box:
    """The label box to check against bounds; open line ends may be trimmed."""
    # A lone station is both ends; its start trim is used
    for end, at_end in (("start", index == 0), ("end", index == last)):
        if at_end and not conflicts.blocks(end, candidate.side):
            return candidate.label_box(end)
    return candidate.label.box


def _max_growth(
    steps: Sequence[_Step], vector: PointOffset, bounds: BoundedBox, gap: float
) -> float:
    """Room left along the line with every gap set to *gap*."""
    placed = bounds
    for i, step in enumerate(steps):
        shift = vector.scale(gap * i)
        placed = placed.add(*(box.offset(shift) for box in step.fit_boxes))

    width_room, height_room = placed.headroom()
    growth = math.inf
    for component, room in ((vector.dx, width_room), (vector.dy, height_room)):
        if component and not math.isinf(room):
            growth = min(growth, room / abs(component))
    return growth


def _fit_boxes_at(
    steps: Sequence[_Step], positions: Sequence[StationPosition]
) -> list[Box]:
    """The steps' fit boxes, moved to where their stations ended up."""
    boxes = []
    for step, position in zip(steps, positions):
        shift = step.position.marker.point.offset_to(position.marker.point)
        boxes.extend(box.offset(shift) for box in step.fit_boxes)
    return boxes


def _growth_per_gap(
    segments: Sequence[tuple[Direction, Sequence[_Step]]],
    width_room: float,
    height_room: float,
) -> float:
    """Extra length every gap may take while the line stays within its caps.

    Segments running along the same axis share that axis' room.
    """
    growth = math.inf
    for room, component in ((width_room, "dx"), (height_room, "dy")):
        if math.isinf(room):
            continue
        demand = sum(
            (len(steps) - 1) * abs(getattr(direction.vector.unit(), component))
            for direction, steps in segments
        )
        if demand > 1e-9:
            growth = min(growth, room / demand)
    return max(growth, 0.0)


def _continue_from(
    previous: StationPosition,
    placed: list[StationPosition],
    direction: Direction,
    line_id: str | None,
) -> list[StationPosition]:
    """Move a laid-out segment so it starts just past *previous*."""
    vector = direction.vector.unit()
    first = placed[0]
    to_previous = first.marker.point.offset_to(previous.marker.point)
    factor = separation_factor(
        previous.safe_areas,
        (first.marker.box.offset(to_previous), first.label.box.offset(to_previous)),
        vector,
    )
    if math.isinf(factor):
        raise LayoutError(f"Could not continue line {line_id} heading {direction.value}")
    shift = PointOffset(
        to_previous.dx + vector.dx * factor, to_previous.dy + vector.dy * factor
    )
    moved = [position.offset_by(shift) for position in placed]
    moved[0] = replace(moved[0], offset=factor)
    return moved

"""Command-line interface for transit-layout."""

from __future__ import annotations

import json
import logging
import warnings
from pathlib import Path

import click

from transit_layout import __version__
from transit_layout.layout.config import LayoutConfigError, complete_layout_config
from transit_layout.layout.direction import Direction
from transit_layout.layout.engine import LayoutError, layout_network_line
from transit_layout.layout.measure import make_label_box_getter
from transit_layout.parser.loader import NetworkFormatError, load_network_file
from transit_layout.parser.model import Network, font_family
from transit_layout.render.debug import render_debug_svg

_DIRECTIONS = [d.value for d in Direction]


@click.group()
@click.version_option(__version__, prog_name="transit-layout")
@click.option(
    "-v", "--verbose", count=True, help="Log layout decisions (-vv for more)."
)
def cli(verbose: int) -> None:
    """transit-layout: place station markers and labels for transit maps."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("network_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--line",
    "line_ids",
    multiple=True,
    help="Line id to lay out (repeatable; default: every line).",
)
@click.option(
    "--direction",
    type=click.Choice(_DIRECTIONS),
    default=Direction.S.value,
    show_default=True,
    help="Heading for stretches of a line without a direction of their own.",
)
@click.option("--max-width", type=float, default=None, help="Maximum layout width, padding included.")
@click.option("--max-height", type=float, default=None, help="Maximum layout height, padding included.")
@click.option(
    "--compact/--uniform",
    default=False,
    help="Without bounds, use minimal station gaps instead of uniform ones.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the placements as JSON here instead of stdout.",
)
@click.option(
    "--debug-svg",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also draw the placements to this SVG file.",
)
def layout(
    network_file: str,
    line_ids: tuple[str, ...],
    direction: str,
    max_width: float | None,
    max_height: float | None,
    compact: bool,
    output: str | None,
    debug_svg: str | None,
) -> None:
    """Compute marker and label placements for the lines of NETWORK_FILE."""
    network = _load(network_file)
    try:
        config = complete_layout_config(network.layout_config)
    except LayoutConfigError as e:
        raise click.ClickException(f"Invalid layout configuration: {e}") from e

    family = font_family(network.font) if network.font else None
    get_label_boxes = make_label_box_getter(
        config, hyphenation=network.hyphenation, font_family=family
    )
    bounds = config.drawing_bounds(max_width, max_height)

    layouts = {}
    for line_id in _selected_lines(network, line_ids):
        try:
            layouts[line_id] = layout_network_line(
                network,
                line_id,
                config,
                get_label_boxes,
                bounds=bounds,
                compact=compact,
                default_direction=Direction(direction),
            )
        except LayoutError as e:
            raise click.ClickException(str(e)) from e

    result = json.dumps(
        {line_id: [p.to_dict() for p in positions] for line_id, positions in layouts.items()},
        indent=2,
    )
    if output:
        Path(output).write_text(result + "\n")
        click.echo(f"Wrote {output}")
    else:
        click.echo(result)

    if debug_svg:
        colors = {line.id: line.color for line in network.lines}
        Path(debug_svg).write_text(
            render_debug_svg(layouts, config, colors=colors, font_family=family)
        )
        click.echo(f"Wrote {debug_svg}", err=True)


@cli.command()
@click.argument("network_file", type=click.Path(exists=True, dir_okay=False))
def segments(network_file: str) -> None:
    """Print how each line of NETWORK_FILE splits into direction segments."""
    network = _load(network_file)
    for line in network.lines:
        click.echo(f"{line.id}:")
        for segment in line.direction_segments:
            heading = segment.direction.value if segment.direction else "-"
            names = ", ".join(station.name for station in segment.stations)
            click.echo(f"  {heading:>2}  {names}")


def _load(network_file: str) -> Network:
    try:
        return load_network_file(network_file)
    except NetworkFormatError as e:
        raise click.ClickException(f"Invalid network file: {e}") from e


def _selected_lines(network: Network, line_ids: tuple[str, ...]) -> list[str]:
    known = [line.id for line in network.lines]
    if not line_ids:
        return known
    selected = []
    for line_id in line_ids:
        if line_id in known:
            selected.append(line_id)
        else:
            warnings.warn(f"No line with id {line_id!r} in network; skipping it", stacklevel=2)
    return selected


if __name__ == "__main__":
    cli()

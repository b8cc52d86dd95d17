#!/usr/bin/env python3
"""Lay out every example network and draw the placements to debug SVGs.

Outputs go to /tmp/transit_layout_renders/.

Usage:
    python scripts/render_examples.py [--compact] [--max-width W]
"""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from transit_layout.geometry.bounded_box import BoundedBox  # noqa: E402
from transit_layout.layout.config import (  # noqa: E402
    LayoutConfigError,
    complete_layout_config,
)
from transit_layout.layout.engine import LayoutError, layout_network_line  # noqa: E402
from transit_layout.layout.measure import make_label_box_getter  # noqa: E402
from transit_layout.parser.loader import (  # noqa: E402
    NetworkFormatError,
    load_network_file,
)
from transit_layout.parser.model import font_family  # noqa: E402
from transit_layout.render.debug import render_debug_svg  # noqa: E402

OUTPUT_DIR = Path("/tmp/transit_layout_renders")
EXAMPLES_DIR = project_root / "examples"


def render_file(
    json_path: Path,
    output_dir: Path,
    *,
    compact: bool = False,
    max_width: float | None = None,
) -> tuple[str, list[str]]:
    """Load, lay out and draw one network document.

    Returns (name, list_of_issues). Warnings raised while loading or
    laying out are reported as issues.
    """
    name = json_path.stem
    issues: list[str] = []

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            network = load_network_file(json_path)
            config = complete_layout_config(network.layout_config)
        except (NetworkFormatError, LayoutConfigError) as e:
            return name, [f"PARSE ERROR: {e}"]

        family = font_family(network.font) if network.font else None
        get_label_boxes = make_label_box_getter(
            config, hyphenation=network.hyphenation, font_family=family
        )
        bounds = BoundedBox.unbounded(max_width=max_width)
        layouts = {}
        for line in network.lines:
            try:
                layouts[line.id] = layout_network_line(
                    network, line.id, config, get_label_boxes,
                    bounds=bounds, compact=compact,
                )
            except LayoutError as e:
                issues.append(f"LAYOUT ERROR: {e}")
    issues.extend(f"warning: {w.message}" for w in caught)

    colors = {line.id: line.color for line in network.lines}
    svg_str = render_debug_svg(layouts, config, colors=colors, font_family=family)
    (output_dir / f"{name}.svg").write_text(svg_str)
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Render all example networks")
    parser.add_argument(
        "--compact", action="store_true", help="Use minimal gaps between stations"
    )
    parser.add_argument(
        "--max-width", type=float, default=None, help="Maximum width of each line"
    )
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    all_files = sorted(EXAMPLES_DIR.glob("*.json"))
    print(f"Rendering {len(all_files)} files to {OUTPUT_DIR}/")
    print()

    max_name_len = max((len(f.stem) for f in all_files), default=0)
    any_errors = False

    for json_path in all_files:
        name, issues = render_file(
            json_path, OUTPUT_DIR, compact=args.compact, max_width=args.max_width
        )
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()

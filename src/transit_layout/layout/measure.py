"""Text measurement for station labels.

The layout engine never measures text itself; it calls a
``get_label_boxes`` callback. This module builds that callback from any
per-line measurer, with a character-width estimate for use where no
real text renderer is available.
"""

from __future__ import annotations

__all__ = [
    "LabelBoxGetter",
    "LineMeasurer",
    "MeasurementCache",
    "TextStyle",
    "estimate_line_box",
    "make_label_box_getter",
]

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict, dataclass

from transit_layout.layout.config import LayoutConfig
from transit_layout.layout.constants import (
    ASCENT_EM,
    CHAR_WIDTH_EM,
    DEFAULT_FONT_FAMILY,
    DESCENT_EM,
)
from transit_layout.layout.text_wrap import (
    LineBox,
    TextBox,
    best_wrappings_by_line_count,
    hyphenations,
)
from transit_layout.parser.model import Station


@dataclass(frozen=True)
class TextStyle:
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = 16
    font_weight: int = 400
    text_anchor: str = "start"
    dominant_baseline: str = "alphabetic"

    def key(self, text: str) -> str:
        """Canonical serialisation of (style, text)."""
        return json.dumps([asdict(self), text], sort_keys=True)


LineMeasurer = Callable[[TextStyle, str], LineBox]
LabelBoxGetter = Callable[..., Sequence[TextBox]]


def estimate_line_box(style: TextStyle, text: str) -> LineBox:
    """Approximate a line's box from its character count."""
    width = len(text) * style.font_size * CHAR_WIDTH_EM
    ascent = style.font_size * ASCENT_EM
    descent = style.font_size * DESCENT_EM

    if style.text_anchor == "middle":
        x = -width / 2
    elif style.text_anchor == "end":
        x = -width
    else:
        x = 0.0

    if style.dominant_baseline == "hanging":
        y = 0.0
    elif style.dominant_baseline in ("middle", "central"):
        y = -(ascent + descent) / 2
    else:
        y = -ascent

    return LineBox(text=text, x=x, y=y, width=width, height=ascent + descent)


class MeasurementCache:
    """Memoise a line measurer by (style, text).

    Entries are never evicted; drop the cache when fonts change.
    """

    def __init__(self, measure: LineMeasurer):
        self._measure = measure
        self._entries: dict[str, LineBox] = {}
        self.hits = 0

    def __call__(self, style: TextStyle, text: str) -> LineBox:
        key = style.key(text)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        box = self._measure(style, text)
        self._entries[key] = box
        return box

    def __len__(self) -> int:
        return len(self._entries)


def make_label_box_getter(
    config: LayoutConfig,
    measure: LineMeasurer = estimate_line_box,
    hyphenation: Mapping[str, str] | None = None,
    font_family: str | None = None,
    cache: bool = True,
) -> LabelBoxGetter:
    """Build the ``get_label_boxes`` callback used by ``layout_line``.

    The callback returns the best wrapping of the station name for each
    possible line count, ascending, measured with the given text hints.
    """
    measure_line = MeasurementCache(measure) if cache else measure
    family = font_family or DEFAULT_FONT_FAMILY

    def get_label_boxes(
        station: Station,
        text_anchor: str | None = None,
        dominant_baseline: str | None = None,
    ) -> list[TextBox]:
        style = TextStyle(
            font_family=family,
            font_size=config.label.font_size,
            font_weight=config.label.font_weight,
            text_anchor=text_anchor or "start",
            dominant_baseline=dominant_baseline or "alphabetic",
        )
        wrappings = [
            [measure_line(style, line) for line in variant.split("\n")]
            for variant in hyphenations(station.name, hyphenation)
        ]
        return best_wrappings_by_line_count(wrappings, config.label.line_spacing)

    return get_label_boxes

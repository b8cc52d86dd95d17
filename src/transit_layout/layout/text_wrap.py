"""Choosing how to break a station label over several lines.

Candidate wrappings come from ``hyphenations``: every combination of
breaking at a space, an existing hyphen, or a marked hyphenation point.
Each wrapping is measured line by line and the most compact one is kept
for every distinct line count.
"""

from __future__ import annotations

__all__ = [
    "LineBox",
    "TextBox",
    "best_wrappings_by_line_count",
    "hyphenation_alternatives",
    "hyphenations",
    "select_best_wrapping",
    "wrapping_rank",
]

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from itertools import groupby

# A word piece followed by the break opportunity that ends it
_PART_RE = re.compile(r"[^~\- ]*(?:~|-| +|$)")


@dataclass(frozen=True)
class LineBox:
    """One measured line of text; x/y are relative to the line's anchor."""

    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextBox:
    """A complete wrapped label with its aggregate metrics.

    ``x`` is the leftmost line's left edge and ``y`` the top of the
    first line, both relative to the anchor of the first line's
    baseline. ``width`` is the widest line, ``min_width`` the narrowest.
    """

    lines: tuple[str, ...]
    x: float
    y: float
    width: float
    height: float
    min_width: float
    line_widths: tuple[float, ...] = ()
    label: str = "label"

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @classmethod
    def from_lines(cls, lines: Sequence[LineBox], line_spacing: float) -> TextBox:
        """Stack measured lines *line_spacing* apart, baseline to baseline."""
        if not lines:
            raise ValueError("A wrapping needs at least one line")
        first, last = lines[0], lines[-1]
        bottom = (len(lines) - 1) * line_spacing + last.y + last.height
        widths = tuple(line.width for line in lines)
        return cls(
            lines=tuple(line.text for line in lines),
            x=min(line.x for line in lines),
            y=first.y,
            width=max(widths),
            height=bottom - first.y,
            min_width=min(widths),
            line_widths=widths,
        )


def wrapping_rank(box: TextBox) -> tuple:
    """Sort key: narrowest widest line, then widest shortest line,
    then wider lines earlier."""
    return (box.width, -box.min_width, tuple(-w for w in box.line_widths))


def select_best_wrapping(candidates: Sequence[TextBox]) -> TextBox:
    """Pick the best of several wrappings; earlier candidates win ties."""
    if not candidates:
        raise ValueError("No wrappings to choose from")
    return min(candidates, key=wrapping_rank)


def best_wrappings_by_line_count(
    wrappings: Sequence[Sequence[LineBox]], line_spacing: float
) -> list[TextBox]:
    """Best wrapping for each line count, in ascending line count."""
    boxes = [TextBox.from_lines(lines, line_spacing) for lines in wrappings if lines]
    boxes.sort(key=lambda box: box.line_count)
    return [
        select_best_wrapping(list(group))
        for _, group in groupby(boxes, key=lambda box: box.line_count)
    ]


def hyphenations(text: str, hyphenation: Mapping[str, str] | None = None) -> list[str]:
    """Every way to break *text* into lines, unbroken text first.

    *hyphenation* maps plain words to their hyphenated form with ``~``
    at each allowed break. A break at ``~`` renders as ``-``; breaks at
    spaces drop the space; breaks after an existing hyphen keep it.
    """
    parts = _split_parts(_apply_hyphenation(text, hyphenation))
    if not parts:
        return [text]
    variants = []
    for mask in range(1 << (len(parts) - 1)):
        pieces = []
        for j, part in enumerate(parts):
            if (mask >> j) & 1:
                pieces.append(_strip_break(part, hyphen="-") + "\n")
            else:
                pieces.append(part[:-1] if part.endswith("~") else part)
        variants.append("".join(pieces))
    return variants


def hyphenation_alternatives(
    text: str, hyphenation: Mapping[str, str] | None = None
) -> list[str]:
    """Like ``hyphenations`` but without the unbroken text."""
    return hyphenations(text, hyphenation)[1:]


def _apply_hyphenation(text: str, hyphenation: Mapping[str, str] | None) -> str:
    if not hyphenation:
        return text
    words = []
    for word in text.split(" "):
        if word in hyphenation:
            words.append(hyphenation[word])
        else:
            words.append(
                "-".join(hyphenation.get(part, part) for part in word.split("-"))
            )
    return " ".join(words)


def _split_parts(text: str) -> list[str]:
    return [part for part in _PART_RE.findall(text) if part]


def _strip_break(part: str, hyphen: str) -> str:
    if part.endswith("~"):
        return part[:-1] + hyphen
    return part.rstrip(" ")

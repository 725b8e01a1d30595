"""Segment catalog: edge coordinates, digit patterns, and board enumeration.

A segment is an edge of the board's grid graph. Horizontal segments span
``(x, y)``-``(x + 1, y)``; vertical segments span ``(x, y)``-``(x, y + 1)``.

Local digit layout::

      a
    f   b
      g
    e   c
      d
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

GRID_WIDTH = 5
GRID_HEIGHT = 4
TOTAL_SEGMENTS = 49


class Orientation(StrEnum):
    """Segment orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def code(self) -> str:
        return "h" if self is Orientation.HORIZONTAL else "v"


@dataclass(frozen=True, slots=True)
class Segment:
    """Grid edge anchored at its top/left endpoint."""

    x: int
    y: int
    orientation: Orientation

    def translated(self, dx: int, dy: int) -> Segment:
        return Segment(self.x + dx, self.y + dy, self.orientation)


def _h(x: int, y: int) -> Segment:
    return Segment(x, y, Orientation.HORIZONTAL)


def _v(x: int, y: int) -> Segment:
    return Segment(x, y, Orientation.VERTICAL)


SEGMENT_LETTERS: dict[str, Segment] = {
    "a": _h(0, 0),
    "b": _v(1, 0),
    "c": _v(1, 1),
    "d": _h(0, 2),
    "e": _v(0, 1),
    "f": _v(0, 0),
    "g": _h(0, 1),
}

# Digit 0 has four segments, not the six of a display zero.
DIGIT_LETTERS: dict[int, str] = {
    0: "abgf",
    1: "bc",
    2: "abged",
    3: "abgcd",
    4: "fgbc",
    5: "afgcd",
    6: "afgedc",
    7: "abc",
    8: "abcdefg",
    9: "abcdfg",
}

SEGMENT_PATTERNS: dict[int, tuple[Segment, ...]] = {
    number: tuple(SEGMENT_LETTERS[letter] for letter in letters)
    for number, letters in DIGIT_LETTERS.items()
}

PIECE_NUMBERS: tuple[int, ...] = tuple(sorted(SEGMENT_PATTERNS))

PIECE_COLORS: dict[int, str] = {
    0: "#cf101d",
    1: "#db8e26",
    2: "#f7da18",
    3: "#95b93b",
    4: "#238f5b",
    5: "#9ed2f0",
    6: "#1e9cdc",
    7: "#1e5fa3",
    8: "#7f257d",
    9: "#d16ea4",
}


def base_pattern(number: int) -> tuple[Segment, ...]:
    """Return the unrotated segment pattern for a digit."""
    return SEGMENT_PATTERNS[number]


def segment_id(segment: Segment) -> str:
    """Return the stable ``"x,y,h"`` / ``"x,y,v"`` key for a segment."""
    return f"{segment.x},{segment.y},{segment.orientation.code}"


def parse_segment_id(value: str) -> Segment:
    """Inverse of :func:`segment_id`."""
    parts = value.split(",")
    if len(parts) != 3:
        raise ValueError(f"Malformed segment id: {value!r}.")
    raw_x, raw_y, code = parts
    if code == "h":
        orientation = Orientation.HORIZONTAL
    elif code == "v":
        orientation = Orientation.VERTICAL
    else:
        raise ValueError(f"Malformed segment id: {value!r}.")
    try:
        return Segment(int(raw_x), int(raw_y), orientation)
    except ValueError as exc:
        raise ValueError(f"Malformed segment id: {value!r}.") from exc


def in_grid(segment: Segment) -> bool:
    """Return whether a segment lies on the 5x4 board."""
    if segment.orientation is Orientation.HORIZONTAL:
        return 0 <= segment.x < GRID_WIDTH and 0 <= segment.y <= GRID_HEIGHT
    return 0 <= segment.x <= GRID_WIDTH and 0 <= segment.y < GRID_HEIGHT


def all_board_segments() -> list[Segment]:
    """Enumerate all 49 board segments, horizontal rows first."""
    result: list[Segment] = []
    for y in range(GRID_HEIGHT + 1):
        for x in range(GRID_WIDTH):
            result.append(_h(x, y))
    for x in range(GRID_WIDTH + 1):
        for y in range(GRID_HEIGHT):
            result.append(_v(x, y))
    return result

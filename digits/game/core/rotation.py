"""Rotation and bounding-box geometry for segment sets."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from digits.game.core.segments import Orientation, Segment, base_pattern

if TYPE_CHECKING:
    from digits.game.core.models import Piece

ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)


class RotationDirection(StrEnum):
    """Quarter-turn direction."""

    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def delta(self) -> int:
        return 90 if self is RotationDirection.CLOCKWISE else -90


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Grid-space extent of a segment set."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


def rotate_segment_90_cw(segment: Segment) -> Segment:
    """Rotate one segment a quarter turn clockwise about the grid origin."""
    if segment.orientation is Orientation.HORIZONTAL:
        return Segment(segment.y, -segment.x - 1, Orientation.VERTICAL)
    return Segment(segment.y, -segment.x, Orientation.HORIZONTAL)


def bounding_box(segments: Iterable[Segment]) -> BoundingBox:
    """Compute the extent of segments; max edges include segment length."""
    items = list(segments)
    if not items:
        raise ValueError("Cannot compute bounding box of no segments.")
    min_x = min(seg.x for seg in items)
    min_y = min(seg.y for seg in items)
    max_x = max(seg.x + 1 if seg.orientation is Orientation.HORIZONTAL else seg.x for seg in items)
    max_y = max(seg.y + 1 if seg.orientation is Orientation.VERTICAL else seg.y for seg in items)
    return BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)


def normalize_segments(segments: Sequence[Segment]) -> tuple[Segment, ...]:
    """Translate segments so the minimum raw x and y become zero."""
    if not segments:
        return ()
    min_x = min(seg.x for seg in segments)
    min_y = min(seg.y for seg in segments)
    return tuple(seg.translated(-min_x, -min_y) for seg in segments)


def rotate_segments(segments: Sequence[Segment], rotation: int) -> tuple[Segment, ...]:
    """Rotate by a multiple of 90 degrees, then normalize.

    A zero rotation returns the segments untouched, without normalization.
    """
    if rotation not in ROTATIONS:
        raise ValueError(f"Unsupported rotation: {rotation}.")
    if rotation == 0:
        return tuple(segments)
    rotated = tuple(segments)
    for _ in range(rotation // 90):
        rotated = tuple(rotate_segment_90_cw(seg) for seg in rotated)
    return normalize_segments(rotated)


@lru_cache(maxsize=len(ROTATIONS) * 10)
def segments_for(number: int, rotation: int) -> tuple[Segment, ...]:
    """Derive a digit's local segments at a rotation from its base pattern."""
    return rotate_segments(base_pattern(number), rotation)


def next_rotation(rotation: int, direction: RotationDirection) -> int:
    return (rotation + direction.delta + 360) % 360


def rotate_piece(piece: Piece, direction: RotationDirection) -> Piece:
    """Return the piece turned a quarter in ``direction``.

    Segments are re-derived from the base pattern, so four turns in the same
    direction give back exactly the original piece.
    """
    return dataclasses.replace(piece, rotation=next_rotation(piece.rotation, direction))

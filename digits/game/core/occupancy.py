"""Occupancy index: which board segments are covered by placed pieces."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

import numpy as np

from digits.game.core.models import BoardPosition, Piece, PlacedPiece
from digits.game.core.segments import (
    GRID_HEIGHT,
    GRID_WIDTH,
    Orientation,
    Segment,
    in_grid,
    parse_segment_id,
    segment_id,
)


class OccupancyOp(StrEnum):
    """Functional update operation."""

    ADD = "add"
    REMOVE = "remove"


def positions_of(piece: Piece, position: BoardPosition) -> list[Segment]:
    """Absolute board segments covered by a piece at a position."""
    return [seg.translated(position.x, position.y) for seg in piece.segments]


def ids_of(piece: Piece, position: BoardPosition) -> frozenset[str]:
    return frozenset(segment_id(seg) for seg in positions_of(piece, position))


def fits_on_board(piece: Piece, position: BoardPosition) -> bool:
    """Return whether every segment of the piece lies on the grid."""
    return all(in_grid(seg) for seg in positions_of(piece, position))


def collides(piece: Piece, position: BoardPosition, occupied: frozenset[str]) -> bool:
    """Return whether a placement leaves the grid or overlaps occupancy."""
    for seg in positions_of(piece, position):
        if not in_grid(seg):
            return True
        if segment_id(seg) in occupied:
            return True
    return False


def update(
    occupied: frozenset[str],
    piece: Piece,
    position: BoardPosition,
    op: OccupancyOp,
) -> frozenset[str]:
    """Return occupancy with the piece's segments added or removed."""
    ids = ids_of(piece, position)
    if op is OccupancyOp.ADD:
        return occupied | ids
    return occupied - ids


def derive(placed_pieces: Iterable[PlacedPiece]) -> frozenset[str]:
    """Union of segment ids contributed by placed pieces."""
    result: set[str] = set()
    for placed in placed_pieces:
        result |= ids_of(placed.piece, placed.position)
    return frozenset(result)


def occupancy_masks(occupied: Iterable[str]) -> tuple[np.ndarray, np.ndarray]:
    """Project occupancy into ``(horizontal, vertical)`` boolean grids.

    Horizontal mask is ``(GRID_HEIGHT + 1, GRID_WIDTH)``, vertical mask is
    ``(GRID_HEIGHT, GRID_WIDTH + 1)``; both are indexed ``[y, x]``.
    Off-grid ids are ignored.
    """
    horizontal = np.zeros((GRID_HEIGHT + 1, GRID_WIDTH), dtype=bool)
    vertical = np.zeros((GRID_HEIGHT, GRID_WIDTH + 1), dtype=bool)
    for value in occupied:
        seg = parse_segment_id(value)
        if not in_grid(seg):
            continue
        if seg.orientation is Orientation.HORIZONTAL:
            horizontal[seg.y, seg.x] = True
        else:
            vertical[seg.y, seg.x] = True
    return horizontal, vertical

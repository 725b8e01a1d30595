"""Placement geometry helpers for drag input.

The cursor stands for a piece's anchor, not its top-left corner, so a board
position is the cursor's grid point minus the anchor, rounded.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from digits.game.core.models import BoardPosition, Piece
from digits.game.core.segments import GRID_HEIGHT, GRID_WIDTH


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    """Pixel layout of the drawn board."""

    segment_length: float = 60.0
    padding: float = 10.0
    scale: float = 1.0

    @property
    def unit(self) -> float:
        return self.segment_length * self.scale

    def pixel_size(self) -> tuple[float, float]:
        pad = 2 * self.padding * self.scale
        return GRID_WIDTH * self.unit + pad, GRID_HEIGHT * self.unit + pad

    def contains(self, px: float, py: float) -> bool:
        width, height = self.pixel_size()
        return 0 <= px <= width and 0 <= py <= height

    def grid_to_pixel(self, x: float, y: float) -> tuple[float, float]:
        origin = self.padding * self.scale
        return origin + x * self.unit, origin + y * self.unit

    def pixel_to_grid(self, px: float, py: float) -> tuple[int, int]:
        """Nearest grid point to a board-local pixel."""
        origin = self.padding * self.scale
        return _round_half_up((px - origin) / self.unit), _round_half_up((py - origin) / self.unit)


def board_position_for_cursor(piece: Piece, grid_x: float, grid_y: float) -> BoardPosition:
    """Board position that puts the piece's anchor nearest the cursor."""
    anchor_x, anchor_y = piece.anchor
    return BoardPosition(x=_round_half_up(grid_x - anchor_x), y=_round_half_up(grid_y - anchor_y))


def cursor_for_board_position(piece: Piece, position: BoardPosition) -> tuple[float, float]:
    """Grid point where the anchor sits for a piece placed at ``position``."""
    anchor_x, anchor_y = piece.anchor
    return position.x + anchor_x, position.y + anchor_y


def board_position_at_pixel(
    geometry: BoardGeometry, piece: Piece, px: float, py: float
) -> BoardPosition | None:
    """Drop target under a board-local pixel, or None when off the board."""
    if not geometry.contains(px, py):
        return None
    grid_x, grid_y = geometry.pixel_to_grid(px, py)
    return board_position_for_cursor(piece, grid_x, grid_y)

"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from digits.game.core.anchor import anchor_for
from digits.game.core.rotation import BoundingBox, bounding_box, segments_for
from digits.game.core.segments import GRID_HEIGHT, GRID_WIDTH, PIECE_NUMBERS, TOTAL_SEGMENTS, Segment


class DragSource(StrEnum):
    """Where a lifted piece came from."""

    INVENTORY = "inventory"
    BOARD = "board"


@dataclass(frozen=True, slots=True)
class BoardPosition:
    """Board anchor: top-left of a placed piece's local bounding box."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Piece:
    """One digit piece. Geometry is always derived from number + rotation."""

    piece_id: str
    number: int
    rotation: int = 0

    @property
    def segments(self) -> tuple[Segment, ...]:
        return segments_for(self.number, self.rotation)

    @property
    def bounding_box(self) -> BoundingBox:
        return bounding_box(self.segments)

    @property
    def anchor(self) -> tuple[float, float]:
        return anchor_for(self.number, self.rotation)


@dataclass(frozen=True, slots=True)
class PlacedPiece:
    """A piece placed on the board."""

    piece: Piece
    position: BoardPosition


@dataclass(frozen=True, slots=True)
class BoardState:
    """Placed pieces plus the occupancy index they induce."""

    placed_pieces: tuple[PlacedPiece, ...] = ()
    occupied_segments: frozenset[str] = field(default_factory=frozenset)
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    total_segments: int = TOTAL_SEGMENTS

    def find(self, piece_id: str) -> PlacedPiece | None:
        """Find the placement for a piece id."""
        for placed in self.placed_pieces:
            if placed.piece.piece_id == piece_id:
                return placed
        return None


def piece_id_for(number: int) -> str:
    return f"piece-{number}"


def initial_pieces() -> tuple[Piece, ...]:
    """The ten pieces at rotation zero, in digit order."""
    return tuple(Piece(piece_id=piece_id_for(number), number=number) for number in PIECE_NUMBERS)

"""Saved-board payload schema and validation helpers."""

from __future__ import annotations

from collections.abc import Mapping

from digits.game.core import occupancy
from digits.game.core.models import BoardPosition, BoardState, Piece, PlacedPiece, piece_id_for
from digits.game.core.rotation import ROTATIONS
from digits.game.core.segments import PIECE_NUMBERS, parse_segment_id, segment_id
from digits.game.core.state import NOT_DRAGGING, Cancel, GameState, reduce

SCHEMA_VERSION = "1"
EXPECTED_PIECE_IDS = frozenset(piece_id_for(number) for number in PIECE_NUMBERS)


def state_to_payload(state: GameState, *, timestamp: int) -> dict[str, object]:
    """Convert game state to a JSON-serializable payload.

    Any in-flight drag is treated as cancelled before saving.
    """
    state = reduce(state, Cancel())
    return {
        "version": SCHEMA_VERSION,
        "timestamp": timestamp,
        "board": {
            "placedPieces": [
                {
                    **_piece_to_payload(placed.piece),
                    "position": {"x": placed.position.x, "y": placed.position.y},
                }
                for placed in state.board.placed_pieces
            ],
            "occupiedSegments": sorted(occupancy.derive(state.board.placed_pieces)),
        },
        "inventory": [_piece_to_payload(piece) for piece in state.inventory],
    }


def payload_to_state(payload: Mapping[str, object]) -> GameState:
    """Convert a loaded payload into a validated game state."""
    if not isinstance(payload, Mapping):
        raise ValueError("Saved state must be an object.")
    if str(payload.get("version", "")) != SCHEMA_VERSION:
        raise ValueError("Unsupported saved state version.")

    board = payload.get("board")
    if not isinstance(board, Mapping):
        raise ValueError("Saved board must be an object.")
    raw_placed = board.get("placedPieces")
    if not isinstance(raw_placed, list):
        raise ValueError("Saved placedPieces must be a list.")
    raw_inventory = payload.get("inventory")
    if not isinstance(raw_inventory, list):
        raise ValueError("Saved inventory must be a list.")

    placed_pieces: list[PlacedPiece] = []
    for item in raw_placed:
        if not isinstance(item, Mapping):
            raise ValueError("Each placed piece must be an object.")
        piece = _payload_to_piece(item)
        position = _payload_to_position(item.get("position"))
        if not occupancy.fits_on_board(piece, position):
            raise ValueError(f"Piece {piece.piece_id} extends off the board.")
        placed_pieces.append(PlacedPiece(piece=piece, position=position))

    inventory: list[Piece] = []
    for item in raw_inventory:
        if not isinstance(item, Mapping):
            raise ValueError("Each inventory piece must be an object.")
        inventory.append(_payload_to_piece(item))

    seen: set[str] = set()
    for piece in [placed.piece for placed in placed_pieces] + inventory:
        if piece.piece_id in seen:
            raise ValueError(f"Duplicate piece id: {piece.piece_id}.")
        seen.add(piece.piece_id)
    missing = sorted(EXPECTED_PIECE_IDS - seen)
    if missing:
        raise ValueError(f"Saved state is missing pieces: {', '.join(missing)}.")

    occupied = occupancy.derive(placed_pieces)
    if sum(len(placed.piece.segments) for placed in placed_pieces) != len(occupied):
        raise ValueError("Saved placed pieces overlap.")
    stored = _payload_to_occupancy(board.get("occupiedSegments", []))
    if stored != occupied:
        raise ValueError("Saved occupiedSegments do not match placed pieces.")

    return GameState(
        board=BoardState(placed_pieces=tuple(placed_pieces), occupied_segments=occupied),
        inventory=tuple(inventory),
        drag=NOT_DRAGGING,
    )


def _piece_to_payload(piece: Piece) -> dict[str, object]:
    return {"pieceId": piece.piece_id, "number": piece.number, "rotation": piece.rotation}


def _payload_to_piece(item: Mapping[str, object]) -> Piece:
    try:
        piece_id = item["pieceId"]
        number = item["number"]
        rotation = item["rotation"]
    except KeyError as exc:
        raise ValueError("Malformed piece entry in saved state.") from exc
    if not isinstance(piece_id, str) or not piece_id:
        raise ValueError("Piece id must be a non-empty string.")
    if not _is_int(number) or number not in PIECE_NUMBERS:
        raise ValueError(f"Piece {piece_id} has invalid number {number!r}.")
    if piece_id != piece_id_for(number):
        raise ValueError(f"Piece id {piece_id} does not match number {number}.")
    if not _is_int(rotation) or rotation not in ROTATIONS:
        raise ValueError(f"Piece {piece_id} has invalid rotation {rotation!r}.")
    return Piece(piece_id=piece_id, number=number, rotation=rotation)


def _payload_to_position(raw: object) -> BoardPosition:
    if not isinstance(raw, Mapping):
        raise ValueError("Placed piece position must be an object.")
    try:
        x, y = raw["x"], raw["y"]
    except KeyError as exc:
        raise ValueError("Placed piece position needs x and y.") from exc
    if not _is_int(x) or not _is_int(y):
        raise ValueError("Placed piece position must be integers.")
    return BoardPosition(x=x, y=y)


def _payload_to_occupancy(raw: object) -> frozenset[str]:
    if not isinstance(raw, list) or not all(isinstance(value, str) for value in raw):
        raise ValueError("Saved occupiedSegments must be a list of segment ids.")
    # Round-trip through the parser to canonicalize and reject junk.
    return frozenset(segment_id(parse_segment_id(value)) for value in raw)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

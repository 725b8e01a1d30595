"""Keyboard shortcut policy while a piece is held."""

from __future__ import annotations

from digits.game.core.rotation import RotationDirection
from digits.game.core.state import Dragging, GameState, Rotate

ROTATION_KEYS: dict[str, RotationDirection] = {
    "q": RotationDirection.COUNTERCLOCKWISE,
    "e": RotationDirection.CLOCKWISE,
}


def rotation_for_key(key: str) -> RotationDirection | None:
    """Return the rotation bound to a key, if any."""
    return ROTATION_KEYS.get(key.strip().lower())


def rotate_action_for_key(state: GameState, key: str) -> Rotate | None:
    """Build a rotate action for the in-flight piece, or None."""
    direction = rotation_for_key(key)
    drag = state.drag
    if direction is None or not isinstance(drag, Dragging):
        return None
    return Rotate(piece_id=drag.piece.piece_id, direction=direction)

"""Piece lifecycle state machine.

``reduce`` is the only way to move from one ``GameState`` to the next. Every
transition is total: input that does not apply to the current state returns
the very same state object.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from digits.game.core import occupancy
from digits.game.core.models import (
    BoardPosition,
    BoardState,
    DragSource,
    Piece,
    PlacedPiece,
    initial_pieces,
)
from digits.game.core.occupancy import OccupancyOp
from digits.game.core.rotation import RotationDirection, rotate_piece

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FromInventory:
    """Drag origin: the inventory tray."""


@dataclass(frozen=True, slots=True)
class FromBoard:
    """Drag origin: a board placement."""

    position: BoardPosition


DragOrigin = FromInventory | FromBoard


@dataclass(frozen=True, slots=True)
class NotDragging:
    """No piece is in flight."""


@dataclass(frozen=True, slots=True)
class Dragging:
    """A piece is in flight.

    ``snapshot`` is the piece exactly as it was picked up; it is the geometry
    restored at a board origin when the drag is abandoned.
    """

    piece: Piece
    origin: DragOrigin
    snapshot: Piece

    @property
    def source(self) -> DragSource:
        return DragSource.BOARD if isinstance(self.origin, FromBoard) else DragSource.INVENTORY


DragState = NotDragging | Dragging

NOT_DRAGGING = NotDragging()


@dataclass(frozen=True, slots=True)
class GameState:
    """Root aggregate: board, inventory tray, and drag state."""

    board: BoardState = field(default_factory=BoardState)
    inventory: tuple[Piece, ...] = ()
    drag: DragState = NOT_DRAGGING

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.drag, Dragging)

    def inventory_piece(self, piece_id: str) -> Piece | None:
        for piece in self.inventory:
            if piece.piece_id == piece_id:
                return piece
        return None


@dataclass(frozen=True, slots=True)
class PickUp:
    piece_id: str
    source: DragSource
    position: BoardPosition | None = None


@dataclass(frozen=True, slots=True)
class Drop:
    position: BoardPosition


@dataclass(frozen=True, slots=True)
class Cancel:
    pass


@dataclass(frozen=True, slots=True)
class Rotate:
    piece_id: str
    direction: RotationDirection


@dataclass(frozen=True, slots=True)
class ReturnToInventory:
    piece_id: str


@dataclass(frozen=True, slots=True)
class Reset:
    pass


@dataclass(frozen=True, slots=True)
class LoadState:
    state: GameState


Action = PickUp | Drop | Cancel | Rotate | ReturnToInventory | Reset | LoadState


def initial_state() -> GameState:
    """Fresh game: ten unrotated pieces in the tray, empty board."""
    return GameState(board=BoardState(), inventory=initial_pieces(), drag=NOT_DRAGGING)


def reduce(state: GameState, action: Action) -> GameState:
    """Apply one action and return the resulting state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("ignored_action type=%s", type(action).__name__)
        return state
    return handler(state, action)


def can_drop(state: GameState, position: BoardPosition) -> bool:
    """Return whether dropping the in-flight piece at ``position`` would succeed."""
    if not isinstance(state.drag, Dragging):
        return False
    return not occupancy.collides(state.drag.piece, position, state.board.occupied_segments)


def _pick_up(state: GameState, action: PickUp) -> GameState:
    if state.is_dragging:
        logger.debug("pickup_rejected reason=drag_active piece=%s", action.piece_id)
        return state
    if action.source is DragSource.INVENTORY:
        piece = state.inventory_piece(action.piece_id)
        if piece is None:
            logger.debug("pickup_rejected reason=not_in_inventory piece=%s", action.piece_id)
            return state
        return replace(state, drag=Dragging(piece=piece, origin=FromInventory(), snapshot=piece))

    placed = state.board.find(action.piece_id)
    if placed is None or (action.position is not None and action.position != placed.position):
        logger.debug("pickup_rejected reason=not_on_board piece=%s", action.piece_id)
        return state
    occupied = occupancy.update(
        state.board.occupied_segments, placed.piece, placed.position, OccupancyOp.REMOVE
    )
    return replace(
        state,
        board=replace(state.board, occupied_segments=occupied),
        drag=Dragging(piece=placed.piece, origin=FromBoard(placed.position), snapshot=placed.piece),
    )


def _drop(state: GameState, action: Drop) -> GameState:
    drag = state.drag
    if not isinstance(drag, Dragging):
        return state
    if occupancy.collides(drag.piece, action.position, state.board.occupied_segments):
        logger.debug("drop_rejected piece=%s x=%s y=%s", drag.piece.piece_id, action.position.x, action.position.y)
        return _abandon_drag(state, drag)

    occupied = occupancy.update(
        state.board.occupied_segments, drag.piece, action.position, OccupancyOp.ADD
    )
    moved = PlacedPiece(piece=drag.piece, position=action.position)
    if isinstance(drag.origin, FromInventory):
        inventory = tuple(p for p in state.inventory if p.piece_id != drag.piece.piece_id)
        placed_pieces = state.board.placed_pieces + (moved,)
    else:
        inventory = state.inventory
        placed_pieces = tuple(
            moved if placed.piece.piece_id == drag.piece.piece_id else placed
            for placed in state.board.placed_pieces
        )
    return GameState(
        board=replace(state.board, placed_pieces=placed_pieces, occupied_segments=occupied),
        inventory=inventory,
        drag=NOT_DRAGGING,
    )


def _cancel(state: GameState, action: Cancel) -> GameState:
    if not isinstance(state.drag, Dragging):
        return state
    return _abandon_drag(state, state.drag)


def _abandon_drag(state: GameState, drag: Dragging) -> GameState:
    if isinstance(drag.origin, FromInventory):
        return replace(state, drag=NOT_DRAGGING)
    # Same geometry that was removed at pickup goes back.
    occupied = occupancy.update(
        state.board.occupied_segments, drag.snapshot, drag.origin.position, OccupancyOp.ADD
    )
    return replace(
        state,
        board=replace(state.board, occupied_segments=occupied),
        drag=NOT_DRAGGING,
    )


def _rotate(state: GameState, action: Rotate) -> GameState:
    drag = state.drag
    in_flight = isinstance(drag, Dragging) and drag.piece.piece_id == action.piece_id
    in_inventory = state.inventory_piece(action.piece_id) is not None
    if not in_flight and not in_inventory:
        return state

    inventory = tuple(
        rotate_piece(piece, action.direction) if piece.piece_id == action.piece_id else piece
        for piece in state.inventory
    )
    if in_flight:
        drag = replace(drag, piece=rotate_piece(drag.piece, action.direction))
    return replace(state, inventory=inventory, drag=drag)


def _return_to_inventory(state: GameState, action: ReturnToInventory) -> GameState:
    drag = state.drag
    if isinstance(drag, Dragging) and drag.piece.piece_id == action.piece_id:
        if isinstance(drag.origin, FromInventory):
            return _abandon_drag(state, drag)
        # Board occupancy was already released at pickup.
        return GameState(
            board=replace(
                state.board,
                placed_pieces=_without(state.board.placed_pieces, action.piece_id),
            ),
            inventory=_append_unique(state.inventory, drag.piece),
            drag=NOT_DRAGGING,
        )

    placed = state.board.find(action.piece_id)
    if placed is None:
        return state
    occupied = occupancy.update(
        state.board.occupied_segments, placed.piece, placed.position, OccupancyOp.REMOVE
    )
    return replace(
        state,
        board=replace(
            state.board,
            placed_pieces=_without(state.board.placed_pieces, action.piece_id),
            occupied_segments=occupied,
        ),
        inventory=_append_unique(state.inventory, placed.piece),
    )


def _reset(state: GameState, action: Reset) -> GameState:
    return initial_state()


def _load_state(state: GameState, action: LoadState) -> GameState:
    return action.state


def _without(placed_pieces: tuple[PlacedPiece, ...], piece_id: str) -> tuple[PlacedPiece, ...]:
    return tuple(placed for placed in placed_pieces if placed.piece.piece_id != piece_id)


def _append_unique(inventory: tuple[Piece, ...], piece: Piece) -> tuple[Piece, ...]:
    if any(existing.piece_id == piece.piece_id for existing in inventory):
        return inventory
    return inventory + (piece,)


_HANDLERS: dict[type, Callable[[GameState, Action], GameState]] = {
    PickUp: _pick_up,
    Drop: _drop,
    Cancel: _cancel,
    Rotate: _rotate,
    ReturnToInventory: _return_to_inventory,
    Reset: _reset,
    LoadState: _load_state,
}


def invariant_violations(state: GameState) -> list[str]:
    """List every broken structural invariant of ``state``.

    While a board-sourced piece is in flight its placement stays listed but
    its footprint is not part of the occupancy index.
    """
    problems: list[str] = []
    drag = state.drag
    lifted_id: str | None = None
    if isinstance(drag, Dragging):
        if isinstance(drag.origin, FromInventory):
            if state.inventory_piece(drag.piece.piece_id) is None:
                problems.append(f"In-flight piece {drag.piece.piece_id} is missing from inventory.")
        else:
            lifted_id = drag.piece.piece_id
            placed = state.board.find(lifted_id)
            if placed is None or placed.position != drag.origin.position:
                problems.append(f"In-flight piece {lifted_id} has no placement at its origin.")
            elif placed.piece != drag.snapshot:
                problems.append(f"In-flight piece {lifted_id} snapshot differs from its placement.")

    ids = [p.piece_id for p in state.inventory] + [p.piece.piece_id for p in state.board.placed_pieces]
    for piece_id, count in sorted(Counter(ids).items()):
        if count > 1:
            problems.append(f"Piece {piece_id} is owned {count} times.")

    grounded = [p for p in state.board.placed_pieces if p.piece.piece_id != lifted_id]
    for placed in grounded:
        if not occupancy.fits_on_board(placed.piece, placed.position):
            problems.append(f"Piece {placed.piece.piece_id} extends off the board.")
    expected = occupancy.derive(grounded)
    if sum(len(p.piece.segments) for p in grounded) != len(expected):
        problems.append("Placed pieces overlap.")
    if expected != state.board.occupied_segments:
        problems.append(
            "Occupancy drift: "
            f"missing={sorted(expected - state.board.occupied_segments)} "
            f"extra={sorted(state.board.occupied_segments - expected)}."
        )
    return problems

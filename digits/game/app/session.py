"""Single owner of the live game state."""

from __future__ import annotations

import logging

from digits.game.core.state import Action, GameState, Reset, initial_state, invariant_violations, reduce
from digits.game.infra.app_data import resolve_save_file
from digits.game.infra.config import env_flag
from digits.game.persistence.repository import SaveRepository
from digits.game.persistence.service import SaveService

logger = logging.getLogger(__name__)


class GameSession:
    """Holds the current state and funnels every change through ``reduce``.

    Settled states (nothing in flight) are saved after each change; a Reset
    removes the save instead. A failed save only updates ``status``; the
    in-memory state stays authoritative.
    """

    def __init__(
        self,
        save_service: SaveService | None = None,
        state: GameState | None = None,
        *,
        check_invariants: bool = False,
        status: str | None = None,
    ) -> None:
        self._save_service = save_service
        self._state = state if state is not None else initial_state()
        self._check_invariants = check_invariants
        self._status = status

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> str | None:
        """Last user-facing storage notice, if any."""
        return self._status

    def dispatch(self, action: Action) -> GameState:
        """Apply an action; returns the resulting state."""
        previous = self._state
        current = reduce(previous, action)
        if current is previous:
            return current
        self._state = current
        logger.debug(
            "transition action=%s placed=%d inventory=%d dragging=%s",
            type(action).__name__,
            len(current.board.placed_pieces),
            len(current.inventory),
            current.is_dragging,
        )
        if self._check_invariants:
            for problem in invariant_violations(current):
                logger.error("invariant_violation action=%s detail=%s", type(action).__name__, problem)
        if self._save_service is not None and not current.is_dragging:
            if isinstance(action, Reset):
                result = self._save_service.clear()
            else:
                result = self._save_service.save(current)
            self._status = result.status
        return current


def open_session(save_service: SaveService | None = None) -> GameSession:
    """Create a session restored from the saved board, or a fresh one."""
    service = save_service or SaveService(SaveRepository(resolve_save_file()))
    loaded = service.load()
    session = GameSession(
        service,
        loaded.state,
        check_invariants=env_flag("DIGITS_CHECK_INVARIANTS"),
        status=loaded.status,
    )
    logger.info("session_opened restored=%s", loaded.restored)
    return session

"""Saved-board use cases with graceful degradation."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from digits.game.core.state import GameState, initial_state
from digits.game.persistence.repository import SaveRepository
from digits.game.persistence.schema import payload_to_state, state_to_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadResult:
    state: GameState
    restored: bool
    status: str | None = None


@dataclass(frozen=True, slots=True)
class SaveResult:
    success: bool
    status: str | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


class SaveService:
    """Load and save the board; storage problems never escape."""

    def __init__(self, repository: SaveRepository, clock: Callable[[], int] = _now_ms) -> None:
        self._repository = repository
        self._clock = clock

    def load(self) -> LoadResult:
        """Load the saved board, falling back to a fresh one."""
        if not self._repository.exists():
            return LoadResult(state=initial_state(), restored=False)
        try:
            payload = self._repository.load_payload()
        except (OSError, json.JSONDecodeError, ValueError) as exc:
            logger.warning("save_load_failed path=%s error=%s", self._repository.path, exc)
            return LoadResult(
                state=initial_state(),
                restored=False,
                status="Saved board could not be read. Starting fresh.",
            )
        try:
            state = payload_to_state(payload)
        except ValueError as exc:
            logger.warning("save_invalid path=%s reason=%s", self._repository.path, exc)
            return LoadResult(
                state=initial_state(),
                restored=False,
                status="Saved board was invalid. Starting fresh.",
            )
        logger.info(
            "save_loaded placed=%d inventory=%d",
            len(state.board.placed_pieces),
            len(state.inventory),
        )
        return LoadResult(state=state, restored=True)

    def save(self, state: GameState) -> SaveResult:
        """Persist the board; failures are logged and reported, not raised."""
        try:
            self._repository.save_payload(state_to_payload(state, timestamp=self._clock()))
        except (OSError, TypeError, ValueError):
            logger.exception("save_write_failed path=%s", self._repository.path)
            return SaveResult(success=False, status="Board could not be saved.")
        return SaveResult(success=True)

    def clear(self) -> SaveResult:
        """Remove the saved board."""
        try:
            self._repository.delete()
        except OSError:
            logger.exception("save_delete_failed path=%s", self._repository.path)
            return SaveResult(success=False, status="Saved board could not be removed.")
        return SaveResult(success=True)

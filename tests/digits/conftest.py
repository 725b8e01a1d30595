from __future__ import annotations

from collections.abc import Callable

import pytest

from digits.game.core.state import Action, GameState, initial_state, invariant_violations, reduce
from digits.game.persistence.repository import SaveRepository
from digits.game.persistence.service import SaveService


def run_actions(state: GameState, *actions: Action) -> GameState:
    """Reduce actions in order, failing on any invariant drift."""
    for action in actions:
        state = reduce(state, action)
        problems = invariant_violations(state)
        assert not problems, f"after {action!r}: {problems}"
    return state


@pytest.fixture
def fresh_state() -> GameState:
    return initial_state()


@pytest.fixture
def play() -> Callable[..., GameState]:
    return run_actions


@pytest.fixture
def save_service(tmp_path) -> SaveService:
    return SaveService(SaveRepository(tmp_path / "saves" / "board.json"), clock=lambda: 1_700_000_000_000)

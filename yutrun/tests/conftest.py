"""
Pytest fixtures for Yut Run tests.
"""

import pytest
from typing import Callable, Iterable

from ..engine_core.board import TERMINAL_NODE, SpecialNodeType
from ..engine_core.rng import HandToken
from ..engine_core.setup import GameConfig, initialize_game_state
from ..engine_core.state import GamePhase, GameState, finish_stack, spawn_piece_from_home


@pytest.fixture
def fresh_state() -> GameState:
    """New game with a fixed seed and no special nodes."""
    return initialize_game_state(GameConfig(seed="test", special_nodes={}))


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """
    Build a state with stacks already on the board.

    Stacks are spawned in the order given, so the first position gets
    stack-1. Finished pieces are taken off after the positioned stacks.
    """
    def _make(
        positions: Iterable[str] = (),
        hand: Iterable[str] = (),
        phase: GamePhase = GamePhase.PLAY,
        finished: int = 0,
        special_nodes: dict[str, SpecialNodeType] | None = None,
        seed: str = "test",
    ) -> GameState:
        state = initialize_game_state(GameConfig(seed=seed, special_nodes=special_nodes or {}))
        for position in positions:
            state = spawn_piece_from_home(state, position)
        for _ in range(finished):
            state = spawn_piece_from_home(state, TERMINAL_NODE)
            state = finish_stack(state, state.stacks[-1].id)
        return state._copy_with(
            phase=phase,
            hand=tuple(HandToken.of(result) for result in hand),
            throws_remaining=0 if phase == GamePhase.PLAY else state.throws_remaining,
        )

    return _make


@pytest.fixture
def fixed_draw() -> Callable[[list[float]], Callable[[], float]]:
    """Draw source that replays the given values in order and counts calls."""
    def _fixed(values: list[float]):
        values = list(values)

        def draw() -> float:
            draw.calls += 1
            return values[(draw.calls - 1) % len(values)]

        draw.calls = 0
        return draw

    return _fixed

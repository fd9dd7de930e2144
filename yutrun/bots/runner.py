"""
Game Runner - Plays a whole game with a bot policy.

The loop:
1. Ask the action generator for the legal actions
2. Let the policy pick one
3. Apply it through the reducer
4. Repeat until GAME_OVER with no reward left to claim
"""

from __future__ import annotations
from dataclasses import dataclass, field

from loguru import logger

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.setup import GameConfig, initialize_game_state
from ..engine_core.state import GamePhase, GameState
from .policy import BotPolicy


DEFAULT_MAX_ACTIONS = 5000


@dataclass
class GameRecord:
    """Outcome of one simulated game."""
    seed: str
    final_state: GameState
    actions: list[Action] = field(default_factory=list)

    @property
    def turns(self) -> int:
        return self.final_state.turn

    @property
    def finished(self) -> bool:
        return (
            self.final_state.phase == GamePhase.GAME_OVER
            and self.final_state.pending_reward is None
        )


def play_game(
    policy: BotPolicy,
    config: GameConfig | None = None,
    max_actions: int = DEFAULT_MAX_ACTIONS,
) -> GameRecord:
    """
    Play one game to completion.

    Stops early after max_actions so a broken policy cannot loop forever;
    check GameRecord.finished.
    """
    config = config or GameConfig()
    reducer = Reducer(config=config)
    state = initialize_game_state(config)
    record = GameRecord(seed=state.seed, final_state=state)

    for _ in range(max_actions):
        actions = legal_actions(state)
        if not actions:
            break
        decision = policy.select_action(state, actions)
        result = reducer.apply(state, decision.action)
        if not result.success:
            raise RuntimeError(f"{policy.get_name()} chose an illegal action: {result.error}")
        state = result.new_state
        record.actions.append(decision.action)

    record.final_state = state
    logger.debug(
        f"{policy.get_name()} played seed {record.seed}: "
        f"{record.turns} turns, {len(record.actions)} actions"
    )
    return record

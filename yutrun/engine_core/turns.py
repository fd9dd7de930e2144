"""
Turn State Machine - Phase transitions.

Phases:
    THROW -> PLAY -> (REWARD -> PLAY) -> THROW
    any phase -> GAME_OVER once all four pieces have finished

Each function checks its own preconditions and raises instead of
silently ignoring a call made in the wrong phase.
"""

from __future__ import annotations

from loguru import logger

from .errors import InvalidReferenceError, InvalidStateError
from .rng import HandToken, grants_bonus
from .state import GamePhase, GameState, PendingReward, add_hand_token, is_game_over
from ..content.artifacts import Artifact


def apply_throw(state: GameState, token: HandToken) -> GameState:
    """
    Add a thrown token to the hand and spend a throw.

    YUT and MO give the throw back, so their net effect on
    throws_remaining is zero.
    """
    if state.phase != GamePhase.THROW:
        raise InvalidStateError("Can only throw in THROW phase")
    if state.throws_remaining <= 0:
        raise InvalidStateError("No throws remaining")

    throws = max(0, state.throws_remaining - 1)
    if grants_bonus(token.result):
        throws += 1
    logger.debug(f"Threw {token.result.value} ({token.steps}), throws remaining {throws}")
    return add_hand_token(state, token)._copy_with(throws_remaining=throws)


def transition_to_play(state: GameState) -> GameState:
    if state.phase != GamePhase.THROW:
        raise InvalidStateError("Can only transition to PLAY from THROW phase")
    if state.throws_remaining > 0:
        raise InvalidStateError("Cannot start moving: throws remaining")
    if not state.hand:
        raise InvalidStateError("Cannot start moving: hand is empty")
    logger.debug(f"Turn {state.turn}: PLAY with {len(state.hand)} token(s)")
    return state._copy_with(phase=GamePhase.PLAY)


def advance_turn(state: GameState) -> GameState:
    """Start the next turn. The hand must already be spent."""
    if state.hand:
        raise InvalidStateError("Cannot advance turn: hand is not empty")
    logger.debug(f"Turn {state.turn} over")
    return state._copy_with(
        phase=GamePhase.THROW,
        turn=state.turn + 1,
        throws_remaining=1,
        hand=(),
    )


def end_turn(state: GameState) -> GameState:
    """Unconditional reset to the next turn, discarding any unspent tokens."""
    return state._copy_with(
        phase=GamePhase.THROW,
        turn=state.turn + 1,
        throws_remaining=1,
        hand=(),
        selected_node_id=None,
        selected_token_index=None,
    )


def resolve_after_move(state: GameState) -> GameState:
    """All finished -> GAME_OVER, empty hand -> next turn, else keep playing."""
    if is_game_over(state):
        logger.debug("All pieces finished")
        return state._copy_with(phase=GamePhase.GAME_OVER)
    if not state.hand:
        return advance_turn(state)
    return state._copy_with(phase=GamePhase.PLAY)


def transition_to_reward(state: GameState, reward: PendingReward) -> GameState:
    """
    Attach a pending reward.

    The final finish keeps the game in GAME_OVER with the reward still
    claimable; any other finish enters REWARD.
    """
    phase = GamePhase.GAME_OVER if is_game_over(state) else GamePhase.REWARD
    logger.debug(
        f"Reward for stack of {reward.stack_size}: "
        f"{[a.id for a in reward.candidates]}"
    )
    return state._copy_with(phase=phase, pending_reward=reward)


def complete_reward(state: GameState, artifact_id: str) -> GameState:
    """Collect one of the candidates, then continue as after a move."""
    reward = state.pending_reward
    if reward is None:
        raise InvalidStateError("Cannot choose reward: no pending reward")
    if state.phase not in (GamePhase.REWARD, GamePhase.GAME_OVER):
        raise InvalidStateError("Can only choose reward in REWARD phase")

    chosen: Artifact | None = next(
        (a for a in reward.candidates if a.id == artifact_id), None
    )
    if chosen is None:
        raise InvalidReferenceError(f"Artifact not among candidates: {artifact_id}")

    logger.debug(f"Collected artifact {chosen.id}")
    new_state = state._copy_with(
        artifacts=state.artifacts + (chosen,),
        pending_reward=None,
    )
    return resolve_after_move(new_state)

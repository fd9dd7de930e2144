"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through game_reducer() or Reducer.apply().

Design principles:
- Pure function: (state, action) -> new_state
- Randomness comes from the generator state stored in GameState
- Validates before applying, raises on any precondition violation
- Reducer.apply wraps the result in an ActionResult instead of raising
"""

from __future__ import annotations
from dataclasses import dataclass, field

from loguru import logger
from pydantic import ValidationError

from .action import Action, ActionResult, ActionType
from .board import BOARD, FINISHED
from .errors import InvalidInputError, InvalidReferenceError, InvalidStateError, YutError
from .events import handle_node_event, has_special_node_event, should_trigger_node_event
from .rewards import calculate_reward_choices, generate_artifact_candidates
from .rng import SeededRandom, throw_yut
from .rules import execute_move, moving_piece_count, resolve_destination
from .setup import GameConfig, initialize_game_state
from .state import (
    GamePhase,
    GameState,
    PendingReward,
    add_hand_token,
    discard_stick_offer,
    remove_hand_token,
    replace_stick_in_inventory,
)
from .turns import (
    advance_turn,
    apply_throw,
    complete_reward,
    end_turn,
    resolve_after_move,
    transition_to_play,
    transition_to_reward,
)


# Actions still accepted once the game is over
GAME_OVER_ACTIONS = frozenset({
    ActionType.NEW_GAME,
    ActionType.SET_PHASE,
    ActionType.SET_SELECTED_NODE,
    ActionType.SET_SELECTED_TOKEN,
    ActionType.CHOOSE_REWARD,
})

# Actions that wait for a pending stick offer to be resolved
BLOCKED_BY_STICK_OFFER = frozenset({
    ActionType.THROW_YUT,
    ActionType.THROW_STICKS,
    ActionType.EXECUTE_MOVE,
})


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The config supplies the special node counts used by NEW_GAME.
    """
    config: GameConfig = field(default_factory=GameConfig)

    def apply(self, state: GameState | None, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        try:
            new_state = self.reduce(state, action)
        except YutError as e:
            logger.warning(f"Rejected {action.action_type.value}: {e.message}")
            return ActionResult.failure(e.message, error_code=e.code)
        return ActionResult.success_with_state(
            new_state,
            changes=describe_changes(state, new_state),
        )

    def reduce(self, state: GameState | None, action: Action) -> GameState:
        """Apply an action, raising a YutError if it is not legal."""
        self._validate_action(state, action)
        handler = self._get_handler(action.action_type)
        if handler is None:
            raise InvalidInputError(f"No handler for action type: {action.action_type}")
        logger.debug(f"Applying {action.action_type.value}")
        return handler(state, action)

    def _validate_action(self, state: GameState | None, action: Action) -> None:
        """Phase-wide checks shared by several actions."""
        if state is None:
            if action.action_type != ActionType.NEW_GAME:
                raise InvalidStateError("No game in progress")
            return

        if state.phase == GamePhase.GAME_OVER and action.action_type not in GAME_OVER_ACTIONS:
            raise InvalidStateError("Game is over")

        if state.pending_stick_offer is not None and action.action_type in BLOCKED_BY_STICK_OFFER:
            raise InvalidStateError("Resolve the pending stick offer first")

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.NEW_GAME: self._handle_new_game,
            ActionType.SET_PHASE: self._handle_set_phase,
            ActionType.INCREMENT_TURN: self._handle_increment_turn,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.ADVANCE_TURN: self._handle_advance_turn,
            ActionType.SET_THROWS_REMAINING: self._handle_set_throws_remaining,
            ActionType.INCREMENT_THROWS_REMAINING: self._handle_increment_throws_remaining,
            ActionType.DECREMENT_THROWS_REMAINING: self._handle_decrement_throws_remaining,
            ActionType.ADD_HAND_TOKEN: self._handle_add_hand_token,
            ActionType.REMOVE_HAND_TOKEN: self._handle_remove_hand_token,
            ActionType.SET_SELECTED_NODE: self._handle_set_selected_node,
            ActionType.SET_SELECTED_TOKEN: self._handle_set_selected_token,
            ActionType.THROW_YUT: self._handle_throw_yut,
            ActionType.THROW_STICKS: self._handle_throw_sticks,
            ActionType.START_MOVE: self._handle_start_move,
            ActionType.EXECUTE_MOVE: self._handle_execute_move,
            ActionType.REPLACE_STICK: self._handle_replace_stick,
            ActionType.DISCARD_STICK: self._handle_discard_stick,
            ActionType.CHOOSE_REWARD: self._handle_choose_reward,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Game lifecycle and bookkeeping
    # =========================================================================

    def _handle_new_game(self, state: GameState | None, action: Action) -> GameState:
        try:
            config = GameConfig(
                seed=action.payload.seed,
                special_nodes=self.config.special_nodes,
                stick_count=self.config.stick_count,
                refresh_count=self.config.refresh_count,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid seed: {e.errors()[0]['msg']}") from None
        return initialize_game_state(config)

    def _handle_set_phase(self, state: GameState, action: Action) -> GameState:
        if action.payload.phase is None:
            raise InvalidInputError("Phase required")
        return state._copy_with(phase=action.payload.phase)

    def _handle_increment_turn(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(turn=state.turn + 1)

    def _handle_end_turn(self, state: GameState, action: Action) -> GameState:
        return end_turn(state)

    def _handle_advance_turn(self, state: GameState, action: Action) -> GameState:
        return advance_turn(state)

    def _handle_set_throws_remaining(self, state: GameState, action: Action) -> GameState:
        count = action.payload.count
        if count is None or count < 0:
            raise InvalidInputError(f"Invalid throw count: {count}")
        return state._copy_with(throws_remaining=count)

    def _handle_increment_throws_remaining(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(throws_remaining=state.throws_remaining + 1)

    def _handle_decrement_throws_remaining(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(throws_remaining=max(0, state.throws_remaining - 1))

    def _handle_add_hand_token(self, state: GameState, action: Action) -> GameState:
        if action.payload.token is None:
            raise InvalidInputError("Hand token required")
        return add_hand_token(state, action.payload.token)

    def _handle_remove_hand_token(self, state: GameState, action: Action) -> GameState:
        index = action.payload.token_index
        if index is None:
            raise InvalidReferenceError("Invalid token index")
        return remove_hand_token(state, index)

    def _handle_set_selected_node(self, state: GameState, action: Action) -> GameState:
        node_id = action.payload.node_id
        if node_id is not None:
            BOARD.get_node(node_id)
        return state._copy_with(selected_node_id=node_id)

    def _handle_set_selected_token(self, state: GameState, action: Action) -> GameState:
        index = action.payload.token_index
        if index is not None and not 0 <= index < len(state.hand):
            raise InvalidReferenceError("Invalid token index")
        return state._copy_with(selected_token_index=index)

    # =========================================================================
    # Throwing
    # =========================================================================

    def _handle_throw_yut(self, state: GameState, action: Action) -> GameState:
        if action.payload.token is None:
            raise InvalidInputError("Hand token required")
        return apply_throw(state, action.payload.token)

    def _handle_throw_sticks(self, state: GameState, action: Action) -> GameState:
        if state.phase != GamePhase.THROW:
            raise InvalidStateError("Can only throw in THROW phase")
        if state.throws_remaining <= 0:
            raise InvalidStateError("No throws remaining")

        rng = SeededRandom.restore(state.seed, state.rng_state)
        token = throw_yut(state.stick_inventory, rng)
        return apply_throw(state, token)._copy_with(rng_state=rng.state)

    def _handle_start_move(self, state: GameState, action: Action) -> GameState:
        return transition_to_play(state)

    # =========================================================================
    # Moving
    # =========================================================================

    def _handle_execute_move(self, state: GameState, action: Action) -> GameState:
        """
        Spend a token on a move, then settle what the move caused.

        Order: move, spend token, clear selection, then either attach a
        reward (finish) or resolve the landing node, then continue the turn.
        """
        if state.phase != GamePhase.PLAY:
            raise InvalidStateError("Can only move in PLAY phase")

        payload = action.payload
        index = payload.token_index
        if index is None or not 0 <= index < len(state.hand):
            raise InvalidReferenceError("Invalid token index")
        if payload.target is None:
            raise InvalidInputError("Move target required")

        steps = state.hand[index].steps
        destination = resolve_destination(state, payload.target, steps, payload.branch_choice)
        piece_count = moving_piece_count(state, payload.target)

        new_state = execute_move(state, payload.target, steps, payload.branch_choice)
        new_state = remove_hand_token(new_state, index)._copy_with(
            selected_node_id=None,
            selected_token_index=None,
        )

        rng = SeededRandom.restore(state.seed, state.rng_state)
        if destination == FINISHED:
            candidates = generate_artifact_candidates(calculate_reward_choices(piece_count), rng)
            new_state = transition_to_reward(
                new_state,
                PendingReward(stack_size=piece_count, candidates=candidates),
            )
        elif should_trigger_node_event(destination, is_landing=True) and has_special_node_event(new_state, destination):
            new_state = handle_node_event(new_state, destination, rng)

        if new_state.pending_reward is None:
            new_state = resolve_after_move(new_state)
        return new_state._copy_with(rng_state=rng.state)

    # =========================================================================
    # Offers and rewards
    # =========================================================================

    def _handle_replace_stick(self, state: GameState, action: Action) -> GameState:
        slot = action.payload.slot_index
        if slot is None:
            raise InvalidReferenceError("Invalid slot index: must be 0-3")
        return replace_stick_in_inventory(state, slot)

    def _handle_discard_stick(self, state: GameState, action: Action) -> GameState:
        return discard_stick_offer(state)

    def _handle_choose_reward(self, state: GameState, action: Action) -> GameState:
        if action.payload.artifact_id is None:
            raise InvalidInputError("Artifact id required")
        return complete_reward(state, action.payload.artifact_id)


def describe_changes(before: GameState | None, after: GameState) -> list[str]:
    """Human-readable summary of what an action changed."""
    if before is None or after.seed != before.seed:
        return [f"New game with seed {after.seed}"]

    changes = []
    if after.phase != before.phase:
        changes.append(f"Phase {before.phase.value} -> {after.phase.value}")
    if after.turn != before.turn:
        changes.append(f"Turn {after.turn}")
    if len(after.hand) > len(before.hand):
        changes.append(f"Threw {after.hand[-1].result.value}")
    if after.pending_stick_offer and after.pending_stick_offer != before.pending_stick_offer:
        changes.append(f"Offered stick {after.pending_stick_offer.offered_stick.name}")
    if after.special_nodes != before.special_nodes:
        changes.append("Special nodes refreshed")
    if after.pending_reward and after.pending_reward != before.pending_reward:
        changes.append(f"Reward pending for stack of {after.pending_reward.stack_size}")
    if len(after.artifacts) > len(before.artifacts):
        changes.append(f"Collected {after.artifacts[-1].name}")
    return changes


def game_reducer(state: GameState | None, action: Action, config: GameConfig | None = None) -> GameState:
    """Apply an action and return the new state. Raises YutError on illegal actions."""
    return Reducer(config=config or GameConfig()).reduce(state, action)


def apply_action(state: GameState | None, action: Action, config: GameConfig | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(config=config or GameConfig())
    return reducer.apply(state, action)

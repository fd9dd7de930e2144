"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. The service to show available targets
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
Bookkeeping overrides (SET_PHASE, counters, selection) are never generated.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action, ActionType
from .board import BOARD, BranchOption
from .rules import MoveTarget, MoveTargetType, get_valid_move_targets
from .state import INVENTORY_SIZE, GamePhase, GameState


@dataclass
class ActionGenerator:
    """
    Generates legal player actions for the current game state.

    A stack on O5 or O10 gets one move per branch option; a stack on the
    center must pick a direction, so it never gets a choiceless move.
    """

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions.

        Returns a list of fully-specified Action objects.
        """
        if state.pending_stick_offer is not None and state.phase != GamePhase.GAME_OVER:
            return self._generate_offer_actions(state)

        if state.phase == GamePhase.GAME_OVER:
            return self._generate_reward_actions(state)

        if state.phase == GamePhase.REWARD:
            return self._generate_reward_actions(state)

        if state.phase == GamePhase.THROW:
            return self._generate_throw_actions(state)

        if state.phase == GamePhase.PLAY:
            return self._generate_move_actions(state)

        return []

    def _generate_offer_actions(self, state: GameState) -> list[Action]:
        actions = [Action.replace_stick(slot) for slot in range(INVENTORY_SIZE)]
        actions.append(Action.discard_stick())
        return actions

    def _generate_reward_actions(self, state: GameState) -> list[Action]:
        if state.pending_reward is None:
            return []
        return [Action.choose_reward(a.id) for a in state.pending_reward.candidates]

    def _generate_throw_actions(self, state: GameState) -> list[Action]:
        if state.throws_remaining > 0:
            return [Action.throw_sticks()]
        if state.hand:
            return [Action.start_move()]
        return [Action.advance_turn()]

    def _generate_move_actions(self, state: GameState) -> list[Action]:
        actions = []
        targets = get_valid_move_targets(state)
        for index in range(len(state.hand)):
            for target in targets:
                for choice in self._branch_choices(state, target):
                    actions.append(Action.execute_move(index, target, choice))
        return actions

    def _branch_choices(self, state: GameState, target: MoveTarget) -> list[BranchOption | None]:
        if target.type == MoveTargetType.HOME:
            return [None]
        position = state.get_stack(target.stack_id).position
        options: list[BranchOption | None] = list(BOARD.get_branch_options(position))
        return options or [None]


def legal_actions(state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(state)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(state):
        if a.action_type != action.action_type:
            continue
        if action.action_type == ActionType.EXECUTE_MOVE:
            if (
                a.payload.token_index == action.payload.token_index
                and a.payload.target == action.payload.target
                and (a.payload.branch_choice or BranchOption.OUTER) == (action.payload.branch_choice or BranchOption.OUTER)
            ):
                return True
        elif a.payload == action.payload:
            return True
    return False

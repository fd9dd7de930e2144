"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player actions (throw, move, resolve offers and rewards)
2. System actions (new game, start move, advance turn)
3. Bookkeeping overrides (phase, counters, hand, selection)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .board import BranchOption, NodeId, parse_branch_option
from .errors import InvalidInputError
from .rng import HandToken
from .rules import MoveTarget
from .state import GamePhase


class ActionType(Enum):
    """Types of actions in the system."""
    # Game lifecycle
    NEW_GAME = "NEW_GAME"
    SET_PHASE = "SET_PHASE"

    # Turn bookkeeping
    INCREMENT_TURN = "INCREMENT_TURN"
    END_TURN = "END_TURN"
    ADVANCE_TURN = "ADVANCE_TURN"
    SET_THROWS_REMAINING = "SET_THROWS_REMAINING"
    INCREMENT_THROWS_REMAINING = "INCREMENT_THROWS_REMAINING"
    DECREMENT_THROWS_REMAINING = "DECREMENT_THROWS_REMAINING"

    # Hand
    ADD_HAND_TOKEN = "ADD_HAND_TOKEN"
    REMOVE_HAND_TOKEN = "REMOVE_HAND_TOKEN"

    # UI selection
    SET_SELECTED_NODE = "SET_SELECTED_NODE"
    SET_SELECTED_TOKEN = "SET_SELECTED_TOKEN"

    # Player actions
    THROW_YUT = "THROW_YUT"
    THROW_STICKS = "THROW_STICKS"
    START_MOVE = "START_MOVE"
    EXECUTE_MOVE = "EXECUTE_MOVE"
    REPLACE_STICK = "REPLACE_STICK"
    DISCARD_STICK = "DISCARD_STICK"
    CHOOSE_REWARD = "CHOOSE_REWARD"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    seed: str | None = None
    phase: GamePhase | None = None
    token: HandToken | None = None
    token_index: int | None = None
    target: MoveTarget | None = None
    branch_choice: BranchOption | None = None
    node_id: NodeId | None = None
    slot_index: int | None = None
    artifact_id: str | None = None
    count: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Recorded for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def new_game(cls, seed: str | None = None) -> Action:
        return cls(ActionType.NEW_GAME, ActionPayload(seed=seed))

    @classmethod
    def set_phase(cls, phase: GamePhase | str) -> Action:
        return cls(ActionType.SET_PHASE, ActionPayload(phase=GamePhase(phase)))

    @classmethod
    def increment_turn(cls) -> Action:
        return cls(ActionType.INCREMENT_TURN)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(ActionType.END_TURN)

    @classmethod
    def advance_turn(cls) -> Action:
        return cls(ActionType.ADVANCE_TURN)

    @classmethod
    def set_throws_remaining(cls, count: int) -> Action:
        return cls(ActionType.SET_THROWS_REMAINING, ActionPayload(count=count))

    @classmethod
    def increment_throws_remaining(cls) -> Action:
        return cls(ActionType.INCREMENT_THROWS_REMAINING)

    @classmethod
    def decrement_throws_remaining(cls) -> Action:
        return cls(ActionType.DECREMENT_THROWS_REMAINING)

    @classmethod
    def add_hand_token(cls, token: HandToken) -> Action:
        return cls(ActionType.ADD_HAND_TOKEN, ActionPayload(token=token))

    @classmethod
    def remove_hand_token(cls, index: int) -> Action:
        return cls(ActionType.REMOVE_HAND_TOKEN, ActionPayload(token_index=index))

    @classmethod
    def set_selected_node(cls, node_id: NodeId | None) -> Action:
        return cls(ActionType.SET_SELECTED_NODE, ActionPayload(node_id=node_id))

    @classmethod
    def set_selected_token(cls, index: int | None) -> Action:
        return cls(ActionType.SET_SELECTED_TOKEN, ActionPayload(token_index=index))

    @classmethod
    def throw_yut(cls, token: HandToken) -> Action:
        """Factory for a throw whose outcome is already known."""
        return cls(ActionType.THROW_YUT, ActionPayload(token=token))

    @classmethod
    def throw_sticks(cls) -> Action:
        """Factory for a throw sampled from the stick inventory."""
        return cls(ActionType.THROW_STICKS)

    @classmethod
    def start_move(cls) -> Action:
        return cls(ActionType.START_MOVE)

    @classmethod
    def execute_move(
        cls,
        token_index: int,
        target: MoveTarget | str,
        branch_choice: BranchOption | str | None = None,
    ) -> Action:
        """Factory for a move. `target` may be "HOME" or a stack id."""
        return cls(
            ActionType.EXECUTE_MOVE,
            ActionPayload(
                token_index=token_index,
                target=MoveTarget.parse(target),
                branch_choice=parse_branch_option(branch_choice) if branch_choice else None,
            ),
        )

    @classmethod
    def replace_stick(cls, slot_index: int) -> Action:
        return cls(ActionType.REPLACE_STICK, ActionPayload(slot_index=slot_index))

    @classmethod
    def discard_stick(cls) -> Action:
        return cls(ActionType.DISCARD_STICK)

    @classmethod
    def choose_reward(cls, artifact_id: str) -> Action:
        return cls(ActionType.CHOOSE_REWARD, ActionPayload(artifact_id=artifact_id))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        """
        Build an action from a replay script entry.

        Entries look like {"type": "EXECUTE_MOVE", "token_index": 0,
        "target": "HOME"}; tokens are given by result name ("YUT").
        """
        try:
            action_type = ActionType(data["type"])
        except (KeyError, ValueError):
            raise InvalidInputError(f"Unknown action type: {data.get('type')}") from None

        try:
            if action_type == ActionType.EXECUTE_MOVE:
                return cls.execute_move(data["token_index"], data["target"], data.get("branch"))
            if action_type == ActionType.SET_PHASE:
                return cls.set_phase(data["phase"])
            token = data.get("token")
            payload = ActionPayload(
                seed=data.get("seed"),
                token=HandToken.of(token) if token else None,
                token_index=data.get("token_index"),
                node_id=data.get("node_id"),
                slot_index=data.get("slot"),
                artifact_id=data.get("artifact_id"),
                count=data.get("count"),
            )
        except (KeyError, ValueError) as e:
            raise InvalidInputError(f"Malformed {action_type.value} entry: {e}") from None
        return cls(action_type, payload)

    def to_dict(self) -> dict[str, Any]:
        """Inverse of from_dict, omitting empty fields."""
        p = self.payload
        data: dict[str, Any] = {"type": self.action_type.value}
        fields = {
            "seed": p.seed,
            "phase": p.phase.value if p.phase else None,
            "token": p.token.result.value if p.token else None,
            "token_index": p.token_index,
            "target": (p.target.stack_id or p.target.type.value) if p.target else None,
            "branch": p.branch_choice.value if p.branch_choice else None,
            "node_id": p.node_id,
            "slot": p.slot_index,
            "artifact_id": p.artifact_id,
            "count": p.count,
        }
        data.update({k: v for k, v in fields.items() if v is not None})
        return data


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])

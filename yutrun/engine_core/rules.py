"""
Movement Rules - Validation and execution of a single move.

A move either spawns a piece from HOME or advances an existing stack.

Rules:
- Spawning always walks from O0, so the first step never needs a choice
- A stack standing on a branch node needs a choice before it can move
- Finishing follows the board's overshoot rule at O20
- Landing on an occupied node merges the arriving stack into the one there
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .board import BOARD, FINISHED, HOME_NODE, TERMINAL_NODE, BranchOption, NodeId
from .errors import InvalidInputError, InvalidReferenceError, ResourceExhaustedError
from .state import (
    GameState,
    Stack,
    find_stack_at_position,
    finish_stack,
    get_home_pieces,
    merge_stacks,
    move_stack,
    spawn_piece_from_home,
)


class MoveTargetType(str, Enum):
    HOME = "HOME"
    STACK = "STACK"


@dataclass(frozen=True)
class MoveTarget:
    """What a move acts on: a fresh piece from HOME, or a stack by id."""
    type: MoveTargetType
    stack_id: str | None = None

    @classmethod
    def home(cls) -> MoveTarget:
        return cls(type=MoveTargetType.HOME)

    @classmethod
    def stack(cls, stack_id: str) -> MoveTarget:
        return cls(type=MoveTargetType.STACK, stack_id=stack_id)

    @classmethod
    def parse(cls, value: MoveTarget | str) -> MoveTarget:
        """Accept a MoveTarget, "HOME", or a stack id."""
        if isinstance(value, MoveTarget):
            return value
        if value == MoveTargetType.HOME.value:
            return cls.home()
        return cls.stack(value)


@dataclass(frozen=True)
class MoveResult:
    """Outcome preview of a move."""
    final_position: NodeId | str
    is_finished: bool
    needs_branch_choice: bool
    available_branches: tuple[BranchOption, ...] = ()


def _resolve_stack(state: GameState, target: MoveTarget) -> Stack:
    if not target.stack_id:
        raise InvalidInputError("Stack ID required for STACK move")
    stack = state.get_stack(target.stack_id)
    if stack is None:
        raise InvalidReferenceError("Stack not found")
    return stack


def _preview(final: NodeId) -> MoveResult:
    if final == FINISHED:
        return MoveResult(final_position=FINISHED, is_finished=True, needs_branch_choice=False)
    return MoveResult(final_position=final, is_finished=False, needs_branch_choice=False)


def validate_move(state: GameState, target: MoveTarget, steps: int) -> MoveResult:
    """
    Check a move without applying it.

    When the stack stands on a branch node, no final position is computed;
    the result lists the branch options and the caller must supply one to
    execute_move.
    """
    if target.type == MoveTargetType.HOME:
        if not get_home_pieces(state):
            raise ResourceExhaustedError("No pieces at HOME to spawn")
        return _preview(BOARD.traverse_steps(HOME_NODE, steps))

    if target.type == MoveTargetType.STACK:
        stack = _resolve_stack(state, target)
        if BOARD.is_branch_node(stack.position):
            return MoveResult(
                final_position=stack.position,
                is_finished=False,
                needs_branch_choice=True,
                available_branches=tuple(BOARD.get_branch_options(stack.position)),
            )
        return _preview(BOARD.traverse_steps(stack.position, steps))

    raise InvalidInputError("Invalid move target type")


def _merge_into_occupant(state: GameState, arriving: Stack, position: NodeId) -> GameState:
    others = state._copy_with(stacks=tuple(s for s in state.stacks if s.id != arriving.id))
    occupant = find_stack_at_position(others, position)
    if occupant is None:
        return state
    return merge_stacks(state, occupant.id, arriving.id)


def execute_move(
    state: GameState,
    target: MoveTarget,
    steps: int,
    branch_choice: BranchOption | str | None = None,
) -> GameState:
    """Apply a move and return the new state (finish or relocate, then merge)."""
    if target.type == MoveTargetType.HOME:
        final = BOARD.traverse_steps(HOME_NODE, steps, branch_choice)
        if final == FINISHED:
            # Spawn on the terminal node, then take it straight off
            new_state = spawn_piece_from_home(state, TERMINAL_NODE)
            return finish_stack(new_state, new_state.stacks[-1].id)

        new_state = spawn_piece_from_home(state, final)
        logger.debug(f"Spawned from HOME with {steps} steps to {final}")
        return _merge_into_occupant(new_state, new_state.stacks[-1], final)

    if target.type == MoveTargetType.STACK:
        stack = _resolve_stack(state, target)
        final = BOARD.traverse_steps(stack.position, steps, branch_choice)
        if final == FINISHED:
            return finish_stack(state, stack.id)

        logger.debug(f"Moved {stack.id} from {stack.position} to {final}")
        new_state = move_stack(state, stack.id, final)
        return _merge_into_occupant(new_state, new_state.get_stack(stack.id), final)

    raise InvalidInputError("Invalid move target type")


def get_valid_move_targets(state: GameState) -> list[MoveTarget]:
    """HOME if any piece is waiting, then every stack on the board."""
    targets: list[MoveTarget] = []
    if get_home_pieces(state):
        targets.append(MoveTarget.home())
    for stack in state.stacks:
        targets.append(MoveTarget.stack(stack.id))
    return targets


def resolve_destination(
    state: GameState,
    target: MoveTarget,
    steps: int,
    branch_choice: BranchOption | str | None = None,
) -> NodeId | str:
    """Landing node of a move (or FINISHED), without applying it."""
    if target.type == MoveTargetType.HOME:
        return BOARD.traverse_steps(HOME_NODE, steps, branch_choice)
    if target.type == MoveTargetType.STACK:
        return BOARD.traverse_steps(_resolve_stack(state, target).position, steps, branch_choice)
    raise InvalidInputError("Invalid move target type")


def moving_piece_count(state: GameState, target: MoveTarget) -> int:
    """Pieces carried by a move: one spawned piece, or the whole stack."""
    if target.type == MoveTargetType.HOME:
        return 1
    return _resolve_stack(state, target).size

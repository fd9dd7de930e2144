"""
Game State - The single aggregate the engine operates on.

Design principles:
- Immutable: every helper returns a new GameState, nothing is patched in place
- Value-owned: pieces, stacks and tokens belong to exactly one state
- Reproducible: the seed and the generator state travel with the game

Invariants:
- A piece has a position iff it is ON_BOARD
- Every stack holds at least one piece, all ON_BOARD at the stack's node
- No two stacks share a node
- The stick inventory always holds exactly four sticks
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from loguru import logger

from .board import NodeId, SpecialNodeType
from .errors import (
    InvalidInputError,
    InvalidReferenceError,
    InvalidStateError,
    ResourceExhaustedError,
)
from .rng import HandToken
from ..content.sticks import Stick, BASIC_STICK
from ..content.artifacts import Artifact


PIECE_COUNT = 4
INVENTORY_SIZE = 4


class GamePhase(str, Enum):
    """Turn phases."""
    THROW = "THROW"
    PLAY = "PLAY"
    REWARD = "REWARD"
    GAME_OVER = "GAME_OVER"


class PieceState(str, Enum):
    HOME = "HOME"
    ON_BOARD = "ON_BOARD"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class Piece:
    """One of the player's four pieces."""
    id: int
    state: PieceState = PieceState.HOME
    position: NodeId | None = None


@dataclass(frozen=True)
class Stack:
    """One or more pieces sharing a node and moving as a unit."""
    id: str
    piece_ids: tuple[int, ...]
    position: NodeId

    @property
    def size(self) -> int:
        return len(self.piece_ids)


@dataclass(frozen=True)
class StickOffer:
    """A stick offered by a STICK node, waiting to be kept or discarded."""
    offered_stick: Stick


@dataclass(frozen=True)
class PendingReward:
    """Artifact choice owed for a finished stack."""
    stack_size: int
    candidates: tuple[Artifact, ...]


def _home_pieces() -> tuple[Piece, ...]:
    return tuple(Piece(id=i) for i in range(PIECE_COUNT))


def _basic_inventory() -> tuple[Stick, ...]:
    return (BASIC_STICK,) * INVENTORY_SIZE


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer, which returns a new state.
    """
    seed: str
    rng_state: int

    # Turn
    phase: GamePhase = GamePhase.THROW
    turn: int = 1
    throws_remaining: int = 1
    hand: tuple[HandToken, ...] = ()

    # Board
    pieces: tuple[Piece, ...] = field(default_factory=_home_pieces)
    stacks: tuple[Stack, ...] = ()
    special_nodes: dict[NodeId, SpecialNodeType] = field(default_factory=dict)

    # Inventory and rewards
    stick_inventory: tuple[Stick, ...] = field(default_factory=_basic_inventory)
    artifacts: tuple[Artifact, ...] = ()
    pending_reward: PendingReward | None = None
    pending_stick_offer: StickOffer | None = None

    # UI selection bookkeeping
    selected_node_id: NodeId | None = None
    selected_token_index: int | None = None

    # Monotonic counter for stack ids
    next_stack_number: int = 1

    def get_stack(self, stack_id: str) -> Stack | None:
        for stack in self.stacks:
            if stack.id == stack_id:
                return stack
        return None

    def get_piece(self, piece_id: int) -> Piece:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        raise InvalidReferenceError(f"Piece not found: {piece_id}")

    def _copy_with(self, **kwargs: Any) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


# =============================================================================
# Queries
# =============================================================================

def get_home_pieces(state: GameState) -> list[Piece]:
    return [p for p in state.pieces if p.state == PieceState.HOME]


def get_finished_count(state: GameState) -> int:
    return sum(1 for p in state.pieces if p.state == PieceState.FINISHED)


def is_game_over(state: GameState) -> bool:
    """All four pieces have finished."""
    return get_finished_count(state) == PIECE_COUNT


def find_stack_at_position(state: GameState, position: NodeId) -> Stack | None:
    for stack in state.stacks:
        if stack.position == position:
            return stack
    return None


def _require_stack(state: GameState, stack_id: str) -> Stack:
    stack = state.get_stack(stack_id)
    if stack is None:
        raise InvalidReferenceError("Stack not found")
    return stack


def _with_pieces(game_state: GameState, piece_ids: tuple[int, ...], **changes: Any) -> tuple[Piece, ...]:
    return tuple(
        replace(p, **changes) if p.id in piece_ids else p
        for p in game_state.pieces
    )


# =============================================================================
# Pieces and stacks
# =============================================================================

def spawn_piece_from_home(state: GameState, position: NodeId) -> GameState:
    """Place the lowest-numbered HOME piece on the board as a new stack."""
    home = get_home_pieces(state)
    if not home:
        raise ResourceExhaustedError("No pieces at HOME to spawn")

    piece = home[0]
    stack = Stack(
        id=f"stack-{state.next_stack_number}",
        piece_ids=(piece.id,),
        position=position,
    )
    logger.debug(f"Spawned piece {piece.id} at {position} as {stack.id}")
    return state._copy_with(
        pieces=_with_pieces(state, (piece.id,), state=PieceState.ON_BOARD, position=position),
        stacks=state.stacks + (stack,),
        next_stack_number=state.next_stack_number + 1,
    )


def move_stack(state: GameState, stack_id: str, position: NodeId) -> GameState:
    """Relocate a stack and all of its pieces. Does not merge."""
    stack = _require_stack(state, stack_id)
    moved = replace(stack, position=position)
    return state._copy_with(
        pieces=_with_pieces(state, stack.piece_ids, position=position),
        stacks=tuple(moved if s.id == stack_id else s for s in state.stacks),
    )


def finish_stack(state: GameState, stack_id: str) -> GameState:
    """Take a stack off the board; its pieces become FINISHED."""
    stack = _require_stack(state, stack_id)
    logger.debug(f"{stack.id} finished with pieces {list(stack.piece_ids)}")
    return state._copy_with(
        pieces=_with_pieces(state, stack.piece_ids, state=PieceState.FINISHED, position=None),
        stacks=tuple(s for s in state.stacks if s.id != stack_id),
    )


def merge_stacks(state: GameState, target_stack_id: str, source_stack_id: str) -> GameState:
    """
    Fold the source stack into the target stack.

    The target keeps its id; the source's pieces are appended after the
    target's. Both stacks must stand on the same node.
    """
    target = _require_stack(state, target_stack_id)
    source = _require_stack(state, source_stack_id)
    if target.id == source.id:
        raise InvalidInputError("Cannot merge a stack with itself")
    if target.position != source.position:
        raise InvalidStateError("Cannot merge: stacks not at same position")

    merged = replace(target, piece_ids=target.piece_ids + source.piece_ids)
    logger.debug(f"Merged {source.id} into {target.id} at {target.position}")
    return state._copy_with(
        stacks=tuple(
            merged if s.id == target.id else s
            for s in state.stacks
            if s.id != source.id
        ),
    )


# =============================================================================
# Hand
# =============================================================================

def add_hand_token(state: GameState, token: HandToken) -> GameState:
    return state._copy_with(hand=state.hand + (token,))


def remove_hand_token(state: GameState, index: int) -> GameState:
    if not 0 <= index < len(state.hand):
        raise InvalidReferenceError(f"Invalid token index: {index}")
    return state._copy_with(hand=state.hand[:index] + state.hand[index + 1:])


# =============================================================================
# Stick inventory
# =============================================================================

def offer_stick(state: GameState, stick: Stick) -> GameState:
    if state.pending_stick_offer is not None:
        raise InvalidStateError("Cannot offer stick: pending offer already exists")
    logger.debug(f"Offering stick {stick.id}")
    return state._copy_with(pending_stick_offer=StickOffer(offered_stick=stick))


def replace_stick_in_inventory(state: GameState, slot_index: int) -> GameState:
    """Keep the offered stick in the given slot, dropping the old one."""
    if state.pending_stick_offer is None:
        raise InvalidStateError("Cannot replace stick: no pending offer")
    if not 0 <= slot_index < INVENTORY_SIZE:
        raise InvalidReferenceError("Invalid slot index: must be 0-3")

    inventory = list(state.stick_inventory)
    inventory[slot_index] = state.pending_stick_offer.offered_stick
    return state._copy_with(
        stick_inventory=tuple(inventory),
        pending_stick_offer=None,
    )


def discard_stick_offer(state: GameState) -> GameState:
    if state.pending_stick_offer is None:
        raise InvalidStateError("Cannot discard stick: no pending offer")
    return state._copy_with(pending_stick_offer=None)


def update_special_nodes(state: GameState, special_nodes: dict[NodeId, SpecialNodeType]) -> GameState:
    return state._copy_with(special_nodes=dict(special_nodes))

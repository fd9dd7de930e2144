"""
Engine Core - Deterministic yut game state management.

The engine is the runtime that:
1. Builds the board graph and walks it step by step
2. Manages GameState
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves node events and finish rewards
"""

from .board import BOARD, BoardGraph, BranchOption, SpecialNodeType, FINISHED
from .errors import (
    YutError,
    InvalidStateError,
    InvalidReferenceError,
    InvalidInputError,
    ResourceExhaustedError,
)
from .rng import HandToken, SeededRandom, YutResult, throw_yut
from .state import GameState, GamePhase, Piece, PieceState, Stack
from .rules import MoveTarget, MoveResult, validate_move, execute_move, get_valid_move_targets
from .setup import GameConfig, initialize_game_state
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action, game_reducer
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "BOARD",
    "BoardGraph",
    "BranchOption",
    "SpecialNodeType",
    "FINISHED",
    "YutError",
    "InvalidStateError",
    "InvalidReferenceError",
    "InvalidInputError",
    "ResourceExhaustedError",
    "HandToken",
    "SeededRandom",
    "YutResult",
    "throw_yut",
    "GameState",
    "GamePhase",
    "Piece",
    "PieceState",
    "Stack",
    "MoveTarget",
    "MoveResult",
    "validate_move",
    "execute_move",
    "get_valid_move_targets",
    "GameConfig",
    "initialize_game_state",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "game_reducer",
    "ActionGenerator",
    "legal_actions",
]

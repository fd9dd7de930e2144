"""
Game Setup - Creates the initial game state.

This module handles:
- The configuration record for a new game
- Seed normalization
- Special node placement from the seeded generator

Same seed, same board: the special node mapping is the first thing drawn
from the game's generator.
"""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator

from .board import BOARD, DEFAULT_EXCLUDED_NODES, NodeId, SpecialNodeType
from .events import create_special_nodes
from .rng import SEED_LENGTH, SeededRandom, normalize_seed
from .state import GameState
from ..config import YUTRUN_REFRESH_NODES, YUTRUN_STICK_NODES


class GameConfig(BaseModel):
    """Everything needed to start a game."""
    seed: str | None = None
    special_nodes: dict[NodeId, SpecialNodeType] | None = None
    stick_count: int = Field(default=YUTRUN_STICK_NODES, ge=0)
    refresh_count: int = Field(default=YUTRUN_REFRESH_NODES, ge=0)

    @field_validator("seed")
    @classmethod
    def _trim_seed(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        if len(trimmed) > SEED_LENGTH:
            raise ValueError(f"Seed must be at most {SEED_LENGTH} characters")
        return trimmed or None

    @model_validator(mode="after")
    def _check_nodes(self) -> GameConfig:
        if self.special_nodes is not None:
            unknown = [n for n in self.special_nodes if not BOARD.has_node(n)]
            if unknown:
                raise ValueError(f"Unknown nodes in special_nodes: {unknown}")
            blocked = [
                n for n, kind in self.special_nodes.items()
                if n in DEFAULT_EXCLUDED_NODES and kind != SpecialNodeType.NORMAL
            ]
            if blocked:
                raise ValueError(f"Special nodes not allowed on: {blocked}")
        return self


def initialize_game_state(config: GameConfig | None = None) -> GameState:
    """
    Set up a new game.

    Args:
        config: Game configuration (defaults apply when omitted)

    Returns:
        Initial GameState in THROW phase, turn 1
    """
    config = config or GameConfig()
    seed = normalize_seed(config.seed)
    rng = SeededRandom(seed)

    if config.special_nodes is not None:
        special_nodes = dict(config.special_nodes)
    else:
        special_nodes = create_special_nodes(config.stick_count, config.refresh_count, rng)

    logger.debug(f"New game with seed {seed}")
    return GameState(seed=seed, rng_state=rng.state, special_nodes=special_nodes)

"""
API module - In-process service for front ends.

Provides:
- GameService: Drives one game through engine actions
- Pydantic schemas for requests, snapshots and errors
"""

from .service import GameService
from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    MoveRequest,
    NewGameRequest,
    RewardRequest,
    StickOfferRequest,
)

__all__ = [
    "GameService",
    "ErrorCode",
    "ErrorResponse",
    "GameStateResponse",
    "MoveRequest",
    "NewGameRequest",
    "RewardRequest",
    "StickOfferRequest",
]

"""
Pydantic Schemas - Request/response models for the game service.

These models define the contract between a front end and the engine.
Snapshots are plain data: enums as strings, no engine objects.

Error Codes:
- INVALID_STATE: Action not legal in the current phase or situation
- INVALID_REFERENCE: Unknown stack, node or artifact, or index out of range
- INVALID_INPUT: Malformed input (bad seed, bad branch, bad target)
- RESOURCE_EXHAUSTED: Nothing left to use (no piece at HOME)
- NO_GAME: No game has been started
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_STATE = "INVALID_STATE"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    INVALID_INPUT = "INVALID_INPUT"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    NO_GAME = "NO_GAME"


# =============================================================================
# Shared Models
# =============================================================================

class HandTokenInfo(BaseModel):
    """A token waiting to be spent."""
    result: str
    steps: int = Field(..., ge=1, le=5)


class PieceInfo(BaseModel):
    """One of the four pieces."""
    id: int
    state: str
    position: Optional[str] = None


class StackInfo(BaseModel):
    """Pieces moving together."""
    id: str
    piece_ids: list[int]
    position: str


class StickInfo(BaseModel):
    """Stick in the inventory or on offer."""
    id: str
    name: str
    description: str
    back_probability: float = Field(..., ge=0.0, le=1.0)

    model_config = {"from_attributes": True}


class ArtifactInfo(BaseModel):
    """Collected or offered artifact."""
    id: str
    name: str
    description: str

    model_config = {"from_attributes": True}


class PendingRewardInfo(BaseModel):
    """Artifact choice owed for a finished stack."""
    stack_size: int
    candidates: list[ArtifactInfo]


class MoveTargetInfo(BaseModel):
    """Something a token can be spent on."""
    type: str
    stack_id: Optional[str] = None
    position: Optional[str] = None
    branch_options: list[str] = Field(default_factory=list)


# =============================================================================
# Requests
# =============================================================================

class NewGameRequest(BaseModel):
    """Start a new game."""
    seed: Optional[str] = Field(None, description="Up to 10 characters; empty for random")


class MoveRequest(BaseModel):
    """Spend a token on a move."""
    token_index: int = Field(..., ge=0)
    target: str = Field(..., description='"HOME" or a stack id')
    branch: Optional[str] = Field(None, description="Branch option when starting on O5, O10 or C")


class StickOfferRequest(BaseModel):
    """Keep the offered stick in a slot, or discard it when slot is None."""
    slot: Optional[int] = Field(None, ge=0, le=3)


class RewardRequest(BaseModel):
    """Pick one of the reward candidates."""
    artifact_id: str


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Full game snapshot."""
    seed: str = Field(..., description="Normalized seed for replay/sharing")
    phase: str
    turn: int
    throws_remaining: int
    hand: list[HandTokenInfo]
    pieces: list[PieceInfo]
    stacks: list[StackInfo]
    stick_inventory: list[StickInfo]
    special_nodes: dict[str, str]
    pending_stick_offer: Optional[StickInfo] = None
    pending_reward: Optional[PendingRewardInfo] = None
    artifacts: list[ArtifactInfo]
    valid_targets: list[MoveTargetInfo]
    finished_count: int
    changes: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")

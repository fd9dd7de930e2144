"""
Game Service - Business logic layer between a front end and the engine.

The service:
1. Translates requests to engine actions
2. Holds the one game in progress and its action history
3. Formats snapshots for display

This layer is framework-agnostic (can be wrapped by any UI or HTTP layer).
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    NewGameRequest,
    MoveRequest,
    StickOfferRequest,
    RewardRequest,
    # Responses
    GameStateResponse,
    ErrorResponse,
    # Shared
    ArtifactInfo,
    HandTokenInfo,
    MoveTargetInfo,
    PendingRewardInfo,
    PieceInfo,
    StackInfo,
    StickInfo,
    # Enums
    ErrorCode,
)
from ..engine_core.action import Action, ActionType
from ..engine_core.board import BOARD, SpecialNodeType
from ..engine_core.errors import YutError
from ..engine_core.reducer import Reducer
from ..engine_core.rules import MoveTargetType, get_valid_move_targets
from ..engine_core.setup import GameConfig
from ..engine_core.state import GameState, get_finished_count


@dataclass
class GameService:
    """
    In-memory service for a single local game.

    Usage:
        service = GameService()
        service.new_game(NewGameRequest(seed="abc"))
        service.throw()
        service.start_move()
        service.move(MoveRequest(token_index=0, target="HOME"))
    """
    config: GameConfig = field(default_factory=GameConfig)
    state: GameState | None = None
    history: list[Action] = field(default_factory=list)

    def new_game(self, request: NewGameRequest | None = None) -> GameStateResponse | ErrorResponse:
        """Start a fresh game. The response carries the normalized seed."""
        seed = request.seed if request else None
        response = self.apply(Action.new_game(seed))
        if isinstance(response, GameStateResponse):
            self.history = [Action.new_game(self.state.seed)]
        return response

    def throw(self) -> GameStateResponse | ErrorResponse:
        """Throw the four inventory sticks."""
        return self.apply(Action.throw_sticks())

    def start_move(self) -> GameStateResponse | ErrorResponse:
        return self.apply(Action.start_move())

    def move(self, request: MoveRequest) -> GameStateResponse | ErrorResponse:
        """Spend a hand token on HOME or a stack id."""
        try:
            action = Action.execute_move(request.token_index, request.target, request.branch)
        except YutError as e:
            return ErrorResponse(error=e.message, error_code=ErrorCode(e.code))
        return self.apply(action)

    def resolve_stick_offer(self, request: StickOfferRequest) -> GameStateResponse | ErrorResponse:
        """Keep the offered stick in the requested slot, or discard it when no slot is given."""
        if request.slot is None:
            return self.apply(Action.discard_stick())
        return self.apply(Action.replace_stick(request.slot))

    def choose_reward(self, request: RewardRequest) -> GameStateResponse | ErrorResponse:
        return self.apply(Action.choose_reward(request.artifact_id))

    def snapshot(self) -> GameStateResponse | ErrorResponse:
        if self.state is None:
            return ErrorResponse(error="No game in progress", error_code=ErrorCode.NO_GAME)
        return self._build_game_state(self.state)

    def apply(self, action: Action) -> GameStateResponse | ErrorResponse:
        """Apply any action to the current game."""
        if self.state is None and action.action_type != ActionType.NEW_GAME:
            return ErrorResponse(error="No game in progress", error_code=ErrorCode.NO_GAME)

        result = Reducer(config=self.config).apply(self.state, action)
        if not result.success:
            return ErrorResponse(error=result.error, error_code=ErrorCode(result.error_code))

        self.state = result.new_state
        self.history.append(action)
        return self._build_game_state(self.state, result.state_changes)

    def _build_game_state(
        self,
        state: GameState,
        changes: list[str] | None = None,
    ) -> GameStateResponse:
        """Build complete game state response."""
        reward = None
        if state.pending_reward:
            reward = PendingRewardInfo(
                stack_size=state.pending_reward.stack_size,
                candidates=[
                    ArtifactInfo.model_validate(a) for a in state.pending_reward.candidates
                ],
            )

        offer = None
        if state.pending_stick_offer:
            offer = StickInfo.model_validate(state.pending_stick_offer.offered_stick)

        return GameStateResponse(
            seed=state.seed,
            phase=state.phase.value,
            turn=state.turn,
            throws_remaining=state.throws_remaining,
            hand=[HandTokenInfo(result=t.result.value, steps=t.steps) for t in state.hand],
            pieces=[
                PieceInfo(id=p.id, state=p.state.value, position=p.position)
                for p in state.pieces
            ],
            stacks=[
                StackInfo(id=s.id, piece_ids=list(s.piece_ids), position=s.position)
                for s in state.stacks
            ],
            stick_inventory=[StickInfo.model_validate(s) for s in state.stick_inventory],
            special_nodes={
                node_id: kind.value
                for node_id, kind in state.special_nodes.items()
                if kind != SpecialNodeType.NORMAL
            },
            pending_stick_offer=offer,
            pending_reward=reward,
            artifacts=[ArtifactInfo.model_validate(a) for a in state.artifacts],
            valid_targets=self._build_targets(state),
            finished_count=get_finished_count(state),
            changes=changes or [],
        )

    def _build_targets(self, state: GameState) -> list[MoveTargetInfo]:
        targets = []
        for target in get_valid_move_targets(state):
            if target.type == MoveTargetType.HOME:
                targets.append(MoveTargetInfo(type=target.type.value))
                continue
            stack = state.get_stack(target.stack_id)
            targets.append(
                MoveTargetInfo(
                    type=target.type.value,
                    stack_id=stack.id,
                    position=stack.position,
                    branch_options=[o.value for o in BOARD.get_branch_options(stack.position)],
                )
            )
        return targets

"""
Tests for phase transitions.
"""

import pytest

from ..content.artifacts import ARTIFACT_POOL
from ..engine_core.errors import InvalidReferenceError, InvalidStateError
from ..engine_core.rng import HandToken
from ..engine_core.state import GamePhase, PendingReward
from ..engine_core.turns import (
    advance_turn,
    apply_throw,
    complete_reward,
    end_turn,
    resolve_after_move,
    transition_to_play,
    transition_to_reward,
)


def _reward(size=1):
    return PendingReward(stack_size=size, candidates=ARTIFACT_POOL[:3])


class TestThrow:
    """Tests for apply_throw."""

    def test_plain_result_spends_throw(self, fresh_state):
        """DO, GAE and GEOL use up the throw."""
        state = apply_throw(fresh_state, HandToken.of("GAE"))
        assert state.throws_remaining == 0
        assert state.hand == (HandToken.of("GAE"),)

    def test_bonus_keeps_throw(self, fresh_state):
        """YUT and MO give the throw back."""
        state = apply_throw(fresh_state, HandToken.of("YUT"))
        state = apply_throw(state, HandToken.of("MO"))
        assert state.throws_remaining == 1
        assert len(state.hand) == 2

    def test_wrong_phase(self, make_state):
        """Throwing in PLAY is rejected."""
        with pytest.raises(InvalidStateError):
            apply_throw(make_state(hand=["DO"]), HandToken.of("DO"))

    def test_no_throws(self, fresh_state):
        """Throwing with none left is rejected."""
        state = fresh_state._copy_with(throws_remaining=0)
        with pytest.raises(InvalidStateError):
            apply_throw(state, HandToken.of("DO"))


class TestPlayTransition:
    """Tests for THROW -> PLAY."""

    def test_start_playing(self, fresh_state):
        """Allowed once throws are spent with a non-empty hand."""
        state = apply_throw(fresh_state, HandToken.of("DO"))
        assert transition_to_play(state).phase == GamePhase.PLAY

    def test_throws_remaining(self, fresh_state):
        """Not while throws remain."""
        state = apply_throw(fresh_state, HandToken.of("YUT"))
        with pytest.raises(InvalidStateError):
            transition_to_play(state)

    def test_empty_hand(self, fresh_state):
        """Not with an empty hand."""
        with pytest.raises(InvalidStateError):
            transition_to_play(fresh_state._copy_with(throws_remaining=0))

    def test_wrong_phase(self, make_state):
        """Only from THROW."""
        with pytest.raises(InvalidStateError):
            transition_to_play(make_state(hand=["DO"]))


class TestTurnEnd:
    """Tests for advancing turns."""

    def test_advance(self, make_state):
        """Next turn starts with one throw."""
        state = advance_turn(make_state())
        assert state.phase == GamePhase.THROW
        assert state.turn == 2
        assert state.throws_remaining == 1

    def test_advance_with_hand(self, make_state):
        """Unspent tokens block advance_turn."""
        with pytest.raises(InvalidStateError):
            advance_turn(make_state(hand=["DO"]))

    def test_end_turn_discards_hand(self, make_state):
        """end_turn always resets."""
        state = end_turn(make_state(hand=["DO", "MO"])._copy_with(selected_token_index=1))
        assert state.hand == ()
        assert state.turn == 2
        assert state.selected_token_index is None

    def test_resolve_keeps_playing(self, make_state):
        """Tokens left means stay in PLAY."""
        assert resolve_after_move(make_state(hand=["DO"])).phase == GamePhase.PLAY

    def test_resolve_advances(self, make_state):
        """An empty hand starts the next turn."""
        state = resolve_after_move(make_state())
        assert state.phase == GamePhase.THROW
        assert state.turn == 2

    def test_resolve_game_over(self, make_state):
        """All finished ends the game, even with tokens left."""
        state = resolve_after_move(make_state(hand=["DO"], finished=4))
        assert state.phase == GamePhase.GAME_OVER


class TestRewardTransition:
    """Tests for REWARD and reward completion."""

    def test_enter_reward(self, make_state):
        """A finish with pieces left enters REWARD."""
        state = transition_to_reward(make_state(finished=1), _reward())
        assert state.phase == GamePhase.REWARD
        assert state.pending_reward == _reward()

    def test_final_finish(self, make_state):
        """The last finish goes straight to GAME_OVER with the reward kept."""
        state = transition_to_reward(make_state(finished=4), _reward())
        assert state.phase == GamePhase.GAME_OVER
        assert state.pending_reward is not None

    def test_complete(self, make_state):
        """Choosing collects the artifact and continues the turn."""
        state = transition_to_reward(make_state(hand=["DO"], finished=1), _reward())
        state = complete_reward(state, ARTIFACT_POOL[1].id)
        assert state.artifacts == (ARTIFACT_POOL[1],)
        assert state.pending_reward is None
        assert state.phase == GamePhase.PLAY

    def test_complete_after_game_over(self, make_state):
        """The final reward can still be claimed."""
        state = transition_to_reward(make_state(finished=4), _reward())
        state = complete_reward(state, ARTIFACT_POOL[0].id)
        assert state.phase == GamePhase.GAME_OVER
        assert len(state.artifacts) == 1

    def test_not_a_candidate(self, make_state):
        """Only offered artifacts can be chosen."""
        state = transition_to_reward(make_state(finished=1), _reward())
        with pytest.raises(InvalidReferenceError):
            complete_reward(state, ARTIFACT_POOL[9].id)

    def test_nothing_pending(self, make_state):
        """Choosing without a pending reward is rejected."""
        with pytest.raises(InvalidStateError):
            complete_reward(make_state(), ARTIFACT_POOL[0].id)

"""
Tests for legal action generation.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.board import BranchOption
from ..engine_core.reducer import apply_action
from ..engine_core.rng import HandToken
from ..engine_core.rules import MoveTarget
from ..engine_core.state import GamePhase


def _types(actions):
    return [a.action_type for a in actions]


class TestThrowPhase:
    """Tests for THROW phase actions."""

    def test_throw_available(self, fresh_state):
        """A new game can only throw."""
        assert _types(legal_actions(fresh_state)) == [ActionType.THROW_STICKS]

    def test_start_move(self, fresh_state):
        """Throws spent with a hand: start moving."""
        state = fresh_state._copy_with(throws_remaining=0, hand=(HandToken.of("DO"),))
        assert _types(legal_actions(state)) == [ActionType.START_MOVE]

    def test_nothing_to_do(self, fresh_state):
        """Throws spent with an empty hand: advance."""
        state = fresh_state._copy_with(throws_remaining=0)
        assert _types(legal_actions(state)) == [ActionType.ADVANCE_TURN]


class TestPlayPhase:
    """Tests for move generation."""

    def test_token_by_target(self, make_state):
        """One move per token and target."""
        actions = legal_actions(make_state(positions=["O3"], hand=["DO", "GAE"]))
        assert len(actions) == 4
        assert all(a.action_type == ActionType.EXECUTE_MOVE for a in actions)

    def test_branch_node_options(self, make_state):
        """A stack on O5 gets a move per branch option."""
        actions = legal_actions(make_state(positions=["O5"], hand=["DO"]))
        choices = [a.payload.branch_choice for a in actions if a.payload.target == MoveTarget.stack("stack-1")]
        assert choices == [BranchOption.OUTER, BranchOption.DIAGONAL_A]

    def test_center_always_chooses(self, make_state):
        """A stack on C never gets a choiceless move."""
        actions = legal_actions(make_state(positions=["C"], hand=["DO"]))
        choices = [a.payload.branch_choice for a in actions if a.payload.target == MoveTarget.stack("stack-1")]
        assert choices == [BranchOption.TO_O15, BranchOption.TO_O20]

    def test_no_home_when_empty(self, make_state):
        """HOME drops out once all pieces have left it."""
        actions = legal_actions(make_state(positions=["O1", "O2", "O3", "O4"], hand=["DO"]))
        assert len(actions) == 4
        assert MoveTarget.home() not in [a.payload.target for a in actions]

    def test_generated_moves_apply(self, make_state):
        """Every generated move is accepted by the reducer."""
        state = make_state(positions=["O5", "C", "O19"], hand=["DO", "MO"])
        for action in legal_actions(state):
            assert apply_action(state, action).success


class TestPendingChoices:
    """Tests for offers and rewards."""

    def test_offer_actions(self, make_state):
        """A pending offer allows only the four slots or discarding."""
        state = make_state(hand=["GAE", "DO"], special_nodes={"O2": "STICK"})
        state = apply_action(state, Action.execute_move(0, "HOME")).new_state
        actions = legal_actions(state)
        assert _types(actions) == [ActionType.REPLACE_STICK] * 4 + [ActionType.DISCARD_STICK]

    def test_reward_actions(self, make_state):
        """One choice per candidate."""
        state = make_state(positions=["O19"], hand=["GAE"])
        state = apply_action(state, Action.execute_move(0, "stack-1")).new_state
        ids = [a.payload.artifact_id for a in legal_actions(state)]
        assert ids == [c.id for c in state.pending_reward.candidates]

    def test_game_over(self, make_state):
        """Nothing once the game is over and the reward is claimed."""
        state = make_state(finished=4)._copy_with(phase=GamePhase.GAME_OVER)
        assert legal_actions(state) == []


class TestIsLegal:
    """Tests for is_legal."""

    def test_outer_is_default(self, make_state):
        """A choiceless move from O5 matches the OUTER move."""
        state = make_state(positions=["O5"], hand=["DO"])
        assert is_legal(state, Action.execute_move(0, "stack-1"))
        assert is_legal(state, Action.execute_move(0, "stack-1", "DIAGONAL_A"))

    def test_illegal(self, make_state):
        """Bad indices and wrong-phase actions are not legal."""
        state = make_state(hand=["DO"])
        assert not is_legal(state, Action.execute_move(1, "HOME"))
        assert not is_legal(state, Action.throw_sticks())
        assert is_legal(state, Action.execute_move(0, "HOME"))

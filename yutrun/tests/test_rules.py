"""
Tests for move validation and execution.

Tests:
- Spawning from HOME
- Moving stacks, finishing, merging
- Branch choice requirements
"""

import pytest

from ..engine_core.board import FINISHED, BranchOption
from ..engine_core.errors import (
    InvalidInputError,
    InvalidReferenceError,
    ResourceExhaustedError,
)
from ..engine_core.rules import (
    MoveTarget,
    MoveTargetType,
    execute_move,
    get_valid_move_targets,
    moving_piece_count,
    resolve_destination,
    validate_move,
)
from ..engine_core.state import PieceState, get_finished_count


class TestMoveTarget:
    """Tests for target parsing."""

    def test_parse(self):
        """"HOME" is the HOME target; anything else is a stack id."""
        assert MoveTarget.parse("HOME") == MoveTarget.home()
        assert MoveTarget.parse("stack-3") == MoveTarget.stack("stack-3")
        target = MoveTarget.stack("stack-1")
        assert MoveTarget.parse(target) is target


class TestValidateMove:
    """Tests for validate_move."""

    def test_home_preview(self, fresh_state):
        """A spawn previews its landing node."""
        result = validate_move(fresh_state, MoveTarget.home(), 3)
        assert result.final_position == "O3"
        assert not result.is_finished
        assert not result.needs_branch_choice

    def test_home_empty(self, make_state):
        """No piece at HOME is a resource error."""
        state = make_state(positions=["O1", "O2", "O3", "O4"])
        with pytest.raises(ResourceExhaustedError):
            validate_move(state, MoveTarget.home(), 1)

    def test_stack_preview(self, make_state):
        """A stack previews its landing node."""
        state = make_state(positions=["O7"])
        assert validate_move(state, MoveTarget.stack("stack-1"), 3).final_position == "O10"

    def test_finish_preview(self, make_state):
        """Overshooting O20 previews as finished."""
        result = validate_move(make_state(positions=["O19"]), MoveTarget.stack("stack-1"), 2)
        assert result.is_finished
        assert result.final_position == FINISHED

    def test_branch_node_needs_choice(self, make_state):
        """A stack on O5 reports its options instead of a destination."""
        result = validate_move(make_state(positions=["O5"]), MoveTarget.stack("stack-1"), 2)
        assert result.needs_branch_choice
        assert result.available_branches == (BranchOption.OUTER, BranchOption.DIAGONAL_A)

    def test_missing_stack_id(self, fresh_state):
        """A STACK target needs an id."""
        target = MoveTarget(type=MoveTargetType.STACK)
        with pytest.raises(InvalidInputError):
            validate_move(fresh_state, target, 1)

    def test_unknown_stack(self, fresh_state):
        """Unknown stack ids are reference errors."""
        with pytest.raises(InvalidReferenceError):
            validate_move(fresh_state, MoveTarget.stack("stack-7"), 1)


class TestExecuteMove:
    """Tests for execute_move."""

    def test_spawn(self, fresh_state):
        """HOME with MO lands on O5."""
        state = execute_move(fresh_state, MoveTarget.home(), 5)
        assert state.stacks[0].position == "O5"
        assert state.get_piece(0).state == PieceState.ON_BOARD

    def test_move_stack(self, make_state):
        """A stack moves and keeps its id."""
        state = execute_move(make_state(positions=["O2"]), MoveTarget.stack("stack-1"), 3)
        assert state.get_stack("stack-1").position == "O5"

    def test_branch_choice(self, make_state):
        """The choice applies to the first step from O10."""
        state = make_state(positions=["O10"])
        state = execute_move(state, MoveTarget.stack("stack-1"), 2, "DIAGONAL_B")
        assert state.get_stack("stack-1").position == "B2"

    def test_finish(self, make_state):
        """Finishing removes the stack."""
        state = execute_move(make_state(positions=["O19"]), MoveTarget.stack("stack-1"), 2)
        assert state.stacks == ()
        assert get_finished_count(state) == 1

    def test_exact_terminal_stays(self, make_state):
        """Landing exactly on O20 keeps the stack on the board."""
        state = execute_move(make_state(positions=["O18"]), MoveTarget.stack("stack-1"), 2)
        assert state.get_stack("stack-1").position == "O20"
        assert get_finished_count(state) == 0

    def test_merge_keeps_occupant_id(self, make_state):
        """The stack already on the node absorbs the arriving one."""
        state = make_state(positions=["O1", "O3"])
        state = execute_move(state, MoveTarget.stack("stack-1"), 2)
        assert len(state.stacks) == 1
        assert state.stacks[0].id == "stack-2"
        assert state.stacks[0].piece_ids == (1, 0)
        assert state.stacks[0].position == "O3"

    def test_spawn_merges(self, make_state):
        """A spawned piece landing on a stack joins it."""
        state = make_state(positions=["O2"])
        state = execute_move(state, MoveTarget.home(), 2)
        assert len(state.stacks) == 1
        assert state.stacks[0].id == "stack-1"
        assert state.stacks[0].piece_ids == (0, 1)

    def test_merged_stack_finishes_together(self, make_state):
        """All pieces of a merged stack finish at once."""
        state = make_state(positions=["O18", "O19"])
        state = execute_move(state, MoveTarget.stack("stack-1"), 1)
        state = execute_move(state, MoveTarget.stack("stack-2"), 3)
        assert get_finished_count(state) == 2
        assert state.stacks == ()

    def test_center_needs_choice(self, make_state):
        """A stack on C cannot move without a direction."""
        with pytest.raises(InvalidInputError):
            execute_move(make_state(positions=["C"]), MoveTarget.stack("stack-1"), 1)


class TestHelpers:
    """Tests for target listing and previews."""

    def test_targets(self, make_state):
        """HOME first, then each stack."""
        targets = get_valid_move_targets(make_state(positions=["O1", "O4"]))
        assert targets == [
            MoveTarget.home(),
            MoveTarget.stack("stack-1"),
            MoveTarget.stack("stack-2"),
        ]

    def test_no_home_target_when_empty(self, make_state):
        """HOME is omitted once every piece has left it."""
        targets = get_valid_move_targets(make_state(positions=["O1"], finished=3))
        assert targets == [MoveTarget.stack("stack-1")]

    def test_resolve_destination(self, make_state):
        """Destination matches traversal without applying the move."""
        state = make_state(positions=["O5"])
        assert resolve_destination(state, MoveTarget.stack("stack-1"), 1, "DIAGONAL_A") == "A1"
        assert state.get_stack("stack-1").position == "O5"

    def test_moving_piece_count(self, make_state):
        """A spawn moves one piece; a stack moves all of its pieces."""
        state = make_state(positions=["O2", "O4"])
        state = execute_move(state, MoveTarget.stack("stack-1"), 2)
        assert moving_piece_count(state, MoveTarget.home()) == 1
        assert moving_piece_count(state, MoveTarget.stack("stack-2")) == 2

"""
Tests for finish rewards.
"""

import pytest

from ..content.artifacts import ARTIFACT_POOL
from ..engine_core.errors import InvalidInputError
from ..engine_core.rewards import calculate_reward_choices, generate_artifact_candidates
from ..engine_core.rng import SeededRandom


class TestRewardChoices:
    """Tests for the stacking demerit."""

    def test_table(self):
        """1 -> 3, 2 -> 2, 3 and 4 -> 1."""
        assert [calculate_reward_choices(k) for k in (1, 2, 3, 4)] == [3, 2, 1, 1]

    def test_never_below_one(self):
        """Oversized stacks still get one choice."""
        assert calculate_reward_choices(10) == 1

    def test_empty_stack(self):
        """A stack always has at least one piece."""
        with pytest.raises(InvalidInputError):
            calculate_reward_choices(0)


class TestCandidates:
    """Tests for candidate generation."""

    def test_distinct(self):
        """Candidates never repeat."""
        candidates = generate_artifact_candidates(3, SeededRandom("loot"))
        assert len(candidates) == 3
        assert len({a.id for a in candidates}) == 3
        assert all(a in ARTIFACT_POOL for a in candidates)

    def test_capped_by_pool(self):
        """Asking for more than the pool returns the whole pool."""
        candidates = generate_artifact_candidates(25, SeededRandom("loot"))
        assert sorted(a.id for a in candidates) == sorted(a.id for a in ARTIFACT_POOL)

    def test_zero(self):
        """Zero candidates is an empty tuple."""
        assert generate_artifact_candidates(0, SeededRandom("loot")) == ()

    def test_deterministic(self):
        """Same seed, same candidates."""
        assert generate_artifact_candidates(3, SeededRandom("x")) == generate_artifact_candidates(
            3, SeededRandom("x")
        )

    def test_negative(self):
        """Negative counts are rejected."""
        with pytest.raises(InvalidInputError):
            generate_artifact_candidates(-1, SeededRandom("loot"))

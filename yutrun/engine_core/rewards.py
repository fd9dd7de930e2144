"""
Rewards - Artifact choices for finished stacks.

Stacking demerit: a stack of k pieces finishing gets max(1, 4 - k) choices,
so finishing pieces one by one is rewarded with more choice.
"""

from __future__ import annotations

from .errors import InvalidInputError
from .events import shuffle
from .rng import DrawFn
from ..content.artifacts import ARTIFACT_POOL, Artifact


def calculate_reward_choices(stack_size: int) -> int:
    if stack_size < 1:
        raise InvalidInputError(f"Stack size must be at least 1, got {stack_size}")
    return max(1, 4 - stack_size)


def generate_artifact_candidates(
    count: int,
    draw: DrawFn,
    pool: tuple[Artifact, ...] = ARTIFACT_POOL,
) -> tuple[Artifact, ...]:
    """Shuffle the pool and take the first min(count, len(pool)). No duplicates."""
    if count < 0:
        raise InvalidInputError(f"Candidate count must be non-negative, got {count}")
    return tuple(shuffle(pool, draw)[:min(count, len(pool))])

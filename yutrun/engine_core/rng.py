"""
RNG - Seeded generator and the four-stick throw model.

A throw samples each of the four inventory sticks exactly once, in order,
and maps the number of Back faces to a movement outcome:

    backs  result  steps
    0      MO      5
    1      DO      1
    2      GAE     2
    3      GEOL    3
    4      YUT     4

YUT and MO grant a bonus throw.

Seeds are normalized with strip(); an empty seed is replaced by a fresh
10-character alphanumeric seed. The generator hashes the normalized seed
to a 32-bit state and advances it with Mulberry32, so the same seed and
the same call sequence always reproduce the same draws.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence, TYPE_CHECKING
import secrets
import string

from .errors import InvalidInputError

if TYPE_CHECKING:
    from ..content.sticks import Stick


DrawFn = Callable[[], float]

SEED_LENGTH = 10
SEED_ALPHABET = string.ascii_letters + string.digits
STICKS_PER_THROW = 4

_MASK32 = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5


class YutResult(str, Enum):
    """Movement outcome of a throw."""
    DO = "DO"
    GAE = "GAE"
    GEOL = "GEOL"
    YUT = "YUT"
    MO = "MO"


class StickFace(str, Enum):
    FRONT = "Front"
    BACK = "Back"


@dataclass(frozen=True)
class HandToken:
    """An unspent movement allowance produced by a throw."""
    result: YutResult
    steps: int

    def __post_init__(self):
        if self.steps != RESULT_STEPS.get(self.result):
            raise InvalidInputError(f"Token {self.result} cannot move {self.steps} steps")

    @classmethod
    def of(cls, result: YutResult | str) -> HandToken:
        result = YutResult(result)
        return cls(result=result, steps=RESULT_STEPS[result])


BACK_COUNT_RESULTS: dict[int, YutResult] = {
    0: YutResult.MO,
    1: YutResult.DO,
    2: YutResult.GAE,
    3: YutResult.GEOL,
    4: YutResult.YUT,
}

RESULT_STEPS: dict[YutResult, int] = {
    YutResult.DO: 1,
    YutResult.GAE: 2,
    YutResult.GEOL: 3,
    YutResult.YUT: 4,
    YutResult.MO: 5,
}

BONUS_RESULTS = frozenset({YutResult.YUT, YutResult.MO})


# =============================================================================
# Seeds
# =============================================================================

def generate_random_seed(length: int = SEED_LENGTH) -> str:
    """Random alphanumeric seed from the OS entropy source."""
    return "".join(secrets.choice(SEED_ALPHABET) for _ in range(length))


def normalize_seed(seed: str | None) -> str:
    """Trim whitespace; an empty result becomes a fresh random seed."""
    trimmed = (seed or "").strip()
    return trimmed if trimmed else generate_random_seed(SEED_LENGTH)


def hash_seed(seed: str) -> int:
    """Hash a seed string to a non-negative 32-bit integer (h = h*31 + c)."""
    h = 0
    for char in seed:
        h = (h * 31 + ord(char)) & _MASK32
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRandom:
    """
    Deterministic PRNG (Mulberry32) keyed by a seed string.

    The generator is callable, so an instance can be passed anywhere a
    draw function is expected. `state` exposes the 32-bit internal state so
    a game can store it and resume the exact same sequence later.
    """

    def __init__(self, seed: str, state: int | None = None):
        self.seed = normalize_seed(seed)
        self._state = hash_seed(self.seed) if state is None else state & _MASK32

    @classmethod
    def restore(cls, seed: str, state: int) -> SeededRandom:
        return cls(seed, state=state)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Next draw in [0, 1)."""
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    __call__ = next

    def get_seed(self) -> str:
        return self.seed


# =============================================================================
# Stick sampling
# =============================================================================

def sample_stick(stick: Stick, draw: float) -> StickFace:
    """Back iff draw < back_probability."""
    return StickFace.BACK if draw < stick.back_probability else StickFace.FRONT


def sample_4_sticks(sticks: Sequence[Stick], draw: DrawFn) -> int:
    """
    Throw the four sticks and count the Back faces.

    Draws exactly once per stick, in stick order, with no short-circuit.
    """
    if len(sticks) != STICKS_PER_THROW:
        raise InvalidInputError("Must provide exactly 4 sticks")

    back_count = 0
    for stick in sticks:
        if sample_stick(stick, draw()) is StickFace.BACK:
            back_count += 1
    return back_count


def map_back_count_to_result(back_count: int) -> HandToken:
    result = BACK_COUNT_RESULTS.get(back_count)
    if result is None:
        raise InvalidInputError(f"Invalid back count: {back_count}")
    return HandToken(result=result, steps=RESULT_STEPS[result])


def grants_bonus(result: YutResult | str) -> bool:
    """YUT and MO grant an extra throw."""
    try:
        return YutResult(result) in BONUS_RESULTS
    except ValueError:
        raise InvalidInputError(f"Unknown result: {result}") from None


def throw_yut(sticks: Sequence[Stick], draw: DrawFn) -> HandToken:
    """One full throw: four draws, mapped to a hand token."""
    return map_back_count_to_result(sample_4_sticks(sticks, draw))

"""
Stick Catalog - Stick definitions for the throw inventory.

The active inventory always holds exactly four sticks. A new game starts
with four basic sticks; STICK nodes offer a replacement drawn from the pool.

Stick structure:
- back_probability: chance the stick lands Back on a throw (0.0 to 1.0)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Stick:
    """A single throwing stick."""
    id: str
    name: str
    description: str
    back_probability: float

    def __post_init__(self):
        if not 0.0 <= self.back_probability <= 1.0:
            raise ValueError(
                f"Stick {self.id} back_probability must be in [0, 1], got {self.back_probability}"
            )


BASIC_STICK = Stick(
    id="basic",
    name="Basic Stick",
    description="A standard yut stick with balanced probabilities.",
    back_probability=0.5,
)


STICK_POOL: tuple[Stick, ...] = (
    Stick("lucky-charm", "Lucky Charm", "Slightly favors high rolls.", 0.45),
    Stick("balanced-master", "Balanced Master", "Perfectly balanced for consistent results.", 0.5),
    Stick("moon-blessed", "Moon-Blessed", "Increases the chance of MO (5 steps).", 0.35),
    Stick("steady-walker", "Steady Walker", "Favors moderate rolls.", 0.55),
    Stick("risky-gambler", "Risky Gambler", "High variance for bold players.", 0.4),
    Stick("careful-step", "Careful Step", "Favors shorter, safer moves.", 0.6),
    Stick("wind-rider", "Wind Rider", "Swift and unpredictable.", 0.42),
    Stick("earth-bound", "Earth-Bound", "Stable and grounded.", 0.58),
    Stick("star-chaser", "Star Chaser", "Dreams of reaching the finish.", 0.38),
    Stick("ancient-wisdom", "Ancient Wisdom", "A relic of past masters.", 0.52),
)


def draw_random_stick(draw: Callable[[], float]) -> Stick:
    """Draw one stick uniformly from the pool (duplicates allowed across draws)."""
    index = int(draw() * len(STICK_POOL))
    return STICK_POOL[min(index, len(STICK_POOL) - 1)]

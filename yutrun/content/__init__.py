"""
Content - Fixed catalogs the engine draws from.

Provides:
- Sticks: the basic stick and the pool offered at STICK nodes
- Artifacts: the pool of post-finish rewards
"""

from .sticks import Stick, BASIC_STICK, STICK_POOL, draw_random_stick
from .artifacts import Artifact, ARTIFACT_POOL, get_artifact

__all__ = [
    "Stick",
    "BASIC_STICK",
    "STICK_POOL",
    "draw_random_stick",
    "Artifact",
    "ARTIFACT_POOL",
    "get_artifact",
]

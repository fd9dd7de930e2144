"""
Artifact Catalog - Rewards offered when a stack finishes.

Artifacts are collected for the run summary. Effects are content only;
the engine records which artifacts were chosen.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Artifact:
    """A collectible reward."""
    id: str
    name: str
    description: str


ARTIFACT_POOL: tuple[Artifact, ...] = (
    Artifact("jade-token", "Jade Token", "A smooth green token said to bring calm throws."),
    Artifact("magpie-feather", "Magpie Feather", "Magpies carry good news across the board."),
    Artifact("lantern-of-dawn", "Lantern of Dawn", "Lights the shortest path home."),
    Artifact("tiger-charm", "Tiger Charm", "Wards off bad luck at the corners."),
    Artifact("rice-cake", "Rice Cake", "A festival treat shared after a good run."),
    Artifact("bronze-mirror", "Bronze Mirror", "Reflects the throw you wished for."),
    Artifact("crane-scroll", "Crane Scroll", "A painted crane in flight over the center."),
    Artifact("drum-of-spring", "Drum of Spring", "Its beat keeps the sticks moving."),
    Artifact("moon-rabbit", "Moon Rabbit", "Pounds out luck beneath the full moon."),
    Artifact("silk-knot", "Silk Knot", "Binds a stack together for the final stretch."),
)

_BY_ID = {artifact.id: artifact for artifact in ARTIFACT_POOL}


def get_artifact(artifact_id: str) -> Artifact | None:
    """Look up a pooled artifact by id."""
    return _BY_ID.get(artifact_id)

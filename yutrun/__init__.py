"""
Yut Run - Single-player Yut race engine

A deterministic, seed-driven rules engine for a single-player Yut board game.
The engine provides:
- A branching board graph with overshoot-to-finish traversal
- Seeded stick throws (four Bernoulli sticks per throw)
- A turn/phase state machine driven by discrete actions
- Special node events and post-finish artifact rewards
"""

__version__ = "0.1.0"

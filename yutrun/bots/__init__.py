"""
Bots module - Automatic players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: Baseline policies
- play_game: Runs a whole game with a policy
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, POLICIES, make_policy
from .runner import GameRecord, play_game

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "POLICIES",
    "make_policy",
    "GameRecord",
    "play_game",
]

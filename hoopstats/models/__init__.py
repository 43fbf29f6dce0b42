"""
HOOPSTATS - Database Models
"""

from hoopstats.models.models import (
    Base,
    Player,
    Team,
    Game,
)

__all__ = [
    "Base",
    "Player",
    "Team",
    "Game",
]

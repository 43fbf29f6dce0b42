"""
HOOPSTATS - API Module
FastAPI routes and schemas for the NBA data cache.
"""

from hoopstats.api.routes import (
    admin_router,
    games_router,
    health_router,
    players_router,
    teams_router,
)

__all__ = [
    "admin_router",
    "games_router",
    "health_router",
    "players_router",
    "teams_router",
]

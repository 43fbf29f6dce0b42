"""
HOOPSTATS - API Routes Package

Route modules:
- Players (players)
- Teams (teams)
- Games (games)
- Administration (admin)
- Health Checks (health)
"""

from hoopstats.api.routes import admin, games, health, players, teams

players_router = players.router
teams_router = teams.router
games_router = games.router
admin_router = admin.router
health_router = health.router

__all__ = [
    "players_router",
    "teams_router",
    "games_router",
    "admin_router",
    "health_router",
]

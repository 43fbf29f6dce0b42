"""
HOOPSTATS - Population (refresh) workflows
"""

from hoopstats.services.population.divisions import NBA_DIVISIONS, Division
from hoopstats.services.population.population_service import (
    DIVISION_PAUSE_SECONDS,
    PopulationService,
    PopulationSummary,
    game_endpoints,
)

__all__ = [
    "NBA_DIVISIONS",
    "Division",
    "DIVISION_PAUSE_SECONDS",
    "PopulationService",
    "PopulationSummary",
    "game_endpoints",
]

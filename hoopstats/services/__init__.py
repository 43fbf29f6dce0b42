"""
HOOPSTATS - Services
"""

from hoopstats.services.collectors import NBADataCollector, get_nba_collector
from hoopstats.services.population import PopulationService, PopulationSummary
from hoopstats.services.query_service import RESULT_LIMIT, QueryService

__all__ = [
    "NBADataCollector",
    "get_nba_collector",
    "PopulationService",
    "PopulationSummary",
    "QueryService",
    "RESULT_LIMIT",
]

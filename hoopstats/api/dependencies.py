"""
HOOPSTATS - API Dependencies
FastAPI dependency injection for the store, the upstream collector and services
"""

from fastapi import Depends

from hoopstats.core.database import get_database_manager
from hoopstats.core.store import CollectionStore
from hoopstats.services.collectors import BaseCollector, get_nba_collector
from hoopstats.services.population import PopulationService
from hoopstats.services.query_service import QueryService


def get_store() -> CollectionStore:
    """Store handle over the process-wide database manager."""
    return CollectionStore(get_database_manager())


def get_collector() -> BaseCollector:
    return get_nba_collector()


def get_query_service(store: CollectionStore = Depends(get_store)) -> QueryService:
    return QueryService(store)


def get_population_service(
    store: CollectionStore = Depends(get_store),
    collector: BaseCollector = Depends(get_collector),
) -> PopulationService:
    return PopulationService(store, collector)

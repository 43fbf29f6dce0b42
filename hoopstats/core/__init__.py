"""
HOOPSTATS - Core Module
Configuration, database access, the collection store and the error taxonomy.
"""

from hoopstats.core.config import Settings, get_settings, settings
from hoopstats.core.database import (
    Base,
    DatabaseManager,
    db_manager,
    get_database_manager,
    init_db,
    close_db,
    QueryBuilder,
)
from hoopstats.core.exceptions import (
    HoopStatsError,
    UpstreamError,
    UpstreamTransportError,
    UpstreamProtocolError,
    EndpointNotFoundError,
    NoDataError,
    NotFoundError,
    StoreError,
)
from hoopstats.core.store import CollectionStore

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "settings",

    # Database
    "Base",
    "DatabaseManager",
    "db_manager",
    "get_database_manager",
    "init_db",
    "close_db",
    "QueryBuilder",
    "CollectionStore",

    # Errors
    "HoopStatsError",
    "UpstreamError",
    "UpstreamTransportError",
    "UpstreamProtocolError",
    "EndpointNotFoundError",
    "NoDataError",
    "NotFoundError",
    "StoreError",
]

"""
HOOPSTATS - Upstream Collectors
"""

from hoopstats.services.collectors.base_collector import BaseCollector
from hoopstats.services.collectors.nba_collector import (
    NBADataCollector,
    UpstreamEnvelope,
    get_nba_collector,
    nba_collector,
)

__all__ = [
    "BaseCollector",
    "NBADataCollector",
    "UpstreamEnvelope",
    "get_nba_collector",
    "nba_collector",
]

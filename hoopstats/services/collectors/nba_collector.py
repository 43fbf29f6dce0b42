"""
HOOPSTATS - NBA API Free Data Collector (RapidAPI)

Every endpoint of the provider answers with the same envelope:

    {"status": "success", "response": {...}}

Known endpoints:
- /nba-{division}-team-list  -> {"teamList": [...]}
- /players, /nba/players     -> {"playerList": [...]}
- /games, /schedule          -> {"gameList": [...]}
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ValidationError

from hoopstats.core.config import settings
from hoopstats.core.exceptions import UpstreamProtocolError
from hoopstats.services.collectors.base_collector import BaseCollector

logger = logging.getLogger(__name__)


class UpstreamEnvelope(BaseModel):
    """Response wrapper used by every provider endpoint."""
    status: str
    response: Any = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class NBADataCollector(BaseCollector):
    """Collector for the RapidAPI NBA data provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        host: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.RAPIDAPI_KEY if api_key is None else api_key
        self.host = host or settings.RAPIDAPI_HOST
        super().__init__(
            name="nba_free_data",
            base_url=f"https://{self.host}",
            timeout=timeout or settings.RAPIDAPI_TIMEOUT,
            transport=transport,
        )

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.host,
        }

    def unwrap(self, body: Any, endpoint: str) -> Any:
        try:
            envelope = UpstreamEnvelope.model_validate(body)
        except ValidationError as e:
            logger.error(f"[{self.name}] Unrecognized envelope from {endpoint}")
            raise UpstreamProtocolError(detail="Invalid API response") from e

        if not envelope.ok:
            logger.error(f"[{self.name}] Envelope status '{envelope.status}' from {endpoint}")
            raise UpstreamProtocolError(detail="Invalid API response")

        return envelope.response


# Process-wide collector, closed by the application lifespan
nba_collector = NBADataCollector()


def get_nba_collector() -> NBADataCollector:
    return nba_collector

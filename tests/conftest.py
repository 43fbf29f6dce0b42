"""
HOOPSTATS - Test Configuration
Pytest fixtures: in-memory database, fake upstream collector and API client.
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RAPIDAPI_KEY", "test-key")

from typing import Any, Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hoopstats.core.database import DatabaseManager, get_database_manager
from hoopstats.core.exceptions import UpstreamTransportError
from hoopstats.core.store import CollectionStore
from hoopstats.services.collectors import BaseCollector
from hoopstats.services.population import NBA_DIVISIONS, PopulationService

TEAMS_PER_DIVISION = 5


class FakeCollector(BaseCollector):
    """
    Collector answering from a dict of endpoint -> payload.

    Unknown endpoints fail like an upstream 404; an exception value is raised.
    """

    def __init__(self, responses: Dict[str, Any]):
        super().__init__(name="fake", base_url="http://upstream.test")
        self.responses = dict(responses)
        self.calls: List[str] = []

    async def fetch(self, endpoint: str) -> Any:
        self.calls.append(endpoint)
        if endpoint not in self.responses:
            raise UpstreamTransportError(detail="Request failed with status code 404")
        outcome = self.responses[endpoint]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def unwrap(self, body: Any, endpoint: str) -> Any:
        return body


def make_team_list(division: str, count: int = TEAMS_PER_DIVISION) -> Dict[str, Any]:
    slug = division.lower()
    return {
        "teamList": [
            {
                "id": f"{slug}-{i}",
                "name": f"{division} Team {i}",
                "shortName": f"{division} {i}",
                "abbrev": f"{slug[:2].upper()}{i}",
                "logo": f"https://cdn.test/{slug}-{i}.png",
                "logoDark": f"https://cdn.test/{slug}-{i}-dark.png",
                "href": f"https://nba.test/teams/{slug}-{i}",
            }
            for i in range(count)
        ]
    }


@pytest.fixture
def player_payload() -> Dict[str, Any]:
    return {
        "playerList": [
            {
                "id": "1966",
                "name": "LeBron James",
                "displayName": "LeBron James",
                "shortName": "L. James",
                "team": {"id": "13", "name": "Los Angeles Lakers"},
                "position": "F",
                "jersey": 23,
                "image": "https://cdn.test/lebron.png",
                "headshot": "https://cdn.test/lebron-headshot.png",
            },
            {
                "id": "3975",
                "displayName": "Stephen Curry",
                "team": {"id": "9", "name": "Golden State Warriors"},
                "position": "G",
                "jersey": "30",
            },
            {
                "id": "4066",
                "name": "Bronny James",
                "displayName": "Bronny James",
                "team": {"id": "13", "name": "Los Angeles Lakers"},
            },
            {
                "id": "9999",
                "name": "Unsigned Guy",
                "displayName": "Unsigned Guy",
            },
        ]
    }


@pytest.fixture
def game_payload() -> Dict[str, Any]:
    return {
        "gameList": [
            {
                "id": "401",
                "date": "2024-01-15T00:30:00Z",
                "dateFormatted": "Jan 15, 2024",
                "status": "Final",
                "homeTeam": {"id": "13", "name": "Lakers", "abbrev": "LAL", "score": 110},
                "awayTeam": {"id": "2", "name": "Celtics", "abbrev": "BOS", "score": "104"},
                "venue": {"fullName": "Crypto.com Arena"},
            },
            {
                "id": "402",
                "date": "2024-01-16T01:00:00Z",
                "dateFormatted": "Jan 16, 2024",
                "status": "Scheduled",
                "homeTeam": {"id": "9", "name": "Warriors", "abbrev": "GSW"},
                "awayTeam": {"id": "20", "name": "Suns", "abbrev": "PHX"},
            },
            {
                "id": "403",
                "date": "2024-01-15T03:00:00Z",
                "dateFormatted": "Jan 15, 2024",
                "status": "Final",
                "homeTeam": {"id": "5", "name": "Nuggets", "score": 99},
                "awayTeam": {"id": "7", "name": "Heat", "score": 101},
                "venue": "Ball Arena",
            },
        ]
    }


@pytest.fixture
def upstream_responses(player_payload, game_payload) -> Dict[str, Any]:
    """A healthy upstream: every division, players and games answer."""
    responses: Dict[str, Any] = {
        division.endpoint: make_team_list(division.name) for division in NBA_DIVISIONS
    }
    responses["/players"] = player_payload
    responses["/games"] = game_payload
    return responses


@pytest.fixture
def fake_collector(upstream_responses) -> FakeCollector:
    return FakeCollector(upstream_responses)


@pytest_asyncio.fixture
async def db_manager():
    """Fresh in-memory database per test."""
    manager = DatabaseManager(url="sqlite+aiosqlite:///:memory:", echo=False)
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def store(db_manager) -> CollectionStore:
    return CollectionStore(db_manager)


@pytest.fixture
def population_service(store, fake_collector) -> PopulationService:
    return PopulationService(store, fake_collector, pause=0)


@pytest_asyncio.fixture
async def async_client(db_manager, store, fake_collector):
    """API client with the store, collector and database overridden."""
    from hoopstats.api.dependencies import get_collector, get_population_service, get_store
    from hoopstats.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_collector] = lambda: fake_collector
    app.dependency_overrides[get_database_manager] = lambda: db_manager
    app.dependency_overrides[get_population_service] = (
        lambda: PopulationService(store, fake_collector, pause=0)
    )

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

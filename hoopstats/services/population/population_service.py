"""
HOOPSTATS - Population Service

Refreshes the cached collections from the upstream provider. Each refresh
pulls one or more pages, normalizes them, then clears the collection and
bulk-inserts the new records. Nothing is cleared unless fresh records are in
hand, so a failed refresh leaves the previous collection untouched.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from hoopstats.core.exceptions import (
    EndpointNotFoundError,
    HoopStatsError,
    NoDataError,
    UpstreamError,
)
from hoopstats.core.store import CollectionStore
from hoopstats.models import Game, Player, Team
from hoopstats.services.collectors.base_collector import BaseCollector
from hoopstats.services.population.divisions import NBA_DIVISIONS, Division
from hoopstats.services.population.normalizers import (
    normalize_game,
    normalize_player,
    normalize_team,
)

logger = logging.getLogger(__name__)

# Fixed pacing between division calls to stay under the provider's rate limit
DIVISION_PAUSE_SECONDS = 0.5

PLAYER_ENDPOINTS = ("/players", "/nba/players")
GAME_ENDPOINTS = ("/games", "/schedule")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def game_endpoints(today: date) -> List[str]:
    """Candidate game endpoints in the order they are tried."""
    return [*GAME_ENDPOINTS, f"/games?date={today.isoformat()}"]


def _records(payload: Any, key: str) -> List[Dict[str, Any]]:
    """Pull the record list out of a payload, ignoring anything that is not an object."""
    if not isinstance(payload, dict):
        return []
    items = payload.get(key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


@dataclass
class PopulationSummary:
    """Outcome of one refresh operation."""

    count: int
    message: str
    breakdown: Optional[Dict[str, int]] = None


class PopulationService:
    """Runs the teams, players and games refresh workflows."""

    def __init__(
        self,
        store: CollectionStore,
        collector: BaseCollector,
        pause: float = DIVISION_PAUSE_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        today: Callable[[], date] = _utc_today,
        divisions: Sequence[Division] = NBA_DIVISIONS,
    ):
        self.store = store
        self.collector = collector
        self.pause = pause
        self._sleep = sleep
        self._today = today
        self.divisions = list(divisions)

    async def _fetch_first(self, endpoints: Sequence[str], label: str) -> Any:
        """
        Try each endpoint in order and return the first successful payload.

        Raises:
            EndpointNotFoundError: every endpoint failed; carries the last error
        """
        last_error: Optional[UpstreamError] = None

        for endpoint in endpoints:
            try:
                return await self.collector.fetch(endpoint)
            except UpstreamError as e:
                logger.warning(f"{label} endpoint {endpoint} failed: {e.detail}")
                last_error = e

        raise EndpointNotFoundError(
            f"{label} endpoint not found. Check API documentation.",
            last_error.detail if last_error else None,
        )

    async def populate_teams(self) -> PopulationSummary:
        """
        Refresh the Team collection division by division.

        A failing division is logged and skipped; the refresh only fails when
        no division returned any team.
        """
        logger.info("Fetching teams from upstream...")

        rows: List[Dict[str, Any]] = []
        breakdown = {division.name: 0 for division in self.divisions}
        fetched = 0

        for index, division in enumerate(self.divisions):
            if index and self.pause:
                await self._sleep(self.pause)

            logger.info(f"Fetching {division.name} division...")
            try:
                payload = await self.collector.fetch(division.endpoint)
            except UpstreamError as e:
                logger.error(f"Error fetching {division.name}: {e.detail}")
                continue

            teams = _records(payload, "teamList")
            rows.extend(normalize_team(team, division) for team in teams)
            breakdown[division.name] = len(teams)
            fetched += 1
            logger.info(f"Found {len(teams)} teams in {division.name}")

        if not rows:
            raise NoDataError("No teams found in API response")

        await self.store.clear(Team)
        await self.store.insert_many(Team, rows)

        logger.info(f"Successfully populated {len(rows)} teams")
        return PopulationSummary(
            count=len(rows),
            message=(
                f"Successfully populated {len(rows)} teams from "
                f"{fetched} of {len(self.divisions)} divisions"
            ),
            breakdown=breakdown,
        )

    async def populate_players(self) -> PopulationSummary:
        """Refresh the Player collection. Stats are reset to zero."""
        logger.info("Fetching players from upstream...")

        payload = await self._fetch_first(PLAYER_ENDPOINTS, "Players")
        players = _records(payload, "playerList")
        if not players:
            raise NoDataError("No players found in API response")

        rows = [normalize_player(player) for player in players]

        await self.store.clear(Player)
        await self.store.insert_many(Player, rows)

        logger.info(f"Successfully populated {len(rows)} players")
        return PopulationSummary(
            count=len(rows),
            message=f"Successfully populated {len(rows)} players",
        )

    async def populate_games(self) -> PopulationSummary:
        """
        Refresh the Game collection.

        An upstream answer with no games is a successful no-op: the existing
        collection is kept.
        """
        logger.info("Fetching games from upstream...")

        payload = await self._fetch_first(game_endpoints(self._today()), "Games")
        games = _records(payload, "gameList")
        if not games:
            logger.info("No games found, keeping existing collection")
            return PopulationSummary(count=0, message="No games found")

        rows = [normalize_game(game) for game in games]

        await self.store.clear(Game)
        await self.store.insert_many(Game, rows)

        logger.info(f"Successfully populated {len(rows)} games")
        return PopulationSummary(
            count=len(rows),
            message=f"Successfully populated {len(rows)} games",
        )

    async def populate_all(self) -> Dict[str, Any]:
        """
        Run every refresh in turn. Failures are reported per collection and
        do not stop the remaining refreshes.
        """
        results: Dict[str, Any] = {}
        steps = (
            ("teams", self.populate_teams),
            ("players", self.populate_players),
            ("games", self.populate_games),
        )

        for name, step in steps:
            try:
                results[name] = await step()
            except HoopStatsError as e:
                logger.error(f"Populating {name} failed: {e.message} ({e.detail})")
                results[name] = e

        return results

"""
HOOPSTATS - Query Service
Read-only lookups over the cached collections.
"""

import logging
from typing import Any, List

from sqlalchemy import or_

from hoopstats.core.exceptions import NotFoundError
from hoopstats.core.store import CollectionStore
from hoopstats.models import Game, Player, Team

logger = logging.getLogger(__name__)

# Fixed size for search, top, random and latest queries
RESULT_LIMIT = 10


class QueryService:
    """Translates read requests into store queries."""

    def __init__(self, store: CollectionStore):
        self.store = store

    # ------------------------------------------------------------------ players

    async def list_players(self) -> List[Player]:
        return await self.store.find(Player, order_by=[Player.name.asc()])

    async def get_player(self, player_id: Any) -> Player:
        player = await self.store.get(Player, player_id)
        if player is None:
            raise NotFoundError("Player not found", f"No player with id {player_id}")
        return player

    async def search_players(self, term: str) -> List[Player]:
        """Case-insensitive substring match on full or display name."""
        logger.debug(f"Searching players for '{term}'")
        return await self.store.find(
            Player,
            filters=[
                or_(
                    Player.name.icontains(term, autoescape=True),
                    Player.display_name.icontains(term, autoescape=True),
                )
            ],
            order_by=[Player.name.asc()],
            limit=RESULT_LIMIT,
        )

    async def top_players(self) -> List[Player]:
        return await self.store.find(
            Player,
            order_by=[Player.points.desc()],
            limit=RESULT_LIMIT,
        )

    # -------------------------------------------------------------------- teams

    async def list_teams(self) -> List[Team]:
        return await self.store.find(Team, order_by=[Team.name.asc()])

    async def get_team(self, team_id: Any) -> Team:
        team = await self.store.get(Team, team_id)
        if team is None:
            raise NotFoundError("Team not found", f"No team with id {team_id}")
        return team

    async def random_teams(self) -> List[Team]:
        return await self.store.sample(Team, RESULT_LIMIT)

    # -------------------------------------------------------------------- games

    async def list_games(self) -> List[Game]:
        return await self.store.find(Game, order_by=[Game.date.desc().nulls_last()])

    async def latest_games(self) -> List[Game]:
        return await self.store.find(
            Game,
            order_by=[Game.date.desc().nulls_last()],
            limit=RESULT_LIMIT,
        )

    async def games_by_date(self, date_formatted: str) -> List[Game]:
        """Exact match on the display date string supplied upstream."""
        return await self.store.find(
            Game,
            filters=[Game.date_formatted == date_formatted],
            order_by=[Game.date.asc().nulls_first()],
        )

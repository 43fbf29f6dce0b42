"""
HOOPSTATS - Games API Routes
"""

from fastapi import APIRouter, Depends

from hoopstats.api.dependencies import get_query_service
from hoopstats.api.schemas import GameOut, ListResponse, as_list
from hoopstats.services.query_service import QueryService


router = APIRouter()


@router.get("", response_model=ListResponse[GameOut])
async def list_games(service: QueryService = Depends(get_query_service)):
    """All games, most recent first."""
    return as_list(GameOut, await service.list_games())


@router.get("/latest", response_model=ListResponse[GameOut])
async def latest_games(service: QueryService = Depends(get_query_service)):
    return as_list(GameOut, await service.latest_games())


# Display dates may contain slashes, hence the path converter
@router.get("/date/{date:path}", response_model=ListResponse[GameOut])
async def games_by_date(date: str, service: QueryService = Depends(get_query_service)):
    """Games whose display date equals the given string exactly."""
    return as_list(GameOut, await service.games_by_date(date))

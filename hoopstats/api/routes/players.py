"""
HOOPSTATS - Players API Routes
"""

from fastapi import APIRouter, Depends

from hoopstats.api.dependencies import get_query_service
from hoopstats.api.schemas import ItemResponse, ListResponse, PlayerOut, as_item, as_list
from hoopstats.services.query_service import QueryService


router = APIRouter()


@router.get("", response_model=ListResponse[PlayerOut])
async def list_players(service: QueryService = Depends(get_query_service)):
    """All players sorted by name."""
    return as_list(PlayerOut, await service.list_players())


# Literal paths are declared before /{player_id} so they are not captured as ids

@router.get("/search/{name}", response_model=ListResponse[PlayerOut])
async def search_players(name: str, service: QueryService = Depends(get_query_service)):
    """Case-insensitive substring search on full or display name (max 10)."""
    return as_list(PlayerOut, await service.search_players(name))


@router.get("/top/10", response_model=ListResponse[PlayerOut])
async def top_players(service: QueryService = Depends(get_query_service)):
    return as_list(PlayerOut, await service.top_players())


@router.get("/{player_id}", response_model=ItemResponse[PlayerOut])
async def get_player(player_id: str, service: QueryService = Depends(get_query_service)):
    return as_item(PlayerOut, await service.get_player(player_id))

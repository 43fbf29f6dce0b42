"""
HOOPSTATS - Teams API Routes
"""

from fastapi import APIRouter, Depends

from hoopstats.api.dependencies import get_query_service
from hoopstats.api.schemas import ItemResponse, ListResponse, TeamOut, as_item, as_list
from hoopstats.services.query_service import QueryService


router = APIRouter()


@router.get("", response_model=ListResponse[TeamOut])
async def list_teams(service: QueryService = Depends(get_query_service)):
    """All teams sorted by name."""
    return as_list(TeamOut, await service.list_teams())


@router.get("/random/10", response_model=ListResponse[TeamOut])
async def random_teams(service: QueryService = Depends(get_query_service)):
    """Uniform random sample of up to 10 teams."""
    return as_list(TeamOut, await service.random_teams())


@router.get("/{team_id}", response_model=ItemResponse[TeamOut])
async def get_team(team_id: str, service: QueryService = Depends(get_query_service)):
    return as_item(TeamOut, await service.get_team(team_id))

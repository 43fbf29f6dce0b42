"""
HOOPSTATS - Admin API Routes
Cache refresh operations and a raw upstream passthrough for debugging.
"""

import logging

from fastapi import APIRouter, Depends, Request

from hoopstats.api.dependencies import get_collector, get_population_service
from hoopstats.api.schemas import PayloadResponse, PopulateResponse
from hoopstats.services.collectors import BaseCollector
from hoopstats.services.population import PopulationService, PopulationSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _populate_response(summary: PopulationSummary) -> PopulateResponse:
    return PopulateResponse(
        message=summary.message,
        count=summary.count,
        breakdown=summary.breakdown,
    )


@router.post(
    "/populate-teams",
    response_model=PopulateResponse,
    response_model_exclude_none=True,
)
async def populate_teams(service: PopulationService = Depends(get_population_service)):
    """Replace the team collection with all six divisions from upstream."""
    logger.info("Admin: populate teams requested")
    return _populate_response(await service.populate_teams())


@router.post(
    "/populate-players",
    response_model=PopulateResponse,
    response_model_exclude_none=True,
)
async def populate_players(service: PopulationService = Depends(get_population_service)):
    """Replace the player collection. Stats are reset to zero."""
    logger.info("Admin: populate players requested")
    return _populate_response(await service.populate_players())


@router.post(
    "/populate-games",
    response_model=PopulateResponse,
    response_model_exclude_none=True,
)
async def populate_games(service: PopulationService = Depends(get_population_service)):
    """Replace the game collection. An empty upstream list keeps existing games."""
    logger.info("Admin: populate games requested")
    return _populate_response(await service.populate_games())


@router.get("/test-api/{endpoint:path}", response_model=PayloadResponse)
async def test_api(
    endpoint: str,
    request: Request,
    collector: BaseCollector = Depends(get_collector),
):
    """Fetch an upstream endpoint and return its unwrapped payload as-is."""
    target = "/" + endpoint.lstrip("/")
    if request.url.query:
        target = f"{target}?{request.url.query}"

    logger.info(f"Admin: testing upstream endpoint {target}")
    return PayloadResponse(data=await collector.fetch(target))

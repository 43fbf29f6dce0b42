"""
HOOPSTATS - Health Check Route
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from hoopstats.core.config import settings
from hoopstats.core.database import DatabaseManager, get_database_manager


router = APIRouter()

_start_time = datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    status: str  # healthy, degraded
    timestamp: datetime
    version: str
    environment: str
    uptime_seconds: float
    database: Dict[str, Any]


@router.get("", response_model=HealthResponse)
async def health_check(db: DatabaseManager = Depends(get_database_manager)):
    """
    Liveness check with database connectivity.

    Always answers 200 while the process is up; a database outage is
    reported as ``degraded``.
    """
    now = datetime.now(timezone.utc)
    database = await db.health_check()

    return HealthResponse(
        status="healthy" if database.get("status") == "healthy" else "degraded",
        timestamp=now,
        version=settings.app_version,
        environment=settings.environment,
        uptime_seconds=round((now - _start_time).total_seconds(), 2),
        database=database,
    )

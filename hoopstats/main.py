"""
HOOPSTATS - Main FastAPI Application

NBA data cache with:
- Read routes for players, teams and games
- Admin routes that refresh the cache from the upstream provider
- CORS, compression and request tracing
- Uniform success/failure envelope
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from hoopstats.api.routes import (
    admin_router,
    games_router,
    health_router,
    players_router,
    teams_router,
)
from hoopstats.api.schemas import ErrorResponse
from hoopstats.core.config import get_settings
from hoopstats.core.database import get_database_manager, init_db
from hoopstats.core.exceptions import HoopStatsError
from hoopstats.services.collectors import get_nba_collector

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Opens the database on startup; closes it and the upstream client on shutdown.
    """
    logger.info("=" * 60)
    logger.info(f"{settings.app_name} v{settings.app_version}")
    logger.info("=" * 60)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Upstream host: {settings.RAPIDAPI_HOST}")
    logger.info("Starting up...")

    # The listener keeps serving even when the database is unreachable
    try:
        await init_db()
        logger.info("✓ Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")

    logger.info(f"API available at: http://{settings.HOST}:{settings.port}")

    yield

    logger.info("Shutting down...")

    try:
        await get_nba_collector().close()
        logger.info("✓ Upstream client closed")

        await get_database_manager().close()
        logger.info("✓ Database closed")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")

    logger.info("Shutdown complete")


# ============================================================================
# Middleware
# ============================================================================

class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Add request id and timing headers, and log every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.4f}s"

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration * 1000:.1f}ms) [{request_id}]"
        )
        return response


# ============================================================================
# Exception Handlers
# ============================================================================

def _envelope(status_code: int, message: str, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
    )


async def hoopstats_exception_handler(request: Request, exc: HoopStatsError):
    """Render service errors with their own status code."""
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message} ({exc.detail})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors such as unknown paths or wrong methods."""
    return _envelope(exc.status_code, str(exc.detail), str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None)
    logger.error(f"Unhandled exception [{request_id}]: {exc}", exc_info=True)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        str(exc) if settings.debug else "An unexpected error occurred",
    )


# ============================================================================
# Create FastAPI Application
# ============================================================================

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="NBA players, teams and games cached from the RapidAPI NBA data provider",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # First added is innermost
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )
    app.add_middleware(RequestTrackingMiddleware)

    app.add_exception_handler(HoopStatsError, hoopstats_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Documented failure envelope for every API route
    error_responses = {
        404: {"model": ErrorResponse, "description": "Record, data or upstream endpoint not found"},
        500: {"model": ErrorResponse, "description": "Upstream or database failure"},
    }

    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(players_router, prefix="/api/players", tags=["Players"], responses=error_responses)
    app.include_router(teams_router, prefix="/api/teams", tags=["Teams"], responses=error_responses)
    app.include_router(games_router, prefix="/api/games", tags=["Games"], responses=error_responses)
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"], responses=error_responses)

    @app.get("/")
    async def root():
        """Service banner with the endpoint directory."""
        return {
            "message": f"{settings.app_name} NBA API",
            "version": settings.app_version,
            "apiHost": settings.RAPIDAPI_HOST,
            "endpoints": {
                "health": "/health",
                "players": "/api/players",
                "playerById": "/api/players/:id",
                "searchPlayers": "/api/players/search/:name",
                "topPlayers": "/api/players/top/10",
                "teams": "/api/teams",
                "teamById": "/api/teams/:id",
                "randomTeams": "/api/teams/random/10",
                "games": "/api/games",
                "latestGames": "/api/games/latest",
                "gamesByDate": "/api/games/date/:date",
                "populateTeams": "POST /api/admin/populate-teams",
                "populatePlayers": "POST /api/admin/populate-players",
                "populateGames": "POST /api/admin/populate-games",
                "testApi": "/api/admin/test-api/:endpoint",
            },
        }

    return app


app = create_app()


# ============================================================================
# Run Application
# ============================================================================

def run(host: str = None, port: int = None, reload: bool = None):
    """Run the FastAPI application."""
    uvicorn.run(
        "hoopstats.main:app",
        host=host or settings.HOST,
        port=port or settings.port,
        reload=settings.debug if reload is None else reload,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()

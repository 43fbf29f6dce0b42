"""
HOOPSTATS - Database
Async SQLAlchemy engine, session management and query helpers
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event, select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from hoopstats.core.config import settings

logger = logging.getLogger(__name__)

# Base class for SQLAlchemy models
Base = declarative_base()


class DatabaseManager:
    """Owns the async engine and hands out sessions"""

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or settings.get_database_url()
        self.echo = settings.DATABASE_ECHO if echo is None else echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._connection_stats: Dict[str, Any] = {
            "total_connections": 0,
            "active_connections": 0,
            "queries_executed": 0,
            "errors": 0
        }

    def _engine_options(self) -> Dict[str, Any]:
        if self.url.startswith("sqlite"):
            options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.url or self.url.endswith("://"):
                # A single shared connection keeps the in-memory database alive
                options["poolclass"] = StaticPool
            return options
        return {
            "pool_size": settings.DATABASE_POOL_SIZE,
            "max_overflow": settings.DATABASE_MAX_OVERFLOW,
            "pool_timeout": settings.DATABASE_POOL_TIMEOUT,
            "pool_recycle": settings.DATABASE_POOL_RECYCLE,
            "pool_pre_ping": True,
        }

    async def initialize(self) -> None:
        """Initialize database engine and session factory"""
        if self._engine is not None:
            return

        logger.info("Initializing database connection...")

        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            **self._engine_options(),
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )

        self._setup_event_listeners()

        logger.info("Database connection initialized successfully")

    def _setup_event_listeners(self) -> None:
        """Track pool checkouts for the health endpoint"""
        if not self._engine:
            return

        @event.listens_for(self._engine.sync_engine, "checkout")
        def receive_checkout(dbapi_connection, connection_record, connection_proxy):
            self._connection_stats["active_connections"] += 1

        @event.listens_for(self._engine.sync_engine, "checkin")
        def receive_checkin(dbapi_connection, connection_record):
            self._connection_stats["active_connections"] -= 1

        @event.listens_for(self._engine.sync_engine, "connect")
        def receive_connect(dbapi_connection, connection_record):
            self._connection_stats["total_connections"] += 1

    async def close(self) -> None:
        """Close database connection pool"""
        if self._engine:
            logger.info("Closing database connection pool...")
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection pool closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session with commit on success and rollback on error"""
        if not self._session_factory:
            await self.initialize()

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                self._connection_stats["errors"] += 1
                logger.error(f"Database session error: {e}")
                raise
            finally:
                self._connection_stats["queries_executed"] += 1

    async def create_all(self) -> None:
        """Create every table registered on Base"""
        await self.initialize()
        import hoopstats.models.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        await self.initialize()
        import hoopstats.models.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> Dict[str, Any]:
        """Check database health and connectivity"""
        try:
            start_time = asyncio.get_running_loop().time()

            async with self.session() as session:
                result = await session.execute(text("SELECT 1"))
                _ = result.scalar()

            latency_ms = (asyncio.get_running_loop().time() - start_time) * 1000

            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
                "stats": self._connection_stats
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "stats": self._connection_stats
            }


class QueryBuilder:
    """Fluent query builder for common operations"""

    def __init__(self, model: Any):
        self.model = model
        self._filters = []
        self._order_by = []
        self._limit = None

    def filter(self, *conditions) -> 'QueryBuilder':
        """Add filter conditions"""
        self._filters.extend(conditions)
        return self

    def order_by(self, *columns) -> 'QueryBuilder':
        """Add ordering"""
        self._order_by.extend(columns)
        return self

    def limit(self, limit: Optional[int]) -> 'QueryBuilder':
        """Set result limit"""
        self._limit = limit
        return self

    def build(self):
        """Build SQLAlchemy select statement"""
        stmt = select(self.model)

        if self._filters:
            stmt = stmt.where(*self._filters)

        for col in self._order_by:
            stmt = stmt.order_by(col)

        if self._limit:
            stmt = stmt.limit(self._limit)

        return stmt


# Global database manager instance
db_manager = DatabaseManager()


async def init_db() -> None:
    """Initialize the engine and ensure the collection tables exist"""
    await db_manager.create_all()
    logger.info("Collection tables ensured")


async def close_db() -> None:
    """Close database connections"""
    await db_manager.close()


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    return db_manager

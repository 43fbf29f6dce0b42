"""
HOOPSTATS - Collection Store

Typed record store over the three collections. Replacement is deliberately
two-phase: ``clear`` and ``insert_many`` commit separately, so readers can
see an empty collection in between.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from hoopstats.core.database import DatabaseManager, QueryBuilder
from hoopstats.core.exceptions import StoreError

logger = logging.getLogger(__name__)

M = TypeVar("M")


class CollectionStore:
    """Store handle shared by the query service and the population service."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def clear(self, model: Type[M]) -> int:
        """Delete every record of a collection. Returns the number removed."""
        try:
            async with self.db.session() as session:
                result = await session.execute(delete(model))
                removed = result.rowcount or 0
        except SQLAlchemyError as e:
            raise StoreError(f"Error clearing {model.__tablename__}", str(e)) from e

        logger.info(f"Cleared {removed} rows from {model.__tablename__}")
        return removed

    async def insert_many(self, model: Type[M], rows: Iterable[Dict[str, Any]]) -> List[M]:
        """Bulk insert plain dicts as new records."""
        records = [model(**row) for row in rows]
        try:
            async with self.db.session() as session:
                session.add_all(records)
        except SQLAlchemyError as e:
            raise StoreError(f"Error inserting {model.__tablename__}", str(e)) from e

        logger.info(f"Inserted {len(records)} rows into {model.__tablename__}")
        return records

    async def get(self, model: Type[M], record_id: Any) -> Optional[M]:
        """Fetch one record by storage id. Malformed ids resolve to None."""
        if not isinstance(record_id, UUID):
            try:
                record_id = UUID(str(record_id))
            except ValueError:
                return None

        try:
            async with self.db.session() as session:
                return await session.get(model, record_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Error fetching {model.__tablename__}", str(e)) from e

    async def find(
        self,
        model: Type[M],
        filters: Sequence[Any] = (),
        order_by: Sequence[Any] = (),
        limit: Optional[int] = None,
    ) -> List[M]:
        stmt = (
            QueryBuilder(model)
            .filter(*filters)
            .order_by(*order_by)
            .limit(limit)
            .build()
        )
        return await self._scalars(model, stmt)

    async def sample(self, model: Type[M], size: int) -> List[M]:
        """Uniform random sample of up to ``size`` records."""
        stmt = select(model).order_by(func.random()).limit(size)
        return await self._scalars(model, stmt)

    async def count(self, model: Type[M]) -> int:
        try:
            async with self.db.session() as session:
                result = await session.execute(select(func.count()).select_from(model))
                return result.scalar() or 0
        except SQLAlchemyError as e:
            raise StoreError(f"Error counting {model.__tablename__}", str(e)) from e

    async def _scalars(self, model: Type[M], stmt) -> List[M]:
        try:
            async with self.db.session() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(f"Error fetching {model.__tablename__}", str(e)) from e

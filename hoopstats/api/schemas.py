"""
HOOPSTATS - API Schemas
Pydantic response models. Field names are exposed in camelCase.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# =============================================================================
# BASE SCHEMAS
# =============================================================================

class BaseSchema(BaseModel):
    """Base schema: reads ORM attributes, serializes camelCase."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]


class ItemResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class PayloadResponse(BaseModel):
    """Raw upstream payload passthrough."""
    success: bool = True
    data: Any = None


class PopulateResponse(BaseModel):
    success: bool = True
    message: str
    count: int
    breakdown: Optional[Dict[str, int]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str


# =============================================================================
# RECORD SCHEMAS
# =============================================================================

class PlayerOut(BaseSchema):
    id: UUID
    api_player_id: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    short_name: Optional[str] = None
    team: Optional[str] = None
    team_id: Optional[str] = None
    position: Optional[str] = None
    jersey: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    points: float = 0
    assists: float = 0
    rebounds: float = 0
    last_updated: Optional[datetime] = None


class TeamOut(BaseSchema):
    id: UUID
    api_team_id: Optional[str] = None
    name: Optional[str] = None
    short_name: Optional[str] = None
    abbrev: Optional[str] = None
    logo: Optional[str] = None
    logo_dark: Optional[str] = None
    href: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None
    wins: int = 0
    losses: int = 0
    last_updated: Optional[datetime] = None


class TeamSnapshotOut(BaseSchema):
    id: Optional[str] = None
    name: Optional[str] = None
    abbrev: Optional[str] = None
    logo: Optional[str] = None
    score: int = 0


class GameOut(BaseSchema):
    id: UUID
    api_game_id: Optional[str] = None
    date: Optional[datetime] = None
    date_formatted: Optional[str] = None
    status: Optional[str] = None
    home_team: TeamSnapshotOut
    away_team: TeamSnapshotOut
    venue: Optional[str] = None
    last_updated: Optional[datetime] = None


def as_list(schema, records) -> Dict[str, Any]:
    """Wrap ORM records in the list envelope."""
    data = [schema.model_validate(record) for record in records]
    return {"success": True, "count": len(data), "data": data}


def as_item(schema, record) -> Dict[str, Any]:
    return {"success": True, "data": schema.model_validate(record)}

"""
HOOPSTATS - Database Models

SQLAlchemy 2.0 models for the three cached collections. Records are keyed by a
synthetic UUID; upstream identifiers are kept in their own columns. Nothing
references another collection: game team snapshots are plain JSON copies.
Text columns carry whatever the provider sends, so none has a length limit.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from hoopstats.core.database import Base


# JSONB on PostgreSQL, plain JSON elsewhere
SnapshotJSON = JSON().with_variant(JSONB(), "postgresql")


class Player(Base):
    """Player roster entry. Stats are zeroed on every refresh."""
    __tablename__ = "players"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    api_player_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    display_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    short_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    team: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    team_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    position: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    jersey: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Stats
    points: Mapped[float] = mapped_column(Float, default=0)
    assists: Mapped[float] = mapped_column(Float, default=0)
    rebounds: Mapped[float] = mapped_column(Float, default=0)

    last_updated: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    __table_args__ = (
        Index("ix_players_name", "name"),
        Index("ix_players_points", "points"),
    )


class Team(Base):
    """Team with its locally assigned conference and division."""
    __tablename__ = "teams"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    api_team_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    short_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    abbrev: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    logo_dark: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    href: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    conference: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    division: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Stats
    wins: Mapped[int] = mapped_column(Integer, default=0)
    losses: Mapped[int] = mapped_column(Integer, default=0)

    last_updated: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    __table_args__ = (
        Index("ix_teams_name", "name"),
    )


class Game(Base):
    """Game with frozen box-score snapshots of both teams."""
    __tablename__ = "games"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    api_game_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    date_formatted: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # {id, name, abbrev, logo, score}
    home_team: Mapped[dict] = mapped_column(SnapshotJSON, default=dict)
    away_team: Mapped[dict] = mapped_column(SnapshotJSON, default=dict)

    venue: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_updated: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    __table_args__ = (
        Index("ix_games_date", "date"),
        Index("ix_games_date_formatted", "date_formatted"),
    )

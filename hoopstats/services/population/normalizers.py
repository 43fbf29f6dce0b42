"""
HOOPSTATS - Upstream Record Normalizers
Map provider records onto the storage columns of Player, Team and Game.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from hoopstats.services.population.divisions import Division

FREE_AGENT = "Free Agent"


def _text(value: Any) -> Optional[str]:
    """Upstream ids and jersey numbers arrive as either strings or numbers."""
    if value is None or value == "":
        return None
    return str(value)


def _score(value: Any) -> int:
    """Missing, empty or non-numeric scores count as zero."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _venue(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return _text(value.get("fullName") or value.get("name"))
    return _text(value)


def parse_game_date(value: Any) -> Optional[datetime]:
    """
    Parse an upstream game date into a naive UTC datetime.

    Accepts ISO-8601 strings (with or without a trailing ``Z``) and epoch
    timestamps in milliseconds. Anything else yields None.
    """
    if value is None or value == "":
        return None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    else:
        raw = str(value).strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_team(raw: Dict[str, Any], division: Division) -> Dict[str, Any]:
    return {
        "api_team_id": _text(raw.get("id")),
        "name": raw.get("name"),
        "short_name": raw.get("shortName"),
        "abbrev": raw.get("abbrev"),
        "logo": raw.get("logo"),
        "logo_dark": raw.get("logoDark"),
        "href": raw.get("href"),
        "conference": division.conference,
        "division": division.name,
        "wins": 0,
        "losses": 0,
    }


def normalize_player(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Player list entries carry no stats, so all three are reset to zero."""
    team = raw.get("team")
    if not isinstance(team, dict):
        team = {}
    return {
        "api_player_id": _text(raw.get("id")),
        "name": raw.get("name") or raw.get("displayName"),
        "display_name": raw.get("displayName"),
        "short_name": raw.get("shortName"),
        "team": team.get("name") or FREE_AGENT,
        "team_id": _text(team.get("id")),
        "position": _text(raw.get("position")),
        "jersey": _text(raw.get("jersey")),
        "image": raw.get("image"),
        "image_url": raw.get("headshot"),
        "points": 0,
        "assists": 0,
        "rebounds": 0,
    }


def normalize_team_snapshot(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raw = {}
    return {
        "id": _text(raw.get("id")),
        "name": raw.get("name"),
        "abbrev": raw.get("abbrev"),
        "logo": raw.get("logo"),
        "score": _score(raw.get("score")),
    }


def normalize_game(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "api_game_id": _text(raw.get("id")),
        "date": parse_game_date(raw.get("date")),
        "date_formatted": raw.get("dateFormatted"),
        "status": _text(raw.get("status")),
        "home_team": normalize_team_snapshot(raw.get("homeTeam")),
        "away_team": normalize_team_snapshot(raw.get("awayTeam")),
        "venue": _venue(raw.get("venue")),
    }

"""
HOOPSTATS - NBA League Structure

The provider's per-division team lists do not say which division or
conference they belong to, so both are assigned from this table.

Format: (division, endpoint, conference)
"""

from typing import List, NamedTuple


class Division(NamedTuple):
    name: str
    endpoint: str
    conference: str


NBA_DIVISIONS: List[Division] = [
    # Eastern Conference
    Division("Atlantic", "/nba-atlantic-team-list", "East"),
    Division("Central", "/nba-central-team-list", "East"),
    Division("Southeast", "/nba-southeast-team-list", "East"),
    # Western Conference
    Division("Northwest", "/nba-northwest-team-list", "West"),
    Division("Pacific", "/nba-pacific-team-list", "West"),
    Division("Southwest", "/nba-southwest-team-list", "West"),
]

NBA_CONFERENCES = ("East", "West")

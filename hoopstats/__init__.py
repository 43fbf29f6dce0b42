"""
HOOPSTATS - NBA data cache

Caches players, teams and games from the RapidAPI NBA data provider in a
local database and serves them over a REST API.
"""

__version__ = "1.0.0"

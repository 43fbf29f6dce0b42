"""
HOOPSTATS - Command Line Interface
"""

from hoopstats.cli.admin import cli

__all__ = ["cli"]

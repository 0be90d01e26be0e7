"""
Utilities package for duckstats.

Exports shared helpers for logging and profiling. Keep this package free of
database and demo logic.
"""

from duckstats.utils.logging import configure_logging, get_logger
from duckstats.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]

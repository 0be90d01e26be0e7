"""
duckstats - DuckDB demos driven from Python.

Two small programs exercise an embedded DuckDB database through its Python
DB-API style connection:

- A basic demo that inserts a few rows one statement at a time and reads them back
- A statistics benchmark that times transactional row insertion and compares
  mean/median/stddev/min/max computed in Python against one aggregate query
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from duckstats.config import Settings, get_settings
from duckstats.demos import (
    AbstractDemo,
    BasicDemo,
    Demo,
    DemoResult,
    StatisticsBenchmark,
    StatisticsUnavailableError,
)
from duckstats.domain import Record, SummaryStatistics
from duckstats.orchestrator import available_demos, run_demo
from duckstats.utils.logging import configure_logging, get_logger
from duckstats.utils.profiler import ProfileStats, profile_block

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    "SummaryStatistics",
    # Demos
    "AbstractDemo",
    "BasicDemo",
    "Demo",
    "DemoResult",
    "StatisticsBenchmark",
    "StatisticsUnavailableError",
    # Orchestration
    "available_demos",
    "run_demo",
    # Logging
    "configure_logging",
    "get_logger",
    # Profiling
    "ProfileStats",
    "profile_block",
]

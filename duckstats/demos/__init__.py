"""
Demos package for duckstats.

Re-exports the demo interfaces and the two concrete demos so downstream code
can import from `duckstats.demos` directly.
"""

from duckstats.demos.abstract import AbstractDemo, Demo, DemoResult, PhaseTiming
from duckstats.demos.basic import BasicDemo
from duckstats.demos.statistics_benchmark import (
    StatisticsBenchmark,
    StatisticsUnavailableError,
)

__all__ = [
    # Abstracts
    "AbstractDemo",
    "Demo",
    "DemoResult",
    "PhaseTiming",
    # Concrete demos
    "BasicDemo",
    "StatisticsBenchmark",
    "StatisticsUnavailableError",
]

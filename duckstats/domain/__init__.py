"""
Domain package for duckstats.

Exports the data definitions shared by the demos, the runner and the reporter.
"""

from duckstats.domain.models import Record, SummaryStatistics

__all__ = [
    "Record",
    "SummaryStatistics",
]

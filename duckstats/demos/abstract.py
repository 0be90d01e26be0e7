"""
Demo interfaces and result contracts for duckstats.

Concrete demos (basic round trip, statistics benchmark) implement the Demo
protocol and return a DemoResult TypedDict so the runner and the reporter can
handle them uniformly.
"""

from __future__ import annotations

import abc
from typing import Dict, List, Optional, Protocol, TypedDict, runtime_checkable

import duckdb

from duckstats.infrastructure.db_factory import connect


class PhaseTiming(TypedDict, total=False):
    """Measurements for one timed phase of a demo."""

    label: str
    duration_seconds: float
    peak_rss_bytes: Optional[int]
    peak_traced_bytes: Optional[int]
    cpu_percent: Optional[float]


class DemoResult(TypedDict, total=False):
    """
    Result contract returned by demos.

    Fields are optional: the basic demo fills `values`, the statistics
    benchmark fills `phases`, `statistics` and `agree`. The runner adds
    `demo`, `duration_seconds` and `profile`.
    """

    demo: str
    rows: int
    duration_seconds: float
    phases: Dict[str, PhaseTiming]
    values: List[int]
    statistics: Dict[str, Dict[str, float]]
    agree: bool
    total_db_seconds: float
    notes: Optional[str]


@runtime_checkable
class Demo(Protocol):
    """
    Common interface all demos implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of what the demo does.
    """

    name: str
    description: str

    def execute(self, rows: Optional[int] = None) -> DemoResult:
        """
        Run the demo against DuckDB and return its result.

        Parameters
        ----------
        rows : int, optional
            Number of rows (basic demo) or records (benchmark) to insert.
            None means the configured default.
        """
        ...


class AbstractDemo(abc.ABC):
    """
    ABC helper for class-based demos that own a DuckDB connection.

    Subclasses set `name` and `description` and implement `execute`, obtaining
    the connection through `connection()`. The connection is opened lazily and
    released by `close()`, which the runner calls on every exit path. Each
    instance is meant for a single `execute` call.
    """

    name: str
    description: str

    def __init__(self, database_override: Optional[str] = None) -> None:
        self._database_override = database_override
        self._conn: Optional[duckdb.DuckDBPyConnection] = None

    def connection(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            self._conn = connect(self._database_override)
        return self._conn

    @abc.abstractmethod
    def execute(self, rows: Optional[int] = None) -> DemoResult:  # pragma: no cover - interface only
        """Run the demo and return its result."""
        raise NotImplementedError

    def close(self) -> None:
        """Close the connection if one was opened. Safe to call more than once."""
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None

    def __enter__(self) -> "AbstractDemo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "AbstractDemo",
    "Demo",
    "DemoResult",
    "PhaseTiming",
]

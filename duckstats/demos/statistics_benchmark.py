"""
Statistics benchmark: Python versus DuckDB for descriptive statistics.

Generates N synthetic records, inserts them into DuckDB inside a single
transaction (one parameterized INSERT per record, no appender or bulk API),
then computes mean, median, population standard deviation, min and max twice:
once by walking the in-memory records and once with a single aggregate query.
Each phase is timed with `profile_block`.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

import duckdb

from duckstats.config import get_settings
from duckstats.demos.abstract import AbstractDemo, DemoResult, PhaseTiming
from duckstats.domain.models import Record, SummaryStatistics
from duckstats.infrastructure.db_factory import create_records_table
from duckstats.utils.logging import get_logger
from duckstats.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

INSERT_SQL = "INSERT INTO records (value) VALUES (?)"
AGGREGATE_SQL = (
    "SELECT AVG(value), MEDIAN(value), STDDEV_POP(value), MIN(value), MAX(value) FROM records"
)


class StatisticsUnavailableError(RuntimeError):
    """The aggregate query produced no usable row (missing or all NULL)."""


def generate_records(n: int) -> List[Record]:
    """Return ``n`` records with ids ``0..n-1`` and ``value == float(id)``."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return [Record(id=i, value=float(i)) for i in range(n)]


def standard_insert(records: Sequence[Record], conn: duckdb.DuckDBPyConnection) -> int:
    """
    Insert every record with its own statement inside one transaction.

    The first error propagates as raised by DuckDB. Nothing is rolled back
    explicitly; an uncommitted transaction is discarded when the connection
    closes.
    """
    conn.begin()
    for record in records:
        conn.execute(INSERT_SQL, [record.value])
    conn.commit()
    return len(records)


def statistics_from_records(records: Sequence[Record]) -> SummaryStatistics:
    """
    Compute summary statistics directly from the records.

    One pass for sum and extrema, an ascending sort for the median, and a
    second pass for the population variance (divides by N, not N-1).
    """
    n = len(records)
    if n == 0:
        raise ValueError("statistics_from_records requires at least one record")

    values: List[float] = [0.0] * n
    total = 0.0
    minimum = math.inf
    maximum = -math.inf
    for i, record in enumerate(records):
        value = record.value
        if value > maximum:
            maximum = value
        if value < minimum:
            minimum = value
        total += value
        values[i] = value
    values.sort()
    mean = total / n

    squared = 0.0
    for value in values:
        squared += (value - mean) * (value - mean)
    stddev = math.sqrt(squared / n)

    mid = n // 2
    if n % 2 == 0:
        median = (values[mid - 1] + values[mid]) / 2
    else:
        median = values[mid]

    return SummaryStatistics(
        mean=mean, median=median, stddev=stddev, minimum=minimum, maximum=maximum
    )


def statistics_from_db(conn: duckdb.DuckDBPyConnection) -> SummaryStatistics:
    """
    Compute the same statistics with one aggregate query against `records`.

    Raises
    ------
    StatisticsUnavailableError
        If the query returns no row or the table is empty (aggregates are NULL).
    duckdb.Error
        Propagated unchanged from the engine.
    """
    row = conn.execute(AGGREGATE_SQL).fetchone()
    if row is None:
        raise StatisticsUnavailableError("Aggregate query over records returned no rows")
    if any(value is None for value in row):
        raise StatisticsUnavailableError("Aggregate query over records found no values")

    mean, median, stddev, minimum, maximum = (float(value) for value in row)
    return SummaryStatistics(
        mean=mean, median=median, stddev=stddev, minimum=minimum, maximum=maximum
    )


def _phase(stats: ProfileStats) -> PhaseTiming:
    return PhaseTiming(**stats.as_dict())


class StatisticsBenchmark(AbstractDemo):
    """
    Time record insertion and compare in-memory and in-database statistics.
    """

    name: str = "statistics"
    description: str = "Transactional per-row INSERTs, then Python vs. DuckDB aggregates."

    def __init__(
        self,
        database_override: Optional[str] = None,
        rel_tol: Optional[float] = None,
        trace_memory: Optional[bool] = None,
    ) -> None:
        super().__init__(database_override)
        settings = get_settings()
        self.rel_tol = rel_tol if rel_tol is not None else settings.benchmark_rel_tol
        self.trace_memory = (
            trace_memory if trace_memory is not None else settings.profile_memory
        )

    def execute(self, rows: Optional[int] = None) -> DemoResult:
        n = get_settings().benchmark_records if rows is None else rows
        if n < 1:
            raise ValueError(f"the benchmark needs at least one record, got {n}")

        conn = self.connection()
        create_records_table(conn)
        records = generate_records(n)
        phases: Dict[str, PhaseTiming] = {}

        log.info("Inserting records into DuckDB", extra={"rows": n})
        with profile_block("insert", enable_tracemalloc=self.trace_memory) as insert_stats:
            standard_insert(records, conn)
        phases["insert"] = _phase(insert_stats)
        log.info(
            "Insert complete",
            extra={"rows": n, "duration": insert_stats.duration_seconds},
        )

        with profile_block("in_memory", enable_tracemalloc=self.trace_memory) as memory_stats:
            from_records = statistics_from_records(records)
        phases["in_memory"] = _phase(memory_stats)
        log.info(
            "Statistics from records complete",
            extra={"duration": memory_stats.duration_seconds},
        )

        with profile_block("database", enable_tracemalloc=self.trace_memory) as db_stats:
            from_db = statistics_from_db(conn)
        phases["database"] = _phase(db_stats)
        log.info(
            "Statistics from DuckDB complete",
            extra={"duration": db_stats.duration_seconds},
        )

        agree = from_records.agrees_with(from_db, rel_tol=self.rel_tol, abs_tol=self.rel_tol)
        if not agree:
            log.warning(
                "In-memory and DuckDB statistics disagree",
                extra={"in_memory": from_records.as_dict(), "database": from_db.as_dict()},
            )

        return DemoResult(
            rows=n,
            phases=phases,
            statistics={"in_memory": from_records.as_dict(), "database": from_db.as_dict()},
            agree=agree,
            total_db_seconds=db_stats.duration_seconds + insert_stats.duration_seconds,
        )


__all__ = [
    "StatisticsBenchmark",
    "StatisticsUnavailableError",
    "generate_records",
    "standard_insert",
    "statistics_from_db",
    "statistics_from_records",
]

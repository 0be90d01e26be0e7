"""
Basic demo: create a one-column table, insert a handful of integers one
statement at a time, and read them back.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import duckdb

from duckstats.config import get_settings
from duckstats.demos.abstract import AbstractDemo, DemoResult
from duckstats.infrastructure.db_factory import create_basic_table
from duckstats.utils.logging import get_logger

log = get_logger(__name__)

INSERT_SQL = "INSERT INTO t VALUES (?)"
SELECT_SQL = "SELECT * FROM t"


def insert_values(conn: duckdb.DuckDBPyConnection, values: Iterable[int]) -> int:
    """Insert each value with its own parameterized statement; return the count."""
    inserted = 0
    for value in values:
        conn.execute(INSERT_SQL, [value])
        inserted += 1
    return inserted


def read_values(conn: duckdb.DuckDBPyConnection) -> List[int]:
    """Return every value in `t`, in whatever order the engine yields them."""
    return [row[0] for row in conn.execute(SELECT_SQL).fetchall()]


class BasicDemo(AbstractDemo):
    """
    Insert ``0..rows-1`` into ``t(i INTEGER)`` and select them back.

    No batching, no transaction and no measurement beyond what the runner adds.
    """

    name: str = "basic"
    description: str = "CREATE TABLE t, per-row parameterized INSERTs, SELECT *."

    def execute(self, rows: Optional[int] = None) -> DemoResult:
        count = get_settings().basic_rows if rows is None else rows
        if count < 0:
            raise ValueError(f"rows must be non-negative, got {count}")

        conn = self.connection()
        create_basic_table(conn)
        inserted = insert_values(conn, range(count))
        log.info("Inserted rows into t", extra={"rows": inserted})

        values = read_values(conn)
        log.info("Read rows from t", extra={"rows": len(values)})

        return DemoResult(
            rows=inserted,
            values=values,
            notes="Order of values is engine-defined; no ORDER BY.",
        )


__all__ = ["BasicDemo", "insert_values", "read_values"]

"""
DuckDB connection factory for duckstats.

DuckDB runs in-process, so there is no server to pool connections against: each
demo opens one connection, uses it sequentially and closes it. The context
manager here guarantees the close on every exit path.

Opening a database file that another process holds a write lock on raises
`duckdb.IOException`; that case is retried with tenacity before giving up.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

import duckdb
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from duckstats.config import get_settings
from duckstats.utils.logging import get_logger

log = get_logger(__name__)

RECORDS_SCHEMA = """
    DROP TABLE IF EXISTS records;
    DROP SEQUENCE IF EXISTS seq_records_id;
    CREATE SEQUENCE seq_records_id START 1;
    CREATE TABLE records (id INTEGER DEFAULT nextval('seq_records_id'), value DOUBLE)
"""

BASIC_SCHEMA = "CREATE OR REPLACE TABLE t (i INTEGER)"


def resolve_database(database: Optional[str] = None) -> str:
    """Return `database`, falling back to the configured path."""
    return database or get_settings().db_path


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(duckdb.IOException),
    reraise=True,
)
def connect(database: Optional[str] = None) -> duckdb.DuckDBPyConnection:
    """
    Open a DuckDB connection with automatic retry on I/O errors.

    Parameters
    ----------
    database : str, optional
        Path of the database file, or ``:memory:``. Defaults to settings.db_path.

    Returns
    -------
    duckdb.DuckDBPyConnection
        A new connection. The caller owns it and must close it.

    Raises
    ------
    duckdb.IOException
        If the database file cannot be opened after all retry attempts.
    """
    target = resolve_database(database)
    log.debug("Opening DuckDB connection", extra={"database": target})
    return duckdb.connect(database=target)


@contextmanager
def duckdb_connection(
    database: Optional[str] = None,
) -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """
    Context manager yielding a DuckDB connection that is always closed.

    Example
    -------
        with duckdb_connection() as conn:
            conn.execute("SELECT 42").fetchone()
    """
    conn = connect(database)
    try:
        yield conn
    finally:
        conn.close()
        log.debug("Closed DuckDB connection")


def create_records_table(conn: duckdb.DuckDBPyConnection) -> None:
    """
    (Re)create the id sequence and the `records` table used by the benchmark.

    Any table left by an earlier run against the same database file is dropped,
    so the aggregates only ever see the current run's rows.
    """
    conn.execute(RECORDS_SCHEMA)


def create_basic_table(conn: duckdb.DuckDBPyConnection) -> None:
    conn.execute(BASIC_SCHEMA)


__all__ = [
    "connect",
    "create_basic_table",
    "create_records_table",
    "duckdb_connection",
    "resolve_database",
]

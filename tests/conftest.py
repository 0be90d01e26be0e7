"""
Pytest configuration for duckstats.

Provides fixtures for:
- Fresh settings per test (the settings cache is cleared around each test)
- In-memory DuckDB connections, closed after use
- A populated `records` table for aggregate tests
"""

from __future__ import annotations

from typing import Generator, List

import duckdb
import pytest

from duckstats.config import get_settings
from duckstats.demos.statistics_benchmark import generate_records, standard_insert
from duckstats.domain.models import Record
from duckstats.infrastructure.db_factory import create_records_table, duckdb_connection

SMALL_RECORD_COUNT = 1_001


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Isolate tests from the developer's environment and `.env` overrides.
    """
    for var in ("DB_PATH", "BASIC_ROWS", "BENCHMARK_RECORDS", "BENCHMARK_REL_TOL", "RESULTS_DIR"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def conn() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """An in-memory DuckDB connection."""
    with duckdb_connection(":memory:") as connection:
        yield connection


@pytest.fixture
def small_records() -> List[Record]:
    return generate_records(SMALL_RECORD_COUNT)


@pytest.fixture
def records_table(
    conn: duckdb.DuckDBPyConnection, small_records: List[Record]
) -> duckdb.DuckDBPyConnection:
    """
    Connection whose `records` table holds `small_records`.
    """
    create_records_table(conn)
    standard_insert(small_records, conn)
    return conn

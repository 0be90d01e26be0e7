"""
Infrastructure package for duckstats.

Centralizes DuckDB connectivity and schema creation. Keep this layer focused
on I/O and resource management, decoupled from demo and runner logic.
"""

from duckstats.infrastructure.db_factory import (
    connect,
    create_basic_table,
    create_records_table,
    duckdb_connection,
)

__all__ = [
    "connect",
    "create_basic_table",
    "create_records_table",
    "duckdb_connection",
]

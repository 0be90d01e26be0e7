"""
Configuration settings for duckstats.

Uses Pydantic Settings to load environment variables for the DuckDB database
location, logging, and demo/benchmark defaults.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_path: str = Field(":memory:", alias="DB_PATH")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    results_dir: str = Field("results", alias="RESULTS_DIR")

    # Demo and benchmark defaults
    basic_rows: int = Field(10, alias="BASIC_ROWS", ge=0)
    benchmark_records: int = Field(1_000_000, alias="BENCHMARK_RECORDS", ge=1)
    benchmark_rel_tol: float = Field(1e-9, alias="BENCHMARK_REL_TOL", gt=0)
    profile_memory: bool = Field(False, alias="PROFILE_MEMORY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]

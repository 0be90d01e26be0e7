from __future__ import annotations

import tracemalloc
from time import sleep

import pytest

from duckstats import config
from duckstats.orchestrator import available_demos
from duckstats.utils import profiler


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.db_path == ":memory:"
    assert settings.basic_rows == 10
    assert settings.benchmark_records == 1_000_000
    assert settings.benchmark_rel_tol == pytest.approx(1e-9)
    assert settings.profile_memory is False


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BENCHMARK_RECORDS", "500")
    monkeypatch.setenv("DB_PATH", "/tmp/bench.duckdb")
    config.get_settings.cache_clear()
    settings = config.get_settings()
    assert settings.benchmark_records == 500
    assert settings.db_path == "/tmp/bench.duckdb"


def test_settings_reject_zero_records(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BENCHMARK_RECORDS", "0")
    with pytest.raises(ValueError):
        config.Settings()


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.end_ts > stats.start_ts
    assert stats.peak_rss_bytes is None or stats.peak_rss_bytes > 0
    if stats.cpu_percent is not None:
        assert isinstance(stats.cpu_percent, float)


def test_profile_block_records_duration_on_error():
    with pytest.raises(RuntimeError):
        with profiler.profile_block("failing") as stats:
            raise RuntimeError("boom")
    assert stats.duration_seconds > 0


def test_profile_block_traces_allocations_when_enabled():
    was_tracing = tracemalloc.is_tracing()
    with profiler.profile_block("alloc", enable_tracemalloc=True) as stats:
        payload = [float(i) for i in range(10_000)]
    assert len(payload) == 10_000
    assert stats.peak_traced_bytes is not None and stats.peak_traced_bytes > 0
    assert tracemalloc.is_tracing() == was_tracing


def test_profile_stats_as_dict_feeds_phase_timing():
    with profiler.profile_block("phase") as stats:
        sleep(0.01)
    timing = stats.as_dict()
    assert timing["label"] == "phase"
    assert timing["duration_seconds"] == stats.duration_seconds
    assert set(timing) == {
        "label",
        "duration_seconds",
        "peak_rss_bytes",
        "peak_traced_bytes",
        "cpu_percent",
    }


def test_available_demos():
    assert available_demos() == ["basic", "statistics"]

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from duckstats import orchestrator
from duckstats.orchestrator import _merge_result, run_demo
from duckstats.utils.profiler import ProfileStats

EXPECTED_DURATION = 2.0
EXPECTED_CPU = 12.3
EXPECTED_ROWS = 7


class _ProbeDemo:
    name = "probe"
    description = "test demo with explicit close lifecycle"

    def __init__(self) -> None:
        self.close_calls = 0
        self.received_rows: Optional[int] = None

    def execute(self, rows: Optional[int] = None) -> dict[str, Any]:
        self.received_rows = rows
        return {"rows": rows or 0, "values": list(range(rows or 0))}

    def close(self) -> None:
        self.close_calls += 1


class _FailingProbeDemo(_ProbeDemo):
    name = "failing_probe"

    def execute(self, rows: Optional[int] = None) -> dict[str, Any]:
        raise RuntimeError("intentional failure")


def test_merge_result_uses_profiler_duration():
    stats = ProfileStats(
        label="probe",
        start_ts=1.0,
        end_ts=3.0,
        duration_seconds=2.0,
        peak_rss_bytes=123,
        cpu_percent=12.34,
    )

    merged = _merge_result({"rows": 5, "duration_seconds": 0.5}, stats)

    assert merged["duration_seconds"] == EXPECTED_DURATION
    assert merged["profile"]["cpu_percent"] == EXPECTED_CPU
    assert merged["profile"]["peak_rss_bytes"] == 123
    assert merged["rows"] == 5


def test_merge_result_defaults_rows():
    merged = _merge_result({}, ProfileStats(label="x"))
    assert merged["rows"] == 0
    assert merged["profile"]["cpu_percent"] is None


def test_unknown_demo_raises_value_error():
    with pytest.raises(ValueError, match="Unknown demo 'nope'"):
        run_demo("nope")


def test_run_demo_closes_demo_after_success():
    demo = _ProbeDemo()
    result = run_demo("probe", rows=EXPECTED_ROWS, demo=demo)

    assert demo.close_calls == 1
    assert demo.received_rows == EXPECTED_ROWS
    assert result["demo"] == "probe"
    assert result["rows"] == EXPECTED_ROWS
    assert "profile" in result


def test_run_demo_closes_demo_and_reraises_on_failure():
    demo = _FailingProbeDemo()
    with pytest.raises(RuntimeError, match="intentional failure"):
        run_demo("failing_probe", demo=demo)
    assert demo.close_calls == 1


def test_run_demo_persists_latest_and_archive(tmp_path: Path):
    run_demo("probe", rows=3, demo=_ProbeDemo(), persist=True, results_dir=tmp_path)

    latest = tmp_path / "latest.json"
    archives = list(tmp_path.glob("run-*.json"))
    assert latest.exists()
    assert len(archives) == 1

    payload = json.loads(latest.read_text(encoding="utf-8"))
    assert payload["demo"] == "probe"
    assert payload["result"]["values"] == [0, 1, 2]


def test_run_demo_resolves_registry(monkeypatch: pytest.MonkeyPatch):
    probe = _ProbeDemo()
    monkeypatch.setattr(orchestrator, "_demo_factories", lambda: {"probe": lambda: probe})

    run_demo("probe", rows=2)

    assert probe.close_calls == 1

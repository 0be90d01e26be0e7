"""
Runner for duckstats demos: resolves a demo by name, profiles its execution,
releases its connection and optionally persists the result.

Usage (example from CLI):
    from duckstats.orchestrator import run_demo

    result = run_demo("statistics", rows=100_000)
    print(result["phases"]["insert"]["duration_seconds"])

When persisting, outputs go to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from duckstats.config import get_settings
from duckstats.demos.abstract import Demo, DemoResult
from duckstats.demos.basic import BasicDemo
from duckstats.demos.statistics_benchmark import StatisticsBenchmark
from duckstats.utils.logging import get_logger
from duckstats.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 6) -> float:
    return round(value, decimals)


def _demo_factories() -> Dict[str, Callable[[], Demo]]:
    """Registry of available demos."""
    return {
        "basic": lambda: BasicDemo(),
        "statistics": lambda: StatisticsBenchmark(),
    }


def available_demos() -> List[str]:
    """List available demo names."""
    return sorted(_demo_factories().keys())


def _resolve_demo(name: str) -> Demo:
    factories = _demo_factories()
    if name not in factories:
        raise ValueError(f"Unknown demo '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]()


def _close_demo(demo: Demo) -> None:
    close = getattr(demo, "close", None)
    if callable(close):
        close()


def _persist_result(payload: Dict[str, Any], results_dir: Path) -> Path:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path


def _merge_result(result: DemoResult, stats: ProfileStats) -> Dict[str, Any]:
    """Attach the runner's whole-demo profile to the demo's own result."""
    merged: Dict[str, Any] = dict(result)
    merged.setdefault("rows", 0)
    merged["duration_seconds"] = _round_float(stats.duration_seconds)
    merged["profile"] = {
        "label": stats.label,
        "duration_seconds": _round_float(stats.duration_seconds),
        "peak_rss_bytes": stats.peak_rss_bytes,
        "cpu_percent": _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
    }
    return merged


def run_demo(
    name: str,
    rows: Optional[int] = None,
    persist: bool = False,
    results_dir: Optional[Path | str] = None,
    demo: Optional[Demo] = None,
) -> Dict[str, Any]:
    """
    Run one demo and return its result merged with profiler stats.

    Parameters
    ----------
    name : str
        Demo name (see `available_demos`).
    rows : int | None
        Rows (basic) or records (statistics) to insert. Demo default when None.
    persist : bool
        Whether to write the result as JSON.
    results_dir : Path | str | None
        Directory for JSON artifacts. Defaults to settings.results_dir.
    demo : Demo | None
        Pre-built demo instance to run instead of resolving `name`.

    Raises
    ------
    ValueError
        If `name` is not a registered demo.
    Exception
        Whatever the demo raises, after it has been logged and the demo closed.
    """
    instance = demo if demo is not None else _resolve_demo(name)
    log.info(f"[DEMO START] {name}", extra={"demo": name, "rows": rows})
    try:
        with profile_block(name) as stats:
            result = instance.execute(rows)
    except Exception:
        log.exception(f"[DEMO FAILED] {name}", extra={"demo": name})
        raise
    finally:
        _close_demo(instance)

    merged = _merge_result(result, stats)
    merged["demo"] = name
    log.info(
        f"[DEMO COMPLETE] {name}",
        extra={"demo": name, "rows": merged["rows"], "duration": merged["duration_seconds"]},
    )

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "demo": name,
            "result": merged,
        }
        _persist_result(payload, Path(results_dir or get_settings().results_dir))

    return merged


__all__ = [
    "available_demos",
    "run_demo",
]

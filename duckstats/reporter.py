from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

STAT_FIELDS = ("mean", "median", "stddev", "minimum", "maximum")

PHASE_TITLES = {
    "insert": "Insertion into DuckDB",
    "in_memory": "Statistics from records",
    "database": "Statistics from DuckDB",
}


def _format_bytes(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def print_values(values: Iterable[Any], console: Optional[Console] = None) -> None:
    """Print one value per line, as read back by the basic demo."""
    console = console or Console()
    for value in values:
        console.print(value)


def print_phases(result: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Render the benchmark's timed phases as a rich table.

    Durations use fixed-point seconds with microsecond resolution. The last row
    is the DuckDB total: aggregate query plus insertion.
    """
    console = console or Console()
    phases = result.get("phases") or {}
    if not phases:
        console.print("[yellow]No phases to display.[/yellow]")
        return

    table = Table(
        title=f"DuckDB statistics benchmark ({result.get('rows', 0):,} records)",
        box=box.ROUNDED,
    )
    table.add_column("Phase", style="cyan", no_wrap=True)
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")

    for key, phase in phases.items():
        cpu = phase.get("cpu_percent")
        table.add_row(
            PHASE_TITLES.get(key, key),
            f"{phase.get('duration_seconds', 0.0):.6f}",
            _format_bytes(phase.get("peak_rss_bytes")),
            f"{cpu:.1f}" if cpu is not None else "N/A",
        )

    if "total_db_seconds" in result:
        table.add_row(
            "[bold]DuckDB total (query + insertion)[/bold]",
            f"[bold]{result['total_db_seconds']:.6f}[/bold]",
            "",
            "",
        )

    console.print(table)


def print_statistics(result: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Render in-memory and DuckDB statistics side by side."""
    console = console or Console()
    stats = result.get("statistics") or {}
    in_memory = stats.get("in_memory", {})
    database = stats.get("database", {})

    agree = result.get("agree")
    caption = "Results agree" if agree else "[red]Results disagree[/red]"
    table = Table(title="Descriptive statistics", box=box.ROUNDED, caption=caption)
    table.add_column("Statistic", style="cyan", no_wrap=True)
    table.add_column("From records", justify="right", style="green")
    table.add_column("From DuckDB", justify="right", style="magenta")

    for field in STAT_FIELDS:
        table.add_row(
            field,
            f"{in_memory[field]:f}" if field in in_memory else "N/A",
            f"{database[field]:f}" if field in database else "N/A",
        )

    console.print(table)


__all__ = ["print_phases", "print_statistics", "print_values"]

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Optional

import click
import typer

from duckstats.config import get_settings
from duckstats.infrastructure.db_factory import duckdb_connection
from duckstats.orchestrator import available_demos, run_demo
from duckstats.reporter import print_phases, print_statistics, print_values
from duckstats.utils.logging import configure_logging

app = typer.Typer(help="DuckDB demos: basic round trip and statistics benchmark.")


def _execute(name: str, rows: Optional[int], persist: bool) -> Dict[str, Any]:
    """Run a demo; any failure is fatal and exits with status 1."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        return run_demo(name, rows=rows, persist=persist)
    except Exception as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _report(name: str, result: Dict[str, Any]) -> None:
    if name == "basic":
        print_values(result.get("values", []))
    else:
        print_phases(result)
        print_statistics(result)


@app.command()
def info() -> None:
    """
    Show effective configuration values and the DuckDB version.
    """
    settings = get_settings()
    with duckdb_connection() as conn:
        (version,) = conn.execute("SELECT version()").fetchone()
    typer.echo(
        f"DuckDB {version} database={settings.db_path} | "
        f"basic_rows={settings.basic_rows} records={settings.benchmark_records} "
        f"rel_tol={settings.benchmark_rel_tol:g}"
    )


@app.command()
def basic(
    rows: Optional[int] = typer.Option(
        None, "--rows", "-r", help="Rows to insert into t (default from settings)."
    ),
) -> None:
    """
    Create table t, insert rows one by one and print them back.
    """
    result = _execute("basic", rows, persist=False)
    _report("basic", result)


@app.command()
def statistics(
    records: Optional[int] = typer.Option(
        None, "--records", "-n", help="Records to generate and insert (default from settings)."
    ),
    persist: bool = typer.Option(
        False, "--persist/--no-persist", help="Write results/latest.json and an archive copy."
    ),
) -> None:
    """
    Time insertion and compare Python and DuckDB descriptive statistics.
    """
    total = records if records is not None else get_settings().benchmark_records
    typer.echo(f"Inserting {total} records into duckdb")
    result = _execute("statistics", total, persist=persist)
    _report("statistics", result)


@app.command()
def run(
    demo: str = typer.Option(
        ..., "--demo", "-d", help="Demo to run (basic, statistics) or 'list'."
    ),
    rows: Optional[int] = typer.Option(
        None, "--rows", "-r", help="Override the number of rows/records."
    ),
    persist: bool = typer.Option(False, "--persist/--no-persist", help="Persist JSON results."),
) -> None:
    """
    Run a demo by name.
    """
    if demo == "list":
        typer.echo("Available demos: " + ", ".join(available_demos()))
        return
    result = _execute(demo, rows, persist=persist)
    _report(demo, result)


def _standalone(command: Callable[[], None]) -> None:
    try:
        command()
    except typer.Exit as exc:
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


def basic_main() -> None:
    """Entry point for `duckstats-basic`: the basic demo with defaults."""
    _standalone(lambda: basic(rows=None))


def statistics_main() -> None:
    """Entry point for `duckstats-statistics`: the benchmark with defaults."""
    _standalone(lambda: statistics(records=None, persist=False))


def main() -> None:
    # Outside standalone mode click re-raises Ctrl-C as Abort instead of exiting 1.
    try:
        exit_code = app(standalone_mode=False)
    except (typer.Abort, KeyboardInterrupt):
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()

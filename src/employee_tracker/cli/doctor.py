"""``employee-tracker doctor`` — environment diagnostics command.

Gathers runtime information and renders a Rich table summarising
whether the environment can run the tracker: interpreter, SQLAlchemy,
the PostgreSQL driver, connection settings and database reachability.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.
"""

from __future__ import annotations

import platform
import sys

from employee_tracker.cli import exit_codes
from employee_tracker.cli.console import console
from employee_tracker.config import DatabaseSettings, load_settings
from employee_tracker.exceptions import EmployeeTrackerError
from employee_tracker.infra.database import close_engine, open_engine, verify_connection
from employee_tracker.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _tracker_version_check() -> tuple[str, str, str]:
    return "employee-tracker", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = major >= 3 and minor >= 10
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _sqlalchemy_version_check() -> tuple[str, str, str]:
    try:
        import sqlalchemy
    except ImportError:
        return "SQLAlchemy", "NOT INSTALLED", FAIL
    return "SQLAlchemy", sqlalchemy.__version__, OK


def _driver_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the psycopg2 driver row."""
    try:
        import psycopg2
    except ImportError:
        return "psycopg2", "NOT INSTALLED", FAIL
    return "psycopg2", psycopg2.__version__.split(" ")[0], OK


def _config_check() -> tuple[tuple[str, str, str], DatabaseSettings | None]:
    try:
        settings = load_settings()
    except EmployeeTrackerError as exc:
        return ("Config", str(exc), FAIL), None
    return ("Config", settings.describe(), OK), settings


def _database_check(settings: DatabaseSettings | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the reachability row."""
    if settings is None:
        return "Database", "skipped (no config)", WARN
    try:
        engine = open_engine(settings.url, pool_pre_ping=True)
    except EmployeeTrackerError as exc:
        return "Database", str(exc), FAIL
    try:
        verify_connection(engine)
    except EmployeeTrackerError as exc:
        return "Database", str(exc), FAIL
    finally:
        close_engine(engine)
    return "Database", "reachable", OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nemployee-tracker doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<18} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<18} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks() -> list[tuple[str, str, str]]:
    config_row, settings = _config_check()
    return [
        _tracker_version_check(),
        _python_version_check(),
        _sqlalchemy_version_check(),
        _driver_check(),
        config_row,
        _database_check(settings),
    ]


def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="employee-tracker doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

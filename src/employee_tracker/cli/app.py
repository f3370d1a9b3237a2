"""CLI application entry point and command routing for employee-tracker.

This module is the **sole process-level error boundary**.  It catches
:class:`~employee_tracker.exceptions.EmployeeTrackerError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  service and infrastructure layers.
* Logging is configured here and nowhere else.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from employee_tracker.cli import exit_codes
from employee_tracker.cli.console import console, err_console, print_error
from employee_tracker.exceptions import EmployeeTrackerError
from employee_tracker.version import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

WELCOME = "[bold cyan]HR 1985[/bold cyan]: The Power of the Menu at Your Fingertips!"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``employee-tracker``                   — interactive menu
    * ``employee-tracker doctor``            — environment diagnostics
    * ``employee-tracker init-db [--seed]``  — create tables
    * ``employee-tracker --version``
    """
    parser = argparse.ArgumentParser(
        prog="employee-tracker",
        description="Interactive employee, role and department tracker.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every SQL statement and its parameters to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("doctor", help="Check the runtime environment and database.")
    init_db = subparsers.add_parser("init-db", help="Create the tracker tables if missing.")
    init_db.add_argument(
        "--seed",
        action="store_true",
        help="Insert a sample organisation when the tables are empty.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Route package logs to stderr; DEBUG when *verbose*, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("employee_tracker").setLevel(level)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_menu() -> int:
    """Connect, run the interactive menu loop, and always disconnect.

    Flow:
    1. Resolve connection settings from the environment / ``.env``.
    2. Create the pooled engine and verify it with ``SELECT 1``.
    3. Run the menu loop until Quit (or Ctrl+C).
    4. Dispose the engine.
    """
    from employee_tracker.cli.menu import MenuLoop
    from employee_tracker.config import load_settings
    from employee_tracker.core.tracker_service import TrackerService
    from employee_tracker.infra.database import close_engine, open_engine, verify_connection
    from employee_tracker.infra.queries import SqlTrackerRepository

    settings = load_settings()

    console.print(f"\n{WELCOME}\n")

    engine = open_engine(settings.url, pool_pre_ping=True)
    try:
        verify_connection(engine)
    except EmployeeTrackerError:
        close_engine(engine)
        raise
    console.print("[green]Connected to the database.[/green]\n")

    try:
        MenuLoop(TrackerService(SqlTrackerRepository(engine))).run()
    finally:
        close_engine(engine)
        console.print("Disconnected from the database.")
        console.print("Have a nice day 🙂")

    return exit_codes.SUCCESS


def _handle_init_db(*, seed: bool) -> int:
    """Create the schema, and optionally the sample organisation."""
    from employee_tracker.config import load_settings
    from employee_tracker.infra.database import close_engine, open_engine, verify_connection
    from employee_tracker.infra.schema import create_schema, seed_sample_data

    settings = load_settings()
    engine = open_engine(settings.url)
    try:
        verify_connection(engine)
        create_schema(engine)
        console.print(f"[green]Tables ready in[/green] {settings.describe()}")
        if seed:
            if seed_sample_data(engine):
                console.print("[green]Sample data inserted.[/green]")
            else:
                console.print("[yellow]Database already has data; seed skipped.[/yellow]")
    finally:
        close_engine(engine)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from employee_tracker.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the employee-tracker CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "doctor":
        return _handle_doctor()
    if args.command == "init-db":
        return _handle_init_db(seed=args.seed)
    return _handle_menu()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except EmployeeTrackerError as exc:
        print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

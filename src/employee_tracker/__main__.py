"""Allow ``python -m employee_tracker`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m employee_tracker`` behaves identically to the
``employee-tracker`` console script.
"""

from __future__ import annotations

from employee_tracker.cli.app import cli

if __name__ == "__main__":
    cli()

"""Custom exception hierarchy for employee-tracker.

All exceptions that cross layer boundaries must inherit from
:class:`EmployeeTrackerError`.  Raw third-party exceptions (e.g. from
SQLAlchemy or the database driver) must NEVER propagate beyond the
infrastructure layer — they must be caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
EmployeeTrackerError
├── ConfigurationError
├── DatabaseConnectionError
├── QueryError
│   └── IntegrityViolationError
├── InvalidInputError
├── NothingToSelectError
├── PromptCancelledError
└── MissingDependencyError
"""

from __future__ import annotations


class EmployeeTrackerError(Exception):
    """Base exception for all employee-tracker errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(EmployeeTrackerError):
    """Raised when connection settings are missing or malformed."""


# --- Database --------------------------------------------------------------

class DatabaseConnectionError(EmployeeTrackerError):
    """Raised when the database cannot be reached."""


class QueryError(EmployeeTrackerError):
    """Raised when a SQL statement fails."""


class IntegrityViolationError(QueryError):
    """Raised when a statement violates a unique or foreign-key constraint."""


# --- User interaction ------------------------------------------------------

class InvalidInputError(EmployeeTrackerError):
    """Raised when a prompted value fails validation."""


class NothingToSelectError(EmployeeTrackerError):
    """Raised when a selection prompt would have no choices."""


class PromptCancelledError(EmployeeTrackerError):
    """Raised when the user cancels a sub-prompt (Ctrl+C / Esc)."""


# --- Environment / tooling -------------------------------------------------

class MissingDependencyError(EmployeeTrackerError):
    """Raised when a required runtime package is not installed."""


def append_connection_suggestion(hint: str) -> str:
    """Append connection-settings guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Check your connection settings:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME (or DATABASE_URL)",
        )
    )

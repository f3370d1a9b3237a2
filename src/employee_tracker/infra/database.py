"""SQLAlchemy engine lifecycle and exception mapping.

This module (together with :mod:`~employee_tracker.infra.queries` and
:mod:`~employee_tracker.infra.schema`) is the only place in the
codebase that touches SQLAlchemy.  All SQLAlchemy and driver
exceptions are caught here and re-raised as typed
:class:`~employee_tracker.exceptions.EmployeeTrackerError` subclasses.

The engine owns a connection pool; one engine is created per process
and disposed when the user quits.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    NoSuchModuleError,
    OperationalError,
    SQLAlchemyError,
)

from employee_tracker.exceptions import (
    DatabaseConnectionError,
    EmployeeTrackerError,
    IntegrityViolationError,
    MissingDependencyError,
    QueryError,
    append_connection_suggestion,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine lifecycle
# ---------------------------------------------------------------------------

def open_engine(url: URL | str, **engine_kwargs: Any) -> Engine:
    """Create the pooled engine for *url* without connecting yet.

    Raises
    ------
    MissingDependencyError
        When the DBAPI driver for the URL's dialect is not installed.
    """
    try:
        engine = create_engine(url, **engine_kwargs)
    except (ModuleNotFoundError, NoSuchModuleError) as exc:
        raise MissingDependencyError(
            f"Database driver unavailable: {exc}",
            hint="For PostgreSQL install with: pip install psycopg2-binary",
        ) from exc

    if engine.dialect.name == "sqlite":
        # SQLite ships with foreign-key enforcement off.
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def verify_connection(engine: Engine) -> None:
    """Check out one pooled connection and run ``SELECT 1``.

    Raises
    ------
    DatabaseConnectionError
        When the database cannot be reached or rejects the credentials.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseConnectionError(
            f"Could not connect to the database: {_first_line(exc)}",
            hint=append_connection_suggestion(
                "Make sure the server is running and the database exists.",
            ),
        ) from exc
    logger.info(
        "Connected to the database at %s",
        engine.url.render_as_string(hide_password=True),
    )


def close_engine(engine: Engine) -> None:
    """Dispose the engine's pool, closing every pooled connection."""
    engine.dispose()
    logger.info("Disconnected from the database.")


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

def map_sqlalchemy_error(exc: SQLAlchemyError, action: str) -> EmployeeTrackerError:
    """Translate a SQLAlchemy exception raised while performing *action*.

    Returns the domain exception; the caller raises it ``from exc``.
    """
    detail = _first_line(exc)
    if isinstance(exc, IntegrityError):
        return IntegrityViolationError(
            f"Error {action}: {detail}",
            hint="The value may already exist, or a referenced row is missing.",
        )
    if isinstance(exc, (OperationalError, InterfaceError)):
        return DatabaseConnectionError(
            f"Error {action}: {detail}",
            hint=append_connection_suggestion("The connection to the database was lost."),
        )
    return QueryError(f"Error {action}: {detail}")


def _first_line(exc: BaseException) -> str:
    # DBAPI messages carry the SQL and a background link on later lines.
    orig = getattr(exc, "orig", None)
    message = str(orig if orig is not None else exc).strip()
    return message.splitlines()[0] if message else type(exc).__name__

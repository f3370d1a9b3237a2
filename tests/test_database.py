"""Tests for engine lifecycle and SQLAlchemy exception mapping (infra/database.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from employee_tracker.exceptions import (
    DatabaseConnectionError,
    IntegrityViolationError,
    MissingDependencyError,
    QueryError,
)
from employee_tracker.infra.database import (
    map_sqlalchemy_error,
    open_engine,
    verify_connection,
)


class TestOpenEngine:
    def test_sqlite_enforces_foreign_keys(self, engine: Engine) -> None:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_unknown_dialect_is_missing_dependency(self) -> None:
        with pytest.raises(MissingDependencyError, match="Database driver unavailable"):
            open_engine("nosuchdialect://user@host/db")


class TestVerifyConnection:
    def test_reachable(self, engine: Engine) -> None:
        verify_connection(engine)

    def test_unreachable(self, tmp_path: Path) -> None:
        engine = open_engine(f"sqlite:///{tmp_path / 'missing' / 'tracker.db'}")
        with pytest.raises(DatabaseConnectionError) as exc_info:
            verify_connection(engine)
        assert "Check your connection settings:" in (exc_info.value.hint or "")
        engine.dispose()


class TestMapSqlalchemyError:
    def test_integrity_error(self) -> None:
        exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: department.name"))
        mapped = map_sqlalchemy_error(exc, "adding department")
        assert isinstance(mapped, IntegrityViolationError)
        assert str(mapped) == "Error adding department: UNIQUE constraint failed: department.name"

    def test_operational_error(self) -> None:
        exc = OperationalError("SELECT 1", {}, Exception("server closed the connection\nDETAIL"))
        mapped = map_sqlalchemy_error(exc, "viewing roles")
        assert isinstance(mapped, DatabaseConnectionError)
        assert str(mapped) == "Error viewing roles: server closed the connection"

    def test_other_error(self) -> None:
        exc = ProgrammingError("SELECT", {}, Exception("syntax error"))
        mapped = map_sqlalchemy_error(exc, "viewing roles")
        assert type(mapped) is QueryError

"""Tests for the ``employee-tracker doctor`` command (cli/doctor.py).

Database reachability is exercised against a throwaway SQLite file via
``DATABASE_URL``; no PostgreSQL server is needed.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS / GENERAL_ERROR depending on FAIL rows.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from unittest.mock import patch

import pytest

from employee_tracker.cli import exit_codes
from employee_tracker.cli.doctor import (
    _config_check,
    _database_check,
    _python_version_check,
    _sqlalchemy_version_check,
    _status_plain,
    run_doctor,
)
from employee_tracker.config import DatabaseSettings, load_settings

OK_ROWS = [("employee-tracker", "1.0.0", "[green]OK[/green]")]


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status


class TestSqlalchemyCheck:
    def test_installed(self) -> None:
        label, value, status = _sqlalchemy_version_check()
        assert label == "SQLAlchemy"
        assert value.startswith("2.")
        assert "OK" in status


class TestConfigCheck:
    def test_missing_config_fails(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "employee_tracker.cli.doctor.load_settings",
            partial(load_settings, dotenv=False),
        )
        (label, value, status), settings = _config_check()
        assert label == "Config"
        assert "DB_NAME" in value
        assert "FAIL" in status
        assert settings is None

    def test_database_url_ok(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite:///doctor.db")
        (_, value, status), settings = _config_check()
        assert "OK" in status
        assert settings is not None
        assert "sqlite" in value


class TestDatabaseCheck:
    def test_skipped_without_settings(self) -> None:
        _, value, status = _database_check(None)
        assert "skipped" in value
        assert "WARN" in status

    def test_reachable(self, tmp_path: Path) -> None:
        settings = DatabaseSettings(
            name=None, user=None, password=None,
            database_url=f"sqlite:///{tmp_path / 'doctor.db'}",
        )
        assert _database_check(settings) == ("Database", "reachable", "[green]OK[/green]")

    def test_unreachable(self, tmp_path: Path) -> None:
        settings = DatabaseSettings(
            name=None, user=None, password=None,
            database_url=f"sqlite:///{tmp_path / 'missing' / 'doctor.db'}",
        )
        _, value, status = _database_check(settings)
        assert "FAIL" in status
        assert "Could not connect" in value


class TestStatusPlain:
    @pytest.mark.parametrize(
        "markup,plain",
        [
            ("[green]OK[/green]", "OK"),
            ("[yellow]WARN[/yellow]", "WARN"),
            ("[red]FAIL (>=3.10 required)[/red]", "FAIL"),
        ],
    )
    def test_strips_markup(self, markup: str, plain: str) -> None:
        assert _status_plain(markup) == plain


# ---------------------------------------------------------------------------
# run_doctor
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_all_ok_returns_success(self) -> None:
        with patch("employee_tracker.cli.doctor.collect_checks", return_value=OK_ROWS):
            assert run_doctor() == exit_codes.SUCCESS

    def test_warn_is_not_failure(self) -> None:
        rows = OK_ROWS + [("Database", "skipped (no config)", "[yellow]WARN[/yellow]")]
        with patch("employee_tracker.cli.doctor.collect_checks", return_value=rows):
            assert run_doctor() == exit_codes.SUCCESS

    def test_fail_returns_general_error(self) -> None:
        rows = OK_ROWS + [("psycopg2", "NOT INSTALLED", "[red]FAIL[/red]")]
        with patch("employee_tracker.cli.doctor.collect_checks", return_value=rows):
            assert run_doctor() == exit_codes.GENERAL_ERROR

    def test_end_to_end_with_sqlite(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'doctor.db'}")
        code = run_doctor()
        assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


class TestDoctorRouting:
    def test_main_routes_doctor(self) -> None:
        from employee_tracker.cli.app import main

        with patch("employee_tracker.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS) as run:
            assert main(["doctor"]) == exit_codes.SUCCESS
        run.assert_called_once_with()

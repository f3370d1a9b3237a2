"""Tests for schema creation and sample data (infra/schema.py)."""

from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from employee_tracker.infra.queries import SqlTrackerRepository
from employee_tracker.infra.schema import (
    SAMPLE_EMPLOYEES,
    SAMPLE_ROLES,
    create_schema,
    seed_sample_data,
)


class TestCreateSchema:
    def test_creates_three_tables(self, engine: Engine) -> None:
        assert set(inspect(engine).get_table_names()) == {"department", "role", "employee"}

    def test_is_idempotent(self, engine: Engine) -> None:
        create_schema(engine)
        assert len(inspect(engine).get_table_names()) == 3

    def test_manager_is_self_reference(self, engine: Engine) -> None:
        fks = inspect(engine).get_foreign_keys("employee")
        referred = {fk["referred_table"] for fk in fks}
        assert referred == {"role", "employee"}


class TestSeedSampleData:
    def test_inserts_sample_organisation(self, engine: Engine) -> None:
        assert seed_sample_data(engine) is True
        repository = SqlTrackerRepository(engine)
        assert len(repository.view_all_departments()) == len(SAMPLE_ROLES)
        assert len(repository.view_all_employees()) == len(SAMPLE_EMPLOYEES)

    def test_skips_when_data_exists(self, seeded_engine: Engine) -> None:
        assert seed_sample_data(seeded_engine) is False
        assert len(SqlTrackerRepository(seeded_engine).view_all_employees()) == len(SAMPLE_EMPLOYEES)

    def test_every_sample_manager_is_seeded_before_reports(self) -> None:
        seen: set[str] = set()
        for first, last, _title, manager in SAMPLE_EMPLOYEES:
            assert manager is None or manager in seen
            seen.add(f"{first} {last}")

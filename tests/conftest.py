"""Shared pytest fixtures and configuration for the employee-tracker test suite.

Guidelines
----------
* No PostgreSQL server and no network access in any test.
* The query layer runs against an in-memory SQLite engine built from
  the real schema.
* questionary is mocked at the prompt boundary; no terminal needed.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from employee_tracker.core.tracker_service import TrackerService
from employee_tracker.infra.database import open_engine
from employee_tracker.infra.queries import SqlTrackerRepository
from employee_tracker.infra.schema import create_schema, seed_sample_data

DB_ENV_VARS = ("DATABASE_URL", "DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT")


@pytest.fixture(autouse=True)
def _clean_db_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real connection settings out of every test."""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Empty in-memory database with the tracker schema."""
    engine = open_engine(
        "sqlite+pysqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_engine(engine: Engine) -> Engine:
    """In-memory database holding the sample organisation.

    Ids follow insertion order: departments Sales=1, Engineering=2,
    Finance=3, Legal=4; John Doe=1 manages Mike Chan=2, Ashley
    Rodriguez=3 manages Kevin Tupik=4, Kunal Singh=5 manages Malia
    Brown=6, Sarah Lourd=7 manages Tom Allen=8.
    """
    seed_sample_data(engine)
    return engine


@pytest.fixture
def repository(seeded_engine: Engine) -> SqlTrackerRepository:
    return SqlTrackerRepository(seeded_engine)


@pytest.fixture
def service(repository: SqlTrackerRepository) -> TrackerService:
    return TrackerService(repository)

"""Table definitions and sample data for the tracker database.

``create_schema`` is idempotent (``CREATE TABLE IF NOT EXISTS``
semantics via :meth:`MetaData.create_all`); there is no migration
support.
"""

from __future__ import annotations

import logging

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from employee_tracker.infra.database import map_sqlalchemy_error

logger = logging.getLogger(__name__)

metadata = MetaData()

department_table = Table(
    "department",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(30), unique=True, nullable=False),
)

role_table = Table(
    "role",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(30), unique=True, nullable=False),
    Column("salary", Numeric(10, 2), nullable=False),
    Column("department_id", Integer, ForeignKey("department.id"), nullable=False),
)

employee_table = Table(
    "employee",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("first_name", String(30), nullable=False),
    Column("last_name", String(30), nullable=False),
    Column("role_id", Integer, ForeignKey("role.id"), nullable=False),
    Column("manager_id", Integer, ForeignKey("employee.id"), nullable=True),
)


# (department, [(title, salary), ...])
SAMPLE_ROLES: tuple[tuple[str, tuple[tuple[str, int], ...]], ...] = (
    ("Sales", (("Sales Lead", 100_000), ("Salesperson", 80_000))),
    ("Engineering", (("Lead Engineer", 150_000), ("Software Engineer", 120_000))),
    ("Finance", (("Account Manager", 160_000), ("Accountant", 125_000))),
    ("Legal", (("Legal Team Lead", 250_000), ("Lawyer", 190_000))),
)

# (first, last, role title, manager "first last" or None); managers first.
SAMPLE_EMPLOYEES: tuple[tuple[str, str, str, str | None], ...] = (
    ("John", "Doe", "Sales Lead", None),
    ("Mike", "Chan", "Salesperson", "John Doe"),
    ("Ashley", "Rodriguez", "Lead Engineer", None),
    ("Kevin", "Tupik", "Software Engineer", "Ashley Rodriguez"),
    ("Kunal", "Singh", "Account Manager", None),
    ("Malia", "Brown", "Accountant", "Kunal Singh"),
    ("Sarah", "Lourd", "Legal Team Lead", None),
    ("Tom", "Allen", "Lawyer", "Sarah Lourd"),
)


def create_schema(engine: Engine) -> None:
    """Create the ``department``, ``role`` and ``employee`` tables if absent."""
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise map_sqlalchemy_error(exc, "creating tables") from exc
    logger.info("Schema ready: %s", ", ".join(sorted(metadata.tables)))


def seed_sample_data(engine: Engine) -> bool:
    """Insert the sample organisation when the database is empty.

    Returns ``True`` if rows were inserted, ``False`` if departments
    already existed and nothing was touched.
    """
    try:
        with engine.begin() as conn:
            existing = conn.execute(select(func.count()).select_from(department_table)).scalar_one()
            if existing:
                logger.info("Skipping seed: %d departments already present", existing)
                return False

            role_ids: dict[str, int] = {}
            for department, roles in SAMPLE_ROLES:
                department_id = conn.execute(
                    insert(department_table).values(name=department)
                ).inserted_primary_key[0]
                for title, salary in roles:
                    role_ids[title] = conn.execute(
                        insert(role_table).values(
                            title=title,
                            salary=salary,
                            department_id=department_id,
                        )
                    ).inserted_primary_key[0]

            employee_ids: dict[str, int] = {}
            for first, last, title, manager in SAMPLE_EMPLOYEES:
                employee_ids[f"{first} {last}"] = conn.execute(
                    insert(employee_table).values(
                        first_name=first,
                        last_name=last,
                        role_id=role_ids[title],
                        manager_id=employee_ids[manager] if manager else None,
                    )
                ).inserted_primary_key[0]
    except SQLAlchemyError as exc:
        raise map_sqlalchemy_error(exc, "seeding sample data") from exc

    logger.info("Seeded %d employees", len(SAMPLE_EMPLOYEES))
    return True

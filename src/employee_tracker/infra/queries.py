"""SQLAlchemy backed implementation of :class:`~employee_tracker.core.protocols.TrackerRepository`.

Every statement is a parameterized :func:`sqlalchemy.text` construct
with named bind parameters. User input is never interpolated into
SQL.  Reads check out a pooled connection; writes run inside
``engine.begin()`` so each action commits (or rolls back) on its own.

All SQLAlchemy exceptions are caught here and re-raised as typed
:class:`~employee_tracker.exceptions.EmployeeTrackerError` subclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric, bindparam, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from employee_tracker.infra.database import map_sqlalchemy_error

logger = logging.getLogger(__name__)

Row = dict[str, Any]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

# Self-join: the manager is another row of the employee table.  ``||``
# yields NULL when the employee has no manager.
_EMPLOYEE_SELECT = """
    SELECT
        employee.id,
        employee.first_name,
        employee.last_name,
        role.title,
        department.name AS department,
        role.salary,
        manager.first_name || ' ' || manager.last_name AS manager
    FROM
        employee
    JOIN role
        ON employee.role_id = role.id
    JOIN department
        ON role.department_id = department.id
    LEFT JOIN employee AS manager
        ON employee.manager_id = manager.id
"""

VIEW_ALL_EMPLOYEES = text(_EMPLOYEE_SELECT + "ORDER BY employee.id ASC")

VIEW_EMPLOYEES_BY_MANAGER = text(
    _EMPLOYEE_SELECT
    + "WHERE employee.manager_id = :manager_id ORDER BY employee.id ASC"
)

VIEW_EMPLOYEES_BY_DEPARTMENT = text(
    _EMPLOYEE_SELECT
    + "WHERE role.department_id = :department_id ORDER BY employee.id ASC"
)

GET_ALL_MANAGERS = text("""
    SELECT DISTINCT
        manager.id,
        manager.first_name || ' ' || manager.last_name AS manager
    FROM
        employee
    JOIN employee AS manager
        ON employee.manager_id = manager.id
    ORDER BY
        manager ASC
""")

ADD_EMPLOYEE = text("""
    INSERT INTO employee (first_name, last_name, role_id, manager_id)
    VALUES (:first_name, :last_name, :role_id, :manager_id)
    RETURNING id
""")

DETACH_REPORTS = text("""
    UPDATE employee SET manager_id = NULL WHERE manager_id = :employee_id
""")

DELETE_EMPLOYEE = text("DELETE FROM employee WHERE id = :employee_id")

UPDATE_EMPLOYEE_ROLE = text(
    "UPDATE employee SET role_id = :role_id WHERE id = :employee_id"
)

UPDATE_EMPLOYEE_MANAGER = text(
    "UPDATE employee SET manager_id = :manager_id WHERE id = :employee_id"
)

VIEW_ROLES = text("""
    SELECT
        role.id,
        role.title,
        department.name AS department,
        role.salary
    FROM
        role
    JOIN department
        ON role.department_id = department.id
    ORDER BY
        role.id ASC
""")

ADD_ROLE = text("""
    INSERT INTO role (title, salary, department_id)
    VALUES (:title, :salary, :department_id)
    RETURNING id
""").bindparams(bindparam("salary", type_=Numeric(10, 2)))

COUNT_EMPLOYEES_IN_ROLE = text(
    "SELECT COUNT(*) AS count FROM employee WHERE role_id = :role_id"
)

DELETE_ROLE = text("DELETE FROM role WHERE id = :role_id")

VIEW_ALL_DEPARTMENTS = text("""
    SELECT
        department.id,
        department.name AS department
    FROM
        department
    ORDER BY
        department.name ASC
""")

ADD_DEPARTMENT = text("INSERT INTO department (name) VALUES (:name) RETURNING id")

COUNT_ROLES_IN_DEPARTMENT = text(
    "SELECT COUNT(*) AS count FROM role WHERE department_id = :department_id"
)

DELETE_DEPARTMENT = text("DELETE FROM department WHERE id = :department_id")

# Roles without employees must not count towards the budget.
VIEW_DEPARTMENT_BUDGETS = text("""
    SELECT
        department.id,
        department.name AS department,
        COUNT(employee.id) AS headcount,
        COALESCE(
            SUM(CASE WHEN employee.id IS NULL THEN 0 ELSE role.salary END),
            0
        ) AS budget
    FROM
        department
    LEFT JOIN role
        ON role.department_id = department.id
    LEFT JOIN employee
        ON employee.role_id = role.id
    GROUP BY
        department.id, department.name
    ORDER BY
        department.name ASC
""")


class SqlTrackerRepository:
    """Concrete :class:`TrackerRepository` over a SQLAlchemy engine.

    Usage::

        repository = SqlTrackerRepository(engine)
        rows = repository.view_all_employees()

    This class satisfies the
    :class:`~employee_tracker.core.protocols.TrackerRepository` protocol
    structurally, without inheriting from it.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine: Engine = engine

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def view_all_employees(self) -> list[Row]:
        return self._fetch_all("view_all_employees", VIEW_ALL_EMPLOYEES)

    def view_employees_by_manager(self, manager_id: int) -> list[Row]:
        return self._fetch_all(
            "view_employees_by_manager",
            VIEW_EMPLOYEES_BY_MANAGER,
            {"manager_id": manager_id},
        )

    def view_employees_by_department(self, department_id: int) -> list[Row]:
        return self._fetch_all(
            "view_employees_by_department",
            VIEW_EMPLOYEES_BY_DEPARTMENT,
            {"department_id": department_id},
        )

    def get_all_managers(self) -> list[Row]:
        return self._fetch_all("get_all_managers", GET_ALL_MANAGERS)

    def add_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: int | None,
    ) -> int:
        """Insert an employee; a ``None`` manager is stored as SQL ``NULL``."""
        params = {
            "first_name": first_name,
            "last_name": last_name,
            "role_id": role_id,
            "manager_id": manager_id,
        }
        with self._transaction("adding employee") as conn:
            new_id = self._execute(conn, "add_employee", ADD_EMPLOYEE, params).scalar_one()
        return int(new_id)

    def delete_employee(self, employee_id: int) -> bool:
        """Delete an employee, leaving their direct reports without a manager.

        Returns ``True`` if the employee existed.
        """
        params = {"employee_id": employee_id}
        with self._transaction("deleting employee") as conn:
            self._execute(conn, "detach_reports", DETACH_REPORTS, params)
            result = self._execute(conn, "delete_employee", DELETE_EMPLOYEE, params)
            deleted = result.rowcount > 0
        return deleted

    def update_employee_role(self, employee_id: int, role_id: int) -> int:
        params = {"employee_id": employee_id, "role_id": role_id}
        with self._transaction("updating employee role") as conn:
            result = self._execute(conn, "update_employee_role", UPDATE_EMPLOYEE_ROLE, params)
            changed = result.rowcount
        logger.debug("update_employee_role: records changed: %d", changed)
        return changed

    def update_employee_manager(self, employee_id: int, manager_id: int | None) -> int:
        params = {"employee_id": employee_id, "manager_id": manager_id}
        with self._transaction("updating employee manager") as conn:
            result = self._execute(
                conn, "update_employee_manager", UPDATE_EMPLOYEE_MANAGER, params,
            )
            changed = result.rowcount
        logger.debug("update_employee_manager: records changed: %d", changed)
        return changed

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def view_roles(self) -> list[Row]:
        return self._fetch_all("view_roles", VIEW_ROLES)

    def add_role(self, title: str, salary: Decimal, department_id: int) -> int:
        params = {"title": title, "salary": salary, "department_id": department_id}
        with self._transaction("adding role") as conn:
            new_id = self._execute(conn, "add_role", ADD_ROLE, params).scalar_one()
        return int(new_id)

    def delete_role(self, role_id: int) -> bool:
        """Delete the role only if there are no employees assigned to it.

        Dependent employees are never removed or reassigned; the caller
        is told the delete was refused instead.
        """
        params = {"role_id": role_id}
        with self._transaction("deleting role") as conn:
            in_use = self._execute(
                conn, "count_employees_in_role", COUNT_EMPLOYEES_IN_ROLE, params,
            ).scalar_one()
            if in_use:
                logger.info("delete_role: role %d still has %d employees", role_id, in_use)
                return False
            result = self._execute(conn, "delete_role", DELETE_ROLE, params)
            deleted = result.rowcount > 0
        return deleted

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    def view_all_departments(self) -> list[Row]:
        return self._fetch_all("view_all_departments", VIEW_ALL_DEPARTMENTS)

    def add_department(self, name: str) -> int:
        with self._transaction("adding department") as conn:
            new_id = self._execute(
                conn, "add_department", ADD_DEPARTMENT, {"name": name},
            ).scalar_one()
        return int(new_id)

    def delete_department(self, department_id: int) -> bool:
        """Delete the department only if no role belongs to it."""
        params = {"department_id": department_id}
        with self._transaction("deleting department") as conn:
            in_use = self._execute(
                conn, "count_roles_in_department", COUNT_ROLES_IN_DEPARTMENT, params,
            ).scalar_one()
            if in_use:
                logger.info(
                    "delete_department: department %d still has %d roles",
                    department_id,
                    in_use,
                )
                return False
            result = self._execute(conn, "delete_department", DELETE_DEPARTMENT, params)
            deleted = result.rowcount > 0
        return deleted

    def view_department_budgets(self) -> list[Row]:
        return self._fetch_all("view_department_budgets", VIEW_DEPARTMENT_BUDGETS)

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _fetch_all(
        self,
        name: str,
        statement: TextClause,
        params: dict[str, Any] | None = None,
    ) -> list[Row]:
        try:
            with self._engine.connect() as conn:
                result = self._execute(conn, name, statement, params or {})
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as exc:
            raise map_sqlalchemy_error(exc, f"running {name}") from exc

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Connection]:
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise map_sqlalchemy_error(exc, action) from exc

    @staticmethod
    def _execute(
        conn: Connection,
        name: str,
        statement: TextClause,
        params: dict[str, Any],
    ) -> Any:
        logger.debug("%s: %s | params=%r", name, " ".join(statement.text.split()), params)
        return conn.execute(statement, params)


"""Core tracker service — validates input and maps query rows to models.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~employee_tracker.core.protocols.TrackerRepository`
injected at construction time (dependency inversion), keeping the core
free of any database imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no SQL.
* Only :class:`~employee_tracker.exceptions.EmployeeTrackerError`
  subclasses escape.
* All row parsing is deterministic and stateless.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

from employee_tracker.core.models import (
    Department,
    DepartmentBudget,
    Employee,
    Manager,
    Role,
)
from employee_tracker.core.protocols import Row, TrackerRepository
from employee_tracker.core.validation import capitalize, parse_salary, require_text
from employee_tracker.exceptions import (
    EmployeeTrackerError,
    InvalidInputError,
    QueryError,
)

T = TypeVar("T")


class TrackerService:
    """Stateless service in front of the query layer.

    Parameters
    ----------
    repository:
        Any object satisfying the :class:`TrackerRepository` protocol.
    """

    def __init__(self, repository: TrackerRepository) -> None:
        self._repository: TrackerRepository = repository

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def list_employees(self) -> list[Employee]:
        rows = self._call(self._repository.view_all_employees)
        return [self._parse_employee(row) for row in rows]

    def list_employees_by_manager(self, manager_id: int) -> list[Employee]:
        rows = self._call(self._repository.view_employees_by_manager, manager_id)
        return [self._parse_employee(row) for row in rows]

    def list_employees_by_department(self, department_id: int) -> list[Employee]:
        rows = self._call(self._repository.view_employees_by_department, department_id)
        return [self._parse_employee(row) for row in rows]

    def list_managers(self) -> list[Manager]:
        rows = self._call(self._repository.get_all_managers)
        return [Manager(id=int(row["id"]), name=str(row["manager"])) for row in rows]

    def add_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: int | None = None,
    ) -> int:
        """Insert an employee; ``manager_id=None`` stores no manager.

        Names are stripped and their first letter capitalized.

        Raises
        ------
        InvalidInputError
            If either name is blank.
        IntegrityViolationError
            If *role_id* or *manager_id* does not exist.
        """
        first = capitalize(require_text(first_name, "First name"))
        last = capitalize(require_text(last_name, "Last name"))
        return self._call(self._repository.add_employee, first, last, role_id, manager_id)

    def delete_employee(self, employee_id: int) -> bool:
        return self._call(self._repository.delete_employee, employee_id)

    def update_employee_role(self, employee_id: int, role_id: int) -> int:
        return self._call(self._repository.update_employee_role, employee_id, role_id)

    def update_employee_manager(self, employee_id: int, manager_id: int | None) -> int:
        """Assign (or clear, with ``None``) an employee's manager.

        Raises
        ------
        InvalidInputError
            If the employee would manage themselves.
        """
        if manager_id is not None and manager_id == employee_id:
            raise InvalidInputError(
                "An employee cannot be their own manager.",
                hint="Choose a different manager or 'None'.",
            )
        return self._call(self._repository.update_employee_manager, employee_id, manager_id)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def list_roles(self) -> list[Role]:
        rows = self._call(self._repository.view_roles)
        return [
            Role(
                id=int(row["id"]),
                title=str(row["title"]),
                salary=self._to_decimal(row["salary"]),
                department=str(row["department"]),
            )
            for row in rows
        ]

    def add_role(self, title: str, salary: str | int | float | Decimal, department_id: int) -> int:
        """Insert a role.

        Raises
        ------
        InvalidInputError
            If *title* is blank or *salary* is not a non-negative number.
        IntegrityViolationError
            If the title already exists or the department does not.
        """
        clean_title = require_text(title, "Role title")
        amount = parse_salary(salary)
        return self._call(self._repository.add_role, clean_title, amount, department_id)

    def delete_role(self, role_id: int) -> bool:
        """Return ``False`` when employees still hold the role."""
        return self._call(self._repository.delete_role, role_id)

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    def list_departments(self) -> list[Department]:
        rows = self._call(self._repository.view_all_departments)
        return [Department(id=int(row["id"]), name=str(row["department"])) for row in rows]

    def add_department(self, name: str) -> int:
        clean_name = require_text(name, "Department name")
        return self._call(self._repository.add_department, clean_name)

    def delete_department(self, department_id: int) -> bool:
        """Return ``False`` when roles still belong to the department."""
        return self._call(self._repository.delete_department, department_id)

    def department_budgets(self) -> list[DepartmentBudget]:
        rows = self._call(self._repository.view_department_budgets)
        return [
            DepartmentBudget(
                id=int(row["id"]),
                department=str(row["department"]),
                headcount=int(row["headcount"] or 0),
                budget=self._to_decimal(row["budget"]),
            )
            for row in rows
        ]

    # ------------------------------------------------------------------
    # Repository delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(func: Callable[..., T], *args: Any) -> T:
        """Call the repository and ensure only our exceptions escape."""
        try:
            return func(*args)
        except EmployeeTrackerError:
            # Already typed.
            raise
        except Exception as exc:
            raise QueryError(f"Unexpected query error: {exc}") from exc

    # ------------------------------------------------------------------
    # Row → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if value is None:
            return Decimal("0.00")
        return Decimal(str(value)).quantize(Decimal("0.01"))

    @classmethod
    def _parse_employee(cls, row: Row) -> Employee:
        manager = row.get("manager")
        return Employee(
            id=int(row["id"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            title=str(row["title"]),
            department=str(row["department"]),
            salary=cls._to_decimal(row["salary"]),
            manager=str(manager) if manager else None,
        )

"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol

Row = dict[str, Any]


class TrackerRepository(Protocol):
    """Contract for the query layer behind the tracker.

    Every read returns plain row dicts keyed by column label; writes
    return the new id or the number of rows changed; guarded deletes
    return ``True`` only when the row was removed.

    Implementations must map all backend-specific exceptions to
    :class:`~employee_tracker.exceptions.EmployeeTrackerError` subclasses.
    """

    # --- employees ---------------------------------------------------------

    def view_all_employees(self) -> list[Row]: ...  # pragma: no cover

    def view_employees_by_manager(self, manager_id: int) -> list[Row]: ...  # pragma: no cover

    def view_employees_by_department(self, department_id: int) -> list[Row]: ...  # pragma: no cover

    def get_all_managers(self) -> list[Row]: ...  # pragma: no cover

    def add_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: int | None,
    ) -> int: ...  # pragma: no cover

    def delete_employee(self, employee_id: int) -> bool: ...  # pragma: no cover

    def update_employee_role(self, employee_id: int, role_id: int) -> int: ...  # pragma: no cover

    def update_employee_manager(
        self,
        employee_id: int,
        manager_id: int | None,
    ) -> int: ...  # pragma: no cover

    # --- roles -------------------------------------------------------------

    def view_roles(self) -> list[Row]: ...  # pragma: no cover

    def add_role(self, title: str, salary: Decimal, department_id: int) -> int: ...  # pragma: no cover

    def delete_role(self, role_id: int) -> bool:
        """Delete the role only if no employee is assigned to it."""
        ...  # pragma: no cover

    # --- departments -------------------------------------------------------

    def view_all_departments(self) -> list[Row]: ...  # pragma: no cover

    def add_department(self, name: str) -> int: ...  # pragma: no cover

    def delete_department(self, department_id: int) -> bool:
        """Delete the department only if no role belongs to it."""
        ...  # pragma: no cover

    def view_department_budgets(self) -> list[Row]: ...  # pragma: no cover

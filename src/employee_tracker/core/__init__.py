"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No database or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from employee_tracker.core.models import (
    Department,
    DepartmentBudget,
    Employee,
    Manager,
    Role,
)
from employee_tracker.core.protocols import TrackerRepository
from employee_tracker.core.tracker_service import TrackerService

__all__: list[str] = [
    "Department",
    "DepartmentBudget",
    "Employee",
    "Manager",
    "Role",
    "TrackerRepository",
    "TrackerService",
]

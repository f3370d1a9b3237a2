"""Domain models for employee-tracker.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


# ---------------------------------------------------------------------------
# Organisation structure
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Department:
    """A named organizational unit."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Role:
    """A named position with a salary, belonging to one department."""

    id: int
    title: str
    salary: Decimal
    department: str
    """Name of the owning department."""


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Employee:
    """One employee row, flattened with its role, department and manager."""

    id: int
    first_name: str
    last_name: str
    title: str
    department: str
    salary: Decimal

    manager: str | None
    """Manager's full name, or ``None`` when the employee has no manager."""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, slots=True)
class Manager:
    """An employee referenced by at least one other employee's manager field."""

    id: int
    name: str


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DepartmentBudget:
    """Utilized budget of a department: the salaries of everyone in it."""

    id: int
    department: str
    headcount: int
    budget: Decimal

"""Rich table rendering for query results.

All display-related logic for the "View ..." actions lives here; no
SQL, no prompting.  Row models come in; a table goes to the console.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from employee_tracker.cli.console import console
from employee_tracker.core.models import Department, DepartmentBudget, Employee, Role
from employee_tracker.exceptions import MissingDependencyError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for result rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def _format_money(amount: Decimal) -> str:
    """Render ``Decimal("80000")`` as ``"80,000.00"``."""
    return f"{amount:,.2f}"


def _format_manager(manager: str | None) -> str:
    if manager is None:
        return "None"
    return manager


def _new_table(title: str, columns: Sequence[tuple[str, str]]) -> Any:
    """Create a table with ``(heading, justify)`` columns in the house style."""
    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    for heading, justify in columns:
        table.add_column(heading, justify=justify)
    return table


def _show(table: Any, row_count: int) -> None:
    console.print()
    if row_count == 0:
        console.print("[dim]No records found.[/dim]")
    else:
        console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public renderers
# ---------------------------------------------------------------------------

def render_employees(employees: Sequence[Employee], *, title: str = "Employees") -> None:
    table = _new_table(
        title,
        (
            ("ID", "right"),
            ("First Name", "left"),
            ("Last Name", "left"),
            ("Title", "left"),
            ("Department", "left"),
            ("Salary", "right"),
            ("Manager", "left"),
        ),
    )
    for employee in employees:
        table.add_row(
            str(employee.id),
            employee.first_name,
            employee.last_name,
            employee.title,
            employee.department,
            _format_money(employee.salary),
            _format_manager(employee.manager),
        )
    _show(table, len(employees))


def render_roles(roles: Sequence[Role]) -> None:
    table = _new_table(
        "Roles",
        (("ID", "right"), ("Title", "left"), ("Department", "left"), ("Salary", "right")),
    )
    for role in roles:
        table.add_row(str(role.id), role.title, role.department, _format_money(role.salary))
    _show(table, len(roles))


def render_departments(departments: Sequence[Department]) -> None:
    table = _new_table("Departments", (("ID", "right"), ("Department Name", "left")))
    for department in departments:
        table.add_row(str(department.id), department.name)
    _show(table, len(departments))


def render_budgets(budgets: Sequence[DepartmentBudget]) -> None:
    """Show each department's headcount and utilized salary budget."""
    table = _new_table(
        "Department Budgets",
        (
            ("ID", "right"),
            ("Department", "left"),
            ("Employees", "right"),
            ("Total Salaries", "right"),
        ),
    )
    for budget in budgets:
        table.add_row(
            str(budget.id),
            budget.department,
            str(budget.headcount),
            _format_money(budget.budget),
        )
    _show(table, len(budgets))

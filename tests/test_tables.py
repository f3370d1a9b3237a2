"""Tests for result rendering (cli/tables.py).

The console is mocked; the assertions cover the pure formatting
helpers and the rows handed to Rich, not terminal output.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock, patch

from rich.table import Table

from employee_tracker.cli import tables
from employee_tracker.cli.tables import (
    _format_manager,
    _format_money,
    render_budgets,
    render_departments,
    render_employees,
    render_roles,
)
from employee_tracker.core.models import Department, DepartmentBudget, Employee, Role


def _employee(**overrides: object) -> Employee:
    defaults: dict[str, object] = {
        "id": 2,
        "first_name": "Mike",
        "last_name": "Chan",
        "title": "Salesperson",
        "department": "Sales",
        "salary": Decimal("80000.00"),
        "manager": "John Doe",
    }
    defaults.update(overrides)
    return Employee(**defaults)  # type: ignore[arg-type]


def _printed_tables(console: MagicMock) -> list[Table]:
    return [
        call.args[0]
        for call in console.print.call_args_list
        if call.args and isinstance(call.args[0], Table)
    ]


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

class TestFormatMoney:
    def test_thousands_separator(self) -> None:
        assert _format_money(Decimal("80000")) == "80,000.00"

    def test_cents(self) -> None:
        assert _format_money(Decimal("1234.5")) == "1,234.50"


class TestFormatManager:
    def test_none(self) -> None:
        assert _format_manager(None) == "None"

    def test_name(self) -> None:
        assert _format_manager("John Doe") == "John Doe"


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

class TestRenderers:
    def test_employees_table(self) -> None:
        with patch.object(tables, "console") as console:
            render_employees([_employee(), _employee(id=1, manager=None)], title="All Employees")
        (table,) = _printed_tables(console)
        assert table.title == "All Employees"
        assert [c.header for c in table.columns] == [
            "ID", "First Name", "Last Name", "Title", "Department", "Salary", "Manager",
        ]
        assert table.row_count == 2
        assert list(table.columns[6].cells) == ["John Doe", "None"]
        assert list(table.columns[5].cells) == ["80,000.00", "80,000.00"]

    def test_roles_table(self) -> None:
        role = Role(id=1, title="Lawyer", salary=Decimal("190000"), department="Legal")
        with patch.object(tables, "console") as console:
            render_roles([role])
        (table,) = _printed_tables(console)
        assert [c.header for c in table.columns] == ["ID", "Title", "Department", "Salary"]

    def test_departments_table(self) -> None:
        with patch.object(tables, "console") as console:
            render_departments([Department(id=1, name="Sales")])
        (table,) = _printed_tables(console)
        assert list(table.columns[1].cells) == ["Sales"]

    def test_budgets_table(self) -> None:
        budget = DepartmentBudget(id=1, department="Sales", headcount=2, budget=Decimal("180000"))
        with patch.object(tables, "console") as console:
            render_budgets([budget])
        (table,) = _printed_tables(console)
        assert list(table.columns[2].cells) == ["2"]
        assert list(table.columns[3].cells) == ["180,000.00"]

    def test_empty_result_prints_notice(self) -> None:
        with patch.object(tables, "console") as console:
            render_roles([])
        assert _printed_tables(console) == []
        printed = [str(call.args[0]) for call in console.print.call_args_list if call.args]
        assert any("No records found." in line for line in printed)

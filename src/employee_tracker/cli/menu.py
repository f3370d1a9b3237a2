"""Interactive menu loop: show menu → do one action → show menu again.

Each action gathers its inputs with questionary prompts, calls exactly
one :class:`~employee_tracker.core.tracker_service.TrackerService`
operation and prints the outcome.  Choices shown to the user carry row
ids as their values, so two employees with the same name can never be
confused.

Errors raised by an action are reported and the loop continues; only
cancelling the main menu itself leaves the loop (as
``KeyboardInterrupt``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from employee_tracker.cli.console import console, print_error
from employee_tracker.cli.prompts import ask_menu, ask_select, ask_text
from employee_tracker.cli.tables import (
    render_budgets,
    render_departments,
    render_employees,
    render_roles,
)
from employee_tracker.core.models import Department, Employee, Manager, Role
from employee_tracker.core.tracker_service import TrackerService
from employee_tracker.core.validation import capitalize, validate_required, validate_salary
from employee_tracker.exceptions import (
    EmployeeTrackerError,
    NothingToSelectError,
    PromptCancelledError,
)

logger = logging.getLogger(__name__)

VIEW_ALL_EMPLOYEES = "View All Employees"
VIEW_EMPLOYEES_BY_MANAGER = "View Employees by Manager"
VIEW_EMPLOYEES_BY_DEPARTMENT = "View Employees by Department"
ADD_EMPLOYEE = "Add Employee"
DELETE_EMPLOYEE = "Delete Employee"
UPDATE_EMPLOYEE_ROLE = "Update Employee Role"
UPDATE_EMPLOYEE_MANAGER = "Update Employee Manager"
VIEW_ALL_ROLES = "View All Roles"
ADD_ROLE = "Add Role"
DELETE_ROLE = "Delete Role"
VIEW_ALL_DEPARTMENTS = "View All Departments"
ADD_DEPARTMENT = "Add Department"
DELETE_DEPARTMENT = "Delete Department"
VIEW_DEPARTMENT_BUDGETS = "View Department Budgets"
QUIT = "Quit"

MENU_CHOICES: tuple[str, ...] = (
    VIEW_ALL_EMPLOYEES,
    VIEW_EMPLOYEES_BY_MANAGER,
    VIEW_EMPLOYEES_BY_DEPARTMENT,
    ADD_EMPLOYEE,
    DELETE_EMPLOYEE,
    UPDATE_EMPLOYEE_ROLE,
    UPDATE_EMPLOYEE_MANAGER,
    VIEW_ALL_ROLES,
    ADD_ROLE,
    DELETE_ROLE,
    VIEW_ALL_DEPARTMENTS,
    ADD_DEPARTMENT,
    DELETE_DEPARTMENT,
    VIEW_DEPARTMENT_BUDGETS,
    QUIT,
)

NO_MANAGER: int = 0
"""Choice value for "None" in manager prompts (row ids start at 1)."""


class MenuLoop:
    """Drives one interactive session against a :class:`TrackerService`."""

    def __init__(self, service: TrackerService) -> None:
        self._service = service
        self._actions: dict[str, Callable[[], None]] = {
            VIEW_ALL_EMPLOYEES: self.view_all_employees,
            VIEW_EMPLOYEES_BY_MANAGER: self.view_employees_by_manager,
            VIEW_EMPLOYEES_BY_DEPARTMENT: self.view_employees_by_department,
            ADD_EMPLOYEE: self.add_employee,
            DELETE_EMPLOYEE: self.delete_employee,
            UPDATE_EMPLOYEE_ROLE: self.update_employee_role,
            UPDATE_EMPLOYEE_MANAGER: self.update_employee_manager,
            VIEW_ALL_ROLES: self.view_all_roles,
            ADD_ROLE: self.add_role,
            DELETE_ROLE: self.delete_role,
            VIEW_ALL_DEPARTMENTS: self.view_all_departments,
            ADD_DEPARTMENT: self.add_department,
            DELETE_DEPARTMENT: self.delete_department,
            VIEW_DEPARTMENT_BUDGETS: self.view_department_budgets,
        }

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Loop until the user picks Quit.

        Raises
        ------
        KeyboardInterrupt
            If the user cancels the main menu (Ctrl+C / Esc).
        """
        while True:
            choice = self.prompt_main_menu()
            if choice == QUIT:
                return
            self.dispatch(choice)

    def prompt_main_menu(self) -> str:
        return ask_menu("What would you like to do?", MENU_CHOICES)

    def dispatch(self, choice: str) -> None:
        """Run the action for *choice*, reporting any tracker error."""
        action = self._actions[choice]
        logger.debug("Menu action: %s", choice)
        try:
            action()
        except PromptCancelledError:
            console.print("[yellow]Cancelled.[/yellow]")
        except EmployeeTrackerError as exc:
            print_error(exc)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def view_all_employees(self) -> None:
        render_employees(self._service.list_employees(), title="All Employees")

    def view_employees_by_manager(self) -> None:
        manager = self._select_manager(
            "Whose direct reports would you like to view?",
            self._service.list_managers(),
        )
        render_employees(
            self._service.list_employees_by_manager(manager.id),
            title=f"Employees managed by {manager.name}",
        )

    def view_employees_by_department(self) -> None:
        department = self._select_department(
            "Which department's employees would you like to view?",
            self._service.list_departments(),
        )
        render_employees(
            self._service.list_employees_by_department(department.id),
            title=f"Employees in {department.name}",
        )

    def add_employee(self) -> None:
        roles = self._service.list_roles()
        if not roles:
            raise NothingToSelectError("There are no roles to assign.", hint="Add a role first.")
        managers = self._service.list_managers()

        first_name = ask_text("What is the employee's first name?", validate=validate_required)
        last_name = ask_text("What is the employee's last name?", validate=validate_required)
        role = self._select_role("What is the employee's role?", roles)
        manager_id = ask_select(
            "Who is the employee's manager?",
            [("None", NO_MANAGER)] + [(manager.name, manager.id) for manager in managers],
        )

        self._service.add_employee(
            first_name,
            last_name,
            role.id,
            None if manager_id == NO_MANAGER else manager_id,
        )
        name = f"{capitalize(first_name.strip())} {capitalize(last_name.strip())}"
        console.print(f"[green]Added {name} to the database.[/green]")

    def delete_employee(self) -> None:
        employee = self._select_employee(
            "Which employee would you like to delete?",
            self._service.list_employees(),
        )
        if self._service.delete_employee(employee.id):
            console.print(f"[green]Deleted {employee.full_name} from the database.[/green]")
        else:
            console.print(f"[yellow]{employee.full_name} was already removed.[/yellow]")

    def update_employee_role(self) -> None:
        employee = self._select_employee(
            "Which employee's role would you like to update?",
            self._service.list_employees(),
        )
        role = self._select_role(
            "Which role do you want to assign to the selected employee?",
            self._service.list_roles(),
        )
        self._service.update_employee_role(employee.id, role.id)
        console.print(f"[green]Updated {employee.full_name}'s role to {role.title}.[/green]")

    def update_employee_manager(self) -> None:
        employees = self._service.list_employees()
        employee = self._select_employee(
            "Which employee's manager would you like to update?",
            employees,
        )
        names = {other.id: other.full_name for other in employees if other.id != employee.id}
        manager_id = ask_select(
            "Who should the employee report to?",
            [("None", NO_MANAGER)] + [(name, other_id) for other_id, name in names.items()],
        )

        if manager_id == NO_MANAGER:
            self._service.update_employee_manager(employee.id, None)
            console.print(f"[green]Removed {employee.full_name}'s manager.[/green]")
            return
        self._service.update_employee_manager(employee.id, manager_id)
        console.print(
            f"[green]Updated {employee.full_name}'s manager to {names[manager_id]}.[/green]"
        )

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def view_all_roles(self) -> None:
        render_roles(self._service.list_roles())

    def add_role(self) -> None:
        departments = self._service.list_departments()
        if not departments:
            raise NothingToSelectError(
                "There are no departments to add the role to.",
                hint="Add a department first.",
            )

        title = ask_text("What is the name of the role?", validate=validate_required)
        salary = ask_text("What is the salary of the role?", validate=validate_salary)
        department = self._select_department(
            "Which department does the role belong to?",
            departments,
        )

        self._service.add_role(title, salary, department.id)
        console.print(f"[green]Added {title.strip()} to the database.[/green]")

    def delete_role(self) -> None:
        role = self._select_role(
            "Which role would you like to delete?",
            self._service.list_roles(),
        )
        if self._service.delete_role(role.id):
            console.print(f'[green]Deleted role "{role.title}" from the database.[/green]')
        else:
            console.print(
                f'[yellow]Role "{role.title}" cannot be deleted while there are '
                "employees assigned to it.[/yellow]"
            )

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    def view_all_departments(self) -> None:
        render_departments(self._service.list_departments())

    def add_department(self) -> None:
        name = ask_text("What is the name of the department?", validate=validate_required)
        self._service.add_department(name)
        console.print(f"[green]Added {name.strip()} to the database.[/green]")

    def delete_department(self) -> None:
        department = self._select_department(
            "Which department would you like to delete?",
            self._service.list_departments(),
        )
        if self._service.delete_department(department.id):
            console.print(
                f'[green]Deleted department "{department.name}" from the database.[/green]'
            )
        else:
            console.print(
                f'[yellow]Department "{department.name}" cannot be deleted while a '
                "role is assigned to it.[/yellow]"
            )

    def view_department_budgets(self) -> None:
        render_budgets(self._service.department_budgets())

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _select_employee(message: str, employees: list[Employee]) -> Employee:
        by_id = {employee.id: employee for employee in employees}
        selected = ask_select(
            message,
            [(employee.full_name, employee.id) for employee in employees],
            empty_message="There are no employees.",
            empty_hint="Add an employee first.",
        )
        return by_id[selected]

    @staticmethod
    def _select_role(message: str, roles: list[Role]) -> Role:
        by_id = {role.id: role for role in roles}
        selected = ask_select(
            message,
            [(role.title, role.id) for role in roles],
            empty_message="There are no roles.",
            empty_hint="Add a role first.",
        )
        return by_id[selected]

    @staticmethod
    def _select_department(message: str, departments: list[Department]) -> Department:
        by_id = {department.id: department for department in departments}
        selected = ask_select(
            message,
            [(department.name, department.id) for department in departments],
            empty_message="There are no departments.",
            empty_hint="Add a department first.",
        )
        return by_id[selected]

    @staticmethod
    def _select_manager(message: str, managers: list[Manager]) -> Manager:
        by_id = {manager.id: manager for manager in managers}
        selected = ask_select(
            message,
            [(manager.name, manager.id) for manager in managers],
            empty_message="No employee has direct reports yet.",
            empty_hint="Use 'Update Employee Manager' to assign one.",
        )
        return by_id[selected]

"""Manage the employee roster."""

import click
from pydantic import ValidationError

from timesheet_extractor.cli.error_handlers import (
    DataValidationError,
    with_error_handling,
)
from timesheet_extractor.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_warning,
)
from timesheet_extractor.services.key_value_store import open_store
from timesheet_extractor.services.roster_store import RosterStore


def _roster() -> RosterStore:
    return RosterStore(open_store())


def _invalid_name(error: ValidationError) -> DataValidationError:
    return DataValidationError(
        error.errors()[0]["msg"], "Employee names must not be blank"
    )


@click.group(name="employees")
def employees():
    """Manage the employee roster used to identify timesheets."""
    pass


@employees.command(name="list")
def list_employees():
    """List all known employees."""
    with with_error_handling():
        roster = _roster().list()

        if not roster:
            click.echo(format_info("No employees yet. Add one with 'employees add NAME'"))
            return

        rows = [[employee.id, employee.name] for employee in roster]
        click.echo(format_table(["ID", "Name"], rows))
        click.echo(f"\nTotal: {len(roster)} employee(s)")


@employees.command(name="add")
@click.argument("name")
def add_employee(name: str):
    """Add an employee.

    Example:
        timesheet-cli employees add "Anna Schmidt"
    """
    with with_error_handling():
        try:
            employee = _roster().add(name)
        except ValidationError as e:
            raise _invalid_name(e) from e

        click.echo(format_success(f"Added {employee.name} (ID {employee.id})"))


@employees.command(name="rename")
@click.argument("employee_id")
@click.argument("name")
def rename_employee(employee_id: str, name: str):
    """Rename the employee with EMPLOYEE_ID."""
    with with_error_handling():
        store = _roster()
        if not any(e.id == employee_id for e in store.list()):
            click.echo(format_warning(f"No employee with ID {employee_id}"))
            return

        try:
            store.update(employee_id, name)
        except ValidationError as e:
            raise _invalid_name(e) from e

        click.echo(format_success(f"Renamed {employee_id} to {name.strip()}"))


@employees.command(name="remove")
@click.argument("employee_id")
def remove_employee(employee_id: str):
    """Remove the employee with EMPLOYEE_ID."""
    with with_error_handling():
        store = _roster()
        match = next((e for e in store.list() if e.id == employee_id), None)
        if match is None:
            click.echo(format_warning(f"No employee with ID {employee_id}"))
            return

        store.remove(employee_id)
        click.echo(format_success(f"Removed {match.name}"))

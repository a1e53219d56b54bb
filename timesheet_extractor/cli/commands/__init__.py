"""CLI commands."""

from timesheet_extractor.cli.commands.employees import employees
from timesheet_extractor.cli.commands.extract import extract
from timesheet_extractor.cli.commands.settings import api_key, wage

__all__ = ["api_key", "employees", "extract", "wage"]

"""Printable HTML export of one employee group.

Rendered with a jinja2 template (``templates/timesheet.html.j2``) with
autoescaping enabled, since entry values come from model output.
"""

import datetime as dt
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from timesheet_extractor.calculators.wage_calculator import summarize_wage
from timesheet_extractor.models.timesheet import TimesheetEntry

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "timesheet.html.j2"
UNKNOWN_EMPLOYEE_LABEL = "Unbekannt"


def format_euro(amount: float) -> str:
    """Format an amount as "€12.50"."""
    return f"€{amount:.2f}"


def _create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        keep_trailing_newline=True,
    )
    env.filters["euro"] = format_euro
    return env


_env: Optional[Environment] = None


def get_environment() -> Environment:
    global _env
    if _env is None:
        _env = _create_environment()
    return _env


def render_html(
    entries: Iterable[TimesheetEntry],
    employee: Optional[str],
    hourly_wage: float = 0.0,
    exported_at: Optional[dt.datetime] = None,
) -> str:
    """
    Render a standalone HTML document for a group of entries.

    Wage and total wage are only shown when the hourly wage is positive.

    Args:
        entries: Normalized entries of the group
        employee: Group employee, shown as "Unbekannt" when None
        hourly_wage: Hourly wage for the total
        exported_at: Export timestamp (defaults to now)

    Returns:
        HTML document as string
    """
    entries = list(entries)
    template = get_environment().get_template(TEMPLATE_NAME)
    return template.render(
        entries=entries,
        employee_label=employee or UNKNOWN_EMPLOYEE_LABEL,
        summary=summarize_wage(entries, hourly_wage),
        exported_at=exported_at or dt.datetime.now(),
    )


def write_html(
    path: Union[str, Path],
    entries: Iterable[TimesheetEntry],
    employee: Optional[str],
    hourly_wage: float = 0.0,
    exported_at: Optional[dt.datetime] = None,
) -> Path:
    """Write a group's HTML export to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        render_html(entries, employee, hourly_wage, exported_at), encoding="utf-8"
    )
    logger.info(f"Wrote HTML export to {path}")
    return path

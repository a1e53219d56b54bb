"""Output formatting utilities for CLI."""

from typing import List, Optional

import click

from timesheet_extractor.validators.validation_report import (
    ValidationIssue,
    ValidationSeverity,
)


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_issue(issue: ValidationIssue) -> str:
    """Format a validation issue with the color of its severity.

    Args:
        issue: Issue to format

    Returns:
        One line, e.g. "⚠ start_time: Time is ... ['00:00'] [image=a.jpg, row=2]"
    """
    text = f"{issue.field}: {issue.message} [{issue.value!r}]"
    if issue.context:
        text += " [" + ", ".join(f"{k}={v}" for k, v in issue.context.items()) + "]"

    if issue.severity == ValidationSeverity.ERROR:
        return format_error(text)
    if issue.severity == ValidationSeverity.WARNING:
        return format_warning(text)
    return format_info(text)


def format_group_title(
    employee: Optional[str], source_label: Optional[str] = None
) -> str:
    """Title line for one employee group."""
    title = employee or "Unknown employee"
    if source_label:
        title += f" ({source_label})"
    return click.style(title, bold=True)


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 40) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    def _line(cells: List[str]) -> str:
        padded = (
            f" {str(cell)[:width]:<{width}} " for cell, width in zip(cells, col_widths)
        )
        return "|" + "|".join(padded) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    table_lines = [separator, _line(headers), separator]
    if rows:
        table_lines.extend(_line(row) for row in rows)
        table_lines.append(separator)

    return "\n".join(table_lines)

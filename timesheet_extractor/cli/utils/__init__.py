"""CLI utility functions."""

from timesheet_extractor.cli.utils.formatters import (
    format_error,
    format_group_title,
    format_info,
    format_issue,
    format_success,
    format_table,
    format_warning,
)
from timesheet_extractor.cli.utils.progress import ProgressTracker

__all__ = [
    "format_error",
    "format_group_title",
    "format_info",
    "format_issue",
    "format_success",
    "format_table",
    "format_warning",
    "ProgressTracker",
]

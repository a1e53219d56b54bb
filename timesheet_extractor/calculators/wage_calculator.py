"""Wage calculator for normalized timesheet entries.

This module implements the wage aggregation:
- Total hours (sum of entry durations)
- Total wage (hours × hourly wage)
- Display formatting of total hours as H:MM

Totals are pure reductions over the current entries. They are recomputed
on every call and never cached, so edits are reflected immediately.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from timesheet_extractor.calculators.time_utils import parse_duration_to_hours
from timesheet_extractor.models.timesheet import TimesheetEntry


@dataclass
class WageSummary:
    """Aggregated hours and wage for a group of entries.

    Attributes:
        total_hours: Sum of all entry durations in hours
        hourly_wage: Hourly wage applied
        total_wage: total_hours × hourly_wage
        entry_count: Number of entries aggregated

    Example:
        >>> summary = WageSummary(
        ...     total_hours=3.5, hourly_wage=10.0, total_wage=35.0, entry_count=2
        ... )
        >>> summary.total_wage
        35.0
    """

    total_hours: float
    hourly_wage: float
    total_wage: float
    entry_count: int

    @property
    def total_hours_display(self) -> str:
        """Total hours formatted as H:MM."""
        return format_total_hours(self.total_hours)


def calculate_total_hours(entries: Iterable[TimesheetEntry]) -> float:
    """Sum the durations of all entries that have one.

    Args:
        entries: Normalized timesheet entries

    Returns:
        Total hours as float

    Example:
        >>> entries = [
        ...     TimesheetEntry(date="01.01.24", start_time="09:00",
        ...                    end_time="10:30", duration="1:30"),
        ...     TimesheetEntry(date="02.01.24", start_time="09:00",
        ...                    end_time="11:00", duration="2:00"),
        ... ]
        >>> calculate_total_hours(entries)
        3.5
    """
    return sum(
        (parse_duration_to_hours(entry.duration) for entry in entries if entry.duration),
        0.0,
    )


def calculate_total_wage(total_hours: float, hourly_wage: float) -> float:
    """Calculate the wage for a number of hours.

    Example:
        >>> calculate_total_wage(3.5, 10.0)
        35.0
    """
    return total_hours * hourly_wage


def summarize_wage(
    entries: Iterable[TimesheetEntry], hourly_wage: float
) -> WageSummary:
    """Aggregate hours and wage for a list of entries.

    Args:
        entries: Normalized timesheet entries
        hourly_wage: Hourly wage

    Returns:
        WageSummary computed from the current entry state
    """
    entries = list(entries)
    total_hours = calculate_total_hours(entries)
    return WageSummary(
        total_hours=total_hours,
        hourly_wage=hourly_wage,
        total_wage=calculate_total_wage(total_hours, hourly_wage),
        entry_count=len(entries),
    )


def format_total_hours(hours: float) -> str:
    """Format fractional hours as H:MM for display.

    The minutes are the fractional part times 60, rounded half up.

    Example:
        >>> format_total_hours(3.5)
        '3:30'
        >>> format_total_hours(8.25)
        '8:15'
    """
    whole_hours = math.floor(hours)
    minutes = Decimal(str((hours % 1) * 60)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return f"{whole_hours}:{int(minutes):02d}"

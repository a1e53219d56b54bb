"""Calculator modules for the timesheet extractor."""

from timesheet_extractor.calculators.duration_calculator import (
    normalize_entry,
    process_entries,
    recalculate_entry,
)
from timesheet_extractor.calculators.time_utils import (
    ParsedTime,
    calculate_duration,
    convert_time_to_minutes,
    format_duration,
    parse_duration_to_hours,
    parse_time,
)
from timesheet_extractor.calculators.wage_calculator import (
    WageSummary,
    calculate_total_hours,
    calculate_total_wage,
    format_total_hours,
    summarize_wage,
)

__all__ = [
    # duration_calculator
    "normalize_entry",
    "process_entries",
    "recalculate_entry",
    # time_utils
    "ParsedTime",
    "calculate_duration",
    "convert_time_to_minutes",
    "format_duration",
    "parse_duration_to_hours",
    "parse_time",
    # wage_calculator
    "WageSummary",
    "calculate_total_hours",
    "calculate_total_wage",
    "format_total_hours",
    "summarize_wage",
]

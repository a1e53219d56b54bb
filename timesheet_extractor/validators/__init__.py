"""Validation layer: employee matching and entry quality checks."""

from timesheet_extractor.validators.employee_matcher import (
    UNKNOWN_EMPLOYEE,
    match_employee,
)
from timesheet_extractor.validators.entry_validator import EntryValidator
from timesheet_extractor.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "EntryValidator",
    "UNKNOWN_EMPLOYEE",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "match_employee",
]

"""Aggregation of extraction results into editable employee groups."""

from timesheet_extractor.aggregators.extraction_session import (
    EmployeeData,
    ExtractionSession,
    build_groups,
)

__all__ = ["EmployeeData", "ExtractionSession", "build_groups"]

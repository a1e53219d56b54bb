"""Data models for the timesheet extractor.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- RawEntry / TimesheetEntry: Extracted and normalized time entries
- Employee: Roster entry
- BatchExtractionResponse and related wire schema models
"""

from timesheet_extractor.models.base import BaseDataModel
from timesheet_extractor.models.employee import Employee
from timesheet_extractor.models.extraction import (
    BatchExtractionResponse,
    EmployeeIdentificationResponse,
    ExtractedImage,
    ExtractionOutcome,
    ImageExtractionFailure,
    ImageExtractionResult,
    ImagePayload,
    SingleImageResponse,
)
from timesheet_extractor.models.timesheet import RawEntry, TimesheetEntry

__all__ = [
    "BaseDataModel",
    "BatchExtractionResponse",
    "Employee",
    "EmployeeIdentificationResponse",
    "ExtractedImage",
    "ExtractionOutcome",
    "ImageExtractionFailure",
    "ImageExtractionResult",
    "ImagePayload",
    "RawEntry",
    "SingleImageResponse",
    "TimesheetEntry",
]

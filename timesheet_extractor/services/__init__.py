"""Service layer: model-backed extraction, retry policy and local stores."""

from timesheet_extractor.services.extraction_errors import (
    BatchConsistencyError,
    ExtractionError,
    ExtractionFormatError,
    ExtractionServiceError,
    ImageInputError,
)
from timesheet_extractor.services.key_value_store import JsonKeyValueStore, open_store
from timesheet_extractor.services.preference_stores import CredentialStore, WageStore
from timesheet_extractor.services.retry_handler import (
    RetryExhaustedException,
    RetryHandler,
)
from timesheet_extractor.services.roster_store import RosterStore
from timesheet_extractor.services.timesheet_extraction_service import (
    TimesheetExtractionService,
)

__all__ = [
    "BatchConsistencyError",
    "CredentialStore",
    "ExtractionError",
    "ExtractionFormatError",
    "ExtractionServiceError",
    "ImageInputError",
    "JsonKeyValueStore",
    "RetryExhaustedException",
    "RetryHandler",
    "RosterStore",
    "TimesheetExtractionService",
    "WageStore",
    "open_store",
]

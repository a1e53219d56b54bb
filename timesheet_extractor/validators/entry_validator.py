"""Quality checks for extracted timesheet entries.

Validation only reports issues; it never filters or changes entries.
The extraction model is asked to use "00:00" for times it cannot read, so
that placeholder is reported as a warning.
"""

import datetime as dt
import logging
import re
from typing import Any, Dict, Iterable, Optional

from timesheet_extractor.calculators.time_utils import (
    convert_time_to_minutes,
    parse_time,
)
from timesheet_extractor.models.timesheet import RawEntry
from timesheet_extractor.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

ILLEGIBLE_TIME_PLACEHOLDER = "00:00"
_DATE_PATTERN = re.compile(r"^\d{2}\.\d{2}\.\d{2}$")


class EntryValidator:
    """Validates extracted entries and collects issues in a report.

    Checks:
    - ERROR: start or end time cannot be parsed (duration becomes 0:00)
    - WARNING: start or end time is the illegible placeholder "00:00"
    - WARNING: date is not a valid DD.MM.YY date
    - INFO: end time earlier than start time (counted as overnight shift)

    Example:
        >>> validator = EntryValidator()
        >>> report = validator.validate_entries(
        ...     [RawEntry(date="01.01.24", start_time="9", end_time="17:00")]
        ... )
        >>> report.error_count
        1
    """

    def validate_entries(
        self,
        entries: Iterable[RawEntry],
        context: Optional[Dict[str, Any]] = None,
    ) -> ValidationReport:
        """Validate a list of entries.

        Args:
            entries: Raw or normalized entries
            context: Extra context attached to every issue (e.g. source image)

        Returns:
            ValidationReport with all issues found
        """
        report = ValidationReport()

        for row, entry in enumerate(entries, start=1):
            entry_context = {**(context or {}), "row": row}
            self._validate_entry(entry, report, entry_context)

        logger.debug(f"Entry validation finished: {report.summary()}")
        return report

    def _validate_entry(
        self, entry: RawEntry, report: ValidationReport, context: Dict[str, Any]
    ) -> None:
        self._validate_date(entry.date, report, context)

        start = self._validate_time("start_time", entry.start_time, report, context)
        end = self._validate_time("end_time", entry.end_time, report, context)

        if start is not None and end is not None and end < start:
            report.add_info(
                "end_time",
                "End time is before start time, counted as overnight shift",
                entry.end_time,
                context,
            )

    def _validate_time(
        self,
        field: str,
        value: str,
        report: ValidationReport,
        context: Dict[str, Any],
    ) -> Optional[int]:
        parsed = parse_time(value)
        if parsed is None:
            report.add_error(field, "Time cannot be parsed as HH:MM", value, context)
            return None

        if value.strip() == ILLEGIBLE_TIME_PLACEHOLDER:
            report.add_warning(
                field, "Time is the placeholder for an illegible value", value, context
            )

        return convert_time_to_minutes(parsed)

    def _validate_date(
        self, value: str, report: ValidationReport, context: Dict[str, Any]
    ) -> None:
        if not _DATE_PATTERN.match(value.strip()):
            report.add_warning("date", "Date is not in DD.MM.YY format", value, context)
            return

        try:
            dt.datetime.strptime(value.strip(), "%d.%m.%y")
        except ValueError:
            report.add_warning("date", "Date is not a valid calendar date", value, context)

"""Extraction session holding the results of one processing run.

The session ties the extraction service, the roster and the entry
normalizer together and keeps the editable result groups:

- One group (``EmployeeData``) per image in batch mode
- Optionally merged by employee (``None`` merges with ``None``)
- Entries carry their computed duration and the group's employee tag
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from timesheet_extractor.calculators.duration_calculator import (
    process_entries,
    recalculate_entry,
)
from timesheet_extractor.calculators.wage_calculator import WageSummary, summarize_wage
from timesheet_extractor.models.extraction import (
    ImageExtractionFailure,
    ImageExtractionResult,
    ImagePayload,
)
from timesheet_extractor.models.timesheet import TimesheetEntry
from timesheet_extractor.services.roster_store import RosterStore
from timesheet_extractor.services.timesheet_extraction_service import (
    TimesheetExtractionService,
)
from timesheet_extractor.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    log_function_call,
)

logger = logging.getLogger(__name__)


@dataclass
class EmployeeData:
    """A group of entries belonging to one employee.

    Attributes:
        employee: Matched roster name, or None if unknown
        entries: Normalized entries in extraction order
        source_label: Image file name(s) the entries came from

    Example:
        >>> group = EmployeeData(employee="Anna", entries=[], source_label="a.jpg")
        >>> group.employee
        'Anna'
    """

    employee: Optional[str]
    entries: List[TimesheetEntry] = field(default_factory=list)
    source_label: Optional[str] = None


def _tag_entries(
    entries: Sequence[TimesheetEntry], employee: Optional[str]
) -> List[TimesheetEntry]:
    return [entry.model_copy(update={"employee": employee}) for entry in entries]


def build_groups(
    results: Sequence[ImageExtractionResult], merge_by_employee: bool = False
) -> List[EmployeeData]:
    """Turn extraction results into result groups.

    Args:
        results: One result per image, in input order
        merge_by_employee: Merge groups of the same employee

    Returns:
        Groups in order of first appearance
    """
    groups: List[EmployeeData] = []

    for result in results:
        entries = _tag_entries(
            process_entries(result.entries), result.detected_employee
        )

        if merge_by_employee:
            existing = next(
                (g for g in groups if g.employee == result.detected_employee), None
            )
            if existing is not None:
                existing.entries.extend(entries)
                if result.source_label:
                    existing.source_label = ", ".join(
                        filter(None, [existing.source_label, result.source_label])
                    )
                continue

        groups.append(
            EmployeeData(
                employee=result.detected_employee,
                entries=entries,
                source_label=result.source_label,
            )
        )

    return groups


class ExtractionSession:
    """
    Holds the editable result of one extraction run.

    Example:
        >>> session = ExtractionSession(service, roster_store)
        >>> groups = session.process_images(images)
        >>> session.update_entry(0, 0, end_time="18:00")
        >>> session.summarize(0, hourly_wage=15.0).total_wage
        135.0
    """

    def __init__(
        self,
        extraction_service: TimesheetExtractionService,
        roster_store: RosterStore,
    ):
        self.extraction_service = extraction_service
        self.roster_store = roster_store
        self.groups: List[EmployeeData] = []
        self.failures: List[ImageExtractionFailure] = []

    @log_function_call(include_args=True)
    def process_images(
        self,
        images: Sequence[ImagePayload],
        per_image: bool = False,
        merge_by_employee: bool = False,
    ) -> List[EmployeeData]:
        """
        Run an extraction and replace the session groups with its result.

        The groups are cleared before the call, so a failed batch leaves
        the session empty.

        Args:
            images: Timesheet images in display order
            per_image: Use per-image mode instead of one batch request
            merge_by_employee: Merge groups of the same employee

        Returns:
            The new session groups

        Raises:
            ExtractionError: If the batch extraction fails
        """
        self.groups = []
        self.failures = []

        with LogContext(correlation_id=generate_correlation_id()):
            roster = self.roster_store.list()
            logger.info(
                f"Processing {len(images)} images with {len(roster)} known employees"
            )

            if per_image:
                outcome = self.extraction_service.extract_each(images, roster)
                results = outcome.results
                self.failures = list(outcome.failures)
            else:
                results = self.extraction_service.extract_batch(images, roster)

            self.groups = build_groups(results, merge_by_employee=merge_by_employee)

            logger.info(
                f"Extracted {self.total_entries} entries "
                f"in {len(self.groups)} groups"
            )

        return self.groups

    @property
    def total_entries(self) -> int:
        return sum(len(group.entries) for group in self.groups)

    def update_entry(
        self,
        group_index: int,
        entry_index: int,
        date: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> TimesheetEntry:
        """
        Edit one entry and recompute its duration.

        Raises:
            IndexError: If the group or entry does not exist
        """
        group = self.groups[group_index]
        updated = recalculate_entry(
            group.entries[entry_index],
            date=date,
            start_time=start_time,
            end_time=end_time,
        )
        group.entries[entry_index] = updated
        return updated

    def rename_employee(self, group_index: int, name: Optional[str]) -> None:
        """
        Assign an employee name to a group.

        A blank name clears the assignment.
        """
        group = self.groups[group_index]
        employee = name.strip() if name and name.strip() else None
        group.employee = employee
        group.entries = _tag_entries(group.entries, employee)

    def summarize(self, group_index: int, hourly_wage: float) -> WageSummary:
        """Hours and wage for one group, computed from its current entries."""
        return summarize_wage(self.groups[group_index].entries, hourly_wage)

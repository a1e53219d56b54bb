"""Entry normalization: attach computed durations to extracted entries.

Raw entries coming back from the extraction model carry only a date, a start
and an end time. This module turns them into canonical ``TimesheetEntry``
objects whose ``duration`` is always derived from start and end.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from timesheet_extractor.calculators.time_utils import calculate_duration
from timesheet_extractor.models.timesheet import RawEntry, TimesheetEntry

EntryLike = Union[RawEntry, Mapping[str, Any]]


def normalize_entry(entry: EntryLike) -> TimesheetEntry:
    """Return the canonical form of a single entry.

    All fields except ``duration`` are preserved unchanged. Applying this
    to an already normalized entry yields the same duration again.

    Args:
        entry: Raw or normalized entry, or a mapping with the same keys

    Returns:
        TimesheetEntry with ``duration`` set
    """
    if not isinstance(entry, RawEntry):
        entry = TimesheetEntry.model_validate(entry)

    duration = calculate_duration(entry.start_time, entry.end_time)

    if isinstance(entry, TimesheetEntry):
        return entry.model_copy(update={"duration": duration})
    return TimesheetEntry(**entry.model_dump(), duration=duration)


def process_entries(entries: Iterable[EntryLike]) -> List[TimesheetEntry]:
    """Attach a computed duration to every entry.

    Pure and order-preserving. Nothing is filtered: rows that look empty
    are the extraction model's concern, not this function's.

    Args:
        entries: Raw entries as returned by the extraction model

    Returns:
        Canonical entries in the same order

    Example:
        >>> raw = [RawEntry(date="01.01.24", start_time="09:00", end_time="17:30")]
        >>> process_entries(raw)[0].duration
        '8:30'
    """
    return [normalize_entry(entry) for entry in entries]


def recalculate_entry(
    entry: TimesheetEntry,
    *,
    date: Optional[str] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
) -> TimesheetEntry:
    """Apply a user edit to one entry and recompute its duration.

    Fields passed as None keep their current value. The original entry is
    not modified.

    Args:
        entry: Entry being edited
        date: New date, if changed
        start_time: New start time, if changed
        end_time: New end time, if changed

    Returns:
        New TimesheetEntry with the edit applied and duration recomputed

    Example:
        >>> entry = process_entries(
        ...     [RawEntry(date="01.01.24", start_time="09:00", end_time="17:00")]
        ... )[0]
        >>> recalculate_entry(entry, end_time="18:15").duration
        '9:15'
    """
    updates = {
        "date": date,
        "start_time": start_time,
        "end_time": end_time,
    }
    data = entry.model_dump()
    data.update({key: value for key, value in updates.items() if value is not None})
    return normalize_entry(TimesheetEntry.model_validate(data))

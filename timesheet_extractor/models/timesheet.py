"""Timesheet entry models.

A ``RawEntry`` is one row as read from a timesheet image (no duration).
A ``TimesheetEntry`` is the canonical form after duration normalization.
"""

from typing import Optional

from pydantic import Field

from timesheet_extractor.models.base import BaseDataModel


class RawEntry(BaseDataModel):
    """A single time entry as returned by the extraction model.

    Attributes:
        date: Work date, canonical form DD.MM.YY
        start_time: Shift start, canonical form HH:MM (24-hour)
        end_time: Shift end, canonical form HH:MM (24-hour)

    Example:
        >>> entry = RawEntry.model_validate(
        ...     {"date": "01.01.24", "startTime": "09:00", "endTime": "17:00"}
        ... )
        >>> entry.start_time
        '09:00'
    """

    date: str = Field(..., description="Work date in DD.MM.YY format")
    start_time: str = Field(
        ..., alias="startTime", description="Start time in HH:MM (24-hour) format"
    )
    end_time: str = Field(
        ..., alias="endTime", description="End time in HH:MM (24-hour) format"
    )


class TimesheetEntry(RawEntry):
    """A canonical timesheet entry.

    ``duration`` is derived from ``start_time``/``end_time`` and is only
    ever set by the entry normalizer, never edited on its own.

    Attributes:
        duration: Shift length as H:MM, None until normalized
        employee: Employee the entry belongs to, if known
    """

    duration: Optional[str] = Field(None, description="Derived duration as H:MM")
    employee: Optional[str] = Field(None, description="Employee name tag")

"""CSV export of one employee group.

Layout:
    Datum,Startzeit,Endzeit,Dauer,Mitarbeiter
    "01.01.24","09:00","17:30","8:30","Anna Schmidt"

The header row is not quoted, every data field is. Rows are separated by
a single newline and there is no trailing newline.
"""

import csv
import datetime as dt
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from timesheet_extractor.models.timesheet import TimesheetEntry

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Datum", "Startzeit", "Endzeit", "Dauer", "Mitarbeiter"]
UNKNOWN_EMPLOYEE_FILENAME = "unbekannt"


def entries_to_dataframe(
    entries: Iterable[TimesheetEntry], employee: Optional[str]
) -> pd.DataFrame:
    """Build the export table for a group of entries.

    Missing durations and an unknown employee become empty strings.
    """
    rows = [
        {
            "Datum": entry.date,
            "Startzeit": entry.start_time,
            "Endzeit": entry.end_time,
            "Dauer": entry.duration or "",
            "Mitarbeiter": employee or "",
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def render_csv(entries: Iterable[TimesheetEntry], employee: Optional[str]) -> str:
    """Render a group of entries as CSV text."""
    df = entries_to_dataframe(entries, employee)

    header = ",".join(CSV_COLUMNS)
    if df.empty:
        return header

    body = df.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return header + "\n" + body.rstrip("\n")


def export_filename(
    employee: Optional[str],
    extension: str = "csv",
    today: Optional[dt.date] = None,
) -> str:
    """File name for an export.

    Example:
        >>> export_filename("Anna", today=dt.date(2024, 3, 1))
        'arbeitszeit-Anna-2024-03-01.csv'
        >>> export_filename(None, "html", dt.date(2024, 3, 1))
        'arbeitszeit-unbekannt-2024-03-01.html'
    """
    today = today or dt.date.today()
    name = employee or UNKNOWN_EMPLOYEE_FILENAME
    return f"arbeitszeit-{name}-{today.isoformat()}.{extension}"


def write_csv(
    path: Union[str, Path],
    entries: Iterable[TimesheetEntry],
    employee: Optional[str],
) -> Path:
    """Write a group's CSV export to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_csv(entries, employee), encoding="utf-8")
    logger.info(f"Wrote CSV export to {path}")
    return path

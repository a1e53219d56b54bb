"""Writers for exporting employee groups as CSV and printable HTML."""

from timesheet_extractor.writers.csv_writer import (
    CSV_COLUMNS,
    export_filename,
    render_csv,
    write_csv,
)
from timesheet_extractor.writers.html_writer import render_html, write_html

__all__ = [
    "CSV_COLUMNS",
    "export_filename",
    "render_csv",
    "render_html",
    "write_csv",
    "write_html",
]

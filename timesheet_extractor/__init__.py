"""Timesheet extraction from photographed or scanned timesheet images.

Structured time entries are extracted by a vision-capable language model,
normalized (durations, employee names) and aggregated into wages.
"""

__version__ = "1.0.0"

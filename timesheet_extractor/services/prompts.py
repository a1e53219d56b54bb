"""Prompt text for the timesheet extraction requests.

The batch prompt is the primary contract with the model. The single-image
and identification prompts are used by the per-image mode.
"""

from typing import Sequence

from timesheet_extractor.models.employee import Employee

NO_ROSTER_MARKER = "no employee roster available"

_BATCH_PROMPT = """You are a precise OCR system. Analyze ALL {image_count} timesheet images and extract the data.

Available employees: {roster}

For EACH image:
1. Identify the employee (name, signature, employee ID)
   - Return the EXACT name from the employee list if there is one
   - Return null if the employee cannot be identified
{elimination_hint}2. Extract ONLY filled-in time entries (ignore empty rows)
3. Convert dates to DD.MM.YY format
4. Convert times to HH:MM format (24-hour clock)
5. Use "00:00" as a placeholder for illegible times

Return the results for all {image_count} images in the SAME order as they were presented."""

_ELIMINATION_HINT = (
    "   - IMPORTANT: If you can only clearly identify {identified} of "
    "{image_count} employees, use elimination for the last image\n"
)

_SINGLE_IMAGE_PROMPT = """You are a precise OCR system. Analyze this timesheet image and extract ONLY the filled-in rows.

Return a JSON object with exactly this structure:
{
  "entries": [
    {
      "date": "DD.MM.YY",
      "startTime": "HH:MM",
      "endTime": "HH:MM"
    }
  ]
}

Rules:
1. Extract only rows with actual time entries (ignore empty rows)
2. Convert all dates to DD.MM.YY format
3. Convert all times to HH:MM format (24-hour clock)
4. Return ONLY valid JSON, no explanations
5. If you cannot read a time clearly, use "00:00" as a placeholder"""

_IDENTIFICATION_PROMPT = """Look at this timesheet image and identify which employee it belongs to.

Available employees: {roster}

Return a JSON object with exactly this structure:
{{
  "employee": "exact_employee_name_from_list_or_unknown"
}}

Rules:
1. Look for names, signatures, employee IDs or other identifying text
2. Return the EXACT name from the employee list if you find a match
3. Return "unknown" if you cannot identify the employee or are unsure
4. Return ONLY valid JSON, no explanations"""


def format_roster(roster: Sequence[Employee]) -> str:
    """Render the roster as a comma-separated name list.

    Example:
        >>> format_roster([])
        'no employee roster available'
    """
    if not roster:
        return NO_ROSTER_MARKER
    return ", ".join(employee.name for employee in roster)


def needs_elimination_hint(roster_size: int, image_count: int) -> bool:
    """Whether the model may resolve the last image by exclusion."""
    return roster_size == image_count and roster_size > 2


def build_batch_prompt(roster: Sequence[Employee], image_count: int) -> str:
    """Build the instruction text for a batch extraction request.

    Args:
        roster: Known employees, may be empty
        image_count: Number of images attached to the request

    Returns:
        Prompt text
    """
    elimination_hint = ""
    if needs_elimination_hint(len(roster), image_count):
        elimination_hint = _ELIMINATION_HINT.format(
            identified=image_count - 1, image_count=image_count
        )

    return _BATCH_PROMPT.format(
        image_count=image_count,
        roster=format_roster(roster),
        elimination_hint=elimination_hint,
    )


def build_single_image_prompt() -> str:
    return _SINGLE_IMAGE_PROMPT


def build_identification_prompt(roster: Sequence[Employee]) -> str:
    return _IDENTIFICATION_PROMPT.format(roster=format_roster(roster))

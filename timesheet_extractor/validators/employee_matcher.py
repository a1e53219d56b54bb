"""Employee matching: reconcile model-reported names with the roster.

The extraction model is untrusted. A reported name is only accepted if it
equals a roster name ignoring case; the roster's spelling is returned.
There is no fuzzy matching: a near miss yields no employee.
"""

import logging
from typing import Iterable, Optional, Union

from timesheet_extractor.models.employee import Employee

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYEE = "unknown"

RosterMember = Union[Employee, str]


def _roster_name(member: RosterMember) -> str:
    return member.name if isinstance(member, Employee) else member


def match_employee(
    reported: Optional[str], roster: Iterable[RosterMember]
) -> Optional[str]:
    """Match a reported employee name against the roster.

    Args:
        reported: Name reported by the model, None, or "unknown"
        roster: Roster employees (or plain names)

    Returns:
        The roster's canonical name on a case-insensitive exact match,
        otherwise None

    Example:
        >>> match_employee("jane doe", ["Jane Doe"])
        'Jane Doe'
        >>> match_employee("Jane D", ["Jane Doe"]) is None
        True
        >>> match_employee("UNKNOWN", ["Jane Doe"]) is None
        True
    """
    if reported is None:
        return None

    reported_key = reported.lower()
    if reported_key == UNKNOWN_EMPLOYEE:
        return None

    for member in roster:
        name = _roster_name(member)
        if name.lower() == reported_key:
            return name

    logger.debug(f"Reported employee {reported!r} does not match the roster")
    return None

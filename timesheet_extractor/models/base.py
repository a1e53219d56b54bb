"""Base model for all data models of the timesheet extractor.

This module provides a base Pydantic model with common configuration
shared by the domain entities and the model-service wire schema.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking (no coercion of numbers into strings)
    - Serialization to/from dictionaries and JSON
    - Rejection of unknown fields, so unexpected model output fails loudly
    - Field aliases (camelCase on the wire, snake_case in Python)

    Example:
        >>> class Shift(BaseDataModel):
        ...     label: str
        ...     minutes: int
        >>> shift = Shift(label="early", minutes=480)
        >>> shift.model_dump()
        {'label': 'early', 'minutes': 480}
    """

    model_config = ConfigDict(
        # Validate on assignment so in-place edits are checked too
        validate_assignment=True,
        strict=False,
        extra="forbid",
        populate_by_name=True,
        frozen=False,
    )

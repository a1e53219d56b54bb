"""Employee roster model."""

from pydantic import Field, field_validator

from timesheet_extractor.models.base import BaseDataModel


class Employee(BaseDataModel):
    """An employee of the roster.

    Attributes:
        id: Opaque unique identifier assigned by the roster store
        name: Display name, trimmed and never empty

    Example:
        >>> Employee(id="1700000000000", name="  Jane Doe ").name
        'Jane Doe'
    """

    id: str = Field(..., min_length=1, description="Unique employee identifier")
    name: str = Field(..., min_length=1, description="Employee name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Trim the name and reject empty or whitespace-only names.

        Raises:
            ValueError: If the name is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError("Employee name cannot be empty or whitespace")
        return v.strip()

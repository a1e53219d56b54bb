"""Exceptions raised by the timesheet extraction service.

All of them derive from ``ExtractionError`` so callers can handle every
extraction failure in one place. The CLI maps each subclass to its own
exit code and recovery hint.
"""

from typing import Optional


class ExtractionError(Exception):
    """Base class for extraction failures."""

    pass


class ImageInputError(ExtractionError):
    """Raised before any request when the submitted images are unusable."""

    pass


class ExtractionFormatError(ExtractionError):
    """Raised when the model answer does not match the expected structure."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "The images could not be analyzed correctly. "
            "Please use sharper or better-lit images."
        )


class BatchConsistencyError(ExtractionError):
    """Raised when the number of results differs from the number of images."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected results for {expected} images, but received {received}."
        )


class ExtractionServiceError(ExtractionError):
    """Raised for any other failure of the model service call."""

    pass

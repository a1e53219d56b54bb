"""Models for image extraction requests and responses.

Two groups of types live here:

- The wire schema sent to the model service as a structured-output contract
  (``BatchExtractionResponse`` and friends). Its JSON schema is generated from
  the pydantic models, and the model's answer is validated against the same
  models.
- Plain result containers handed from the extraction service to callers
  (``ImagePayload``, ``ImageExtractionResult``, ``ExtractionOutcome``).
"""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field

from timesheet_extractor.models.base import BaseDataModel
from timesheet_extractor.models.timesheet import RawEntry

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class ExtractedImage(BaseDataModel):
    """Extraction result for one image as reported by the model."""

    employee: Optional[str] = Field(
        ...,
        description="Exact employee name from the roster, or null if not identifiable",
    )
    entries: List[RawEntry] = Field(
        ..., description="Filled time entries in the order they appear"
    )


class BatchExtractionResponse(BaseDataModel):
    """Analysis results for multiple timesheet images, in input order."""

    images: List[ExtractedImage]


class SingleImageResponse(BaseDataModel):
    """Time entries of a single timesheet image."""

    entries: List[RawEntry]


class EmployeeIdentificationResponse(BaseDataModel):
    """Employee identified on a single timesheet image."""

    employee: str = Field(
        ..., description='Exact employee name from the roster, or "unknown"'
    )


@dataclass
class ImagePayload:
    """A timesheet image to submit for extraction.

    Attributes:
        name: File name, used in error messages and as the source label
        data: Raw image bytes
        mime_type: Image content type for the data URL
    """

    name: str
    data: bytes
    mime_type: str = DEFAULT_IMAGE_MIME_TYPE

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImagePayload":
        """Read an image file from disk.

        The content type is guessed from the file extension.
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            data=path.read_bytes(),
            mime_type=mime_type or DEFAULT_IMAGE_MIME_TYPE,
        )


@dataclass
class ImageExtractionResult:
    """Extraction result for one submitted image.

    Attributes:
        detected_employee: Roster name matched for the image, or None
        entries: Raw entries without duration
        source_label: Name of the originating image
    """

    detected_employee: Optional[str]
    entries: List[RawEntry]
    source_label: Optional[str] = None


@dataclass
class ImageExtractionFailure:
    """An image that could not be processed in per-image mode."""

    source_label: str
    message: str


@dataclass
class ExtractionOutcome:
    """Results of a per-image extraction run.

    Successful images are listed in ``results`` and failed images in
    ``failures``, both in input order.
    """

    results: List[ImageExtractionResult] = field(default_factory=list)
    failures: List[ImageExtractionFailure] = field(default_factory=list)

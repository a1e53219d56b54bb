"""
Timesheet extraction service backed by an OpenAI vision model.

This module sends timesheet photos to the model service and turns the
structured answer into ``ImageExtractionResult`` objects.

Two modes are supported:
- Batch mode (``extract_batch``): all images in one request with a strict
  JSON schema. The result count must match the image count.
- Per-image mode (``extract_each``): one request per image plus a separate
  employee identification request, both with strict JSON schemas. A failing image does not stop the run.
"""

import base64
import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from openai import ContentFilterFinishReasonError, LengthFinishReasonError
from pydantic import BaseModel, ValidationError

from timesheet_extractor.models.employee import Employee
from timesheet_extractor.models.extraction import (
    BatchExtractionResponse,
    EmployeeIdentificationResponse,
    ExtractionOutcome,
    ImageExtractionFailure,
    ImageExtractionResult,
    ImagePayload,
    SingleImageResponse,
)
from timesheet_extractor.services.extraction_errors import (
    BatchConsistencyError,
    ExtractionError,
    ExtractionFormatError,
    ExtractionServiceError,
    ImageInputError,
)
from timesheet_extractor.services.prompts import (
    build_batch_prompt,
    build_identification_prompt,
    build_single_image_prompt,
)
from timesheet_extractor.services.retry_handler import RetryHandler
from timesheet_extractor.validators.employee_matcher import match_employee

logger = logging.getLogger(__name__)

DEFAULT_BATCH_MODEL = "gpt-5"
DEFAULT_IMAGE_MODEL = "gpt-4o"

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def encode_image(image: ImagePayload) -> str:
    """Encode an image as a base64 data URL."""
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{encoded}"


def validate_images(images: Sequence[ImagePayload]) -> None:
    """Reject unusable input before any request is made.

    Raises:
        ImageInputError: If no images are given or an image is empty
    """
    if not images:
        raise ImageInputError("No images provided")

    for image in images:
        if not image.data:
            raise ImageInputError(f"Image '{image.name}' is empty")


class TimesheetExtractionService:
    """
    Extracts timesheet entries and employee names from images.

    Example:
        >>> from openai import OpenAI
        >>> service = TimesheetExtractionService(OpenAI())
        >>> results = service.extract_batch(images, roster)
        >>> results[0].detected_employee
        'Anna Schmidt'
    """

    def __init__(
        self,
        client: Any,
        model: str = DEFAULT_BATCH_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        image_detail: str = "high",
        retry_handler: Optional[RetryHandler] = None,
    ):
        """
        Initialize the extraction service.

        Args:
            client: OpenAI client (only ``chat.completions.parse`` is used)
            model: Model for batch extraction
            image_model: Model for per-image extraction and identification
            image_detail: Vision detail level (low, high or auto)
            retry_handler: Retry policy for employee identification
        """
        self.client = client
        self.model = model
        self.image_model = image_model
        self.image_detail = image_detail
        self.retry_handler = retry_handler or RetryHandler(
            max_attempts=3, base_delay=1.0
        )

    def extract_batch(
        self, images: Sequence[ImagePayload], roster: Sequence[Employee]
    ) -> List[ImageExtractionResult]:
        """
        Extract entries and employees for all images in one request.

        Args:
            images: Timesheet images in display order
            roster: Known employees, may be empty

        Returns:
            One result per image, in input order

        Raises:
            ImageInputError: No images or an empty image
            ExtractionFormatError: Answer does not match the schema
            BatchConsistencyError: Result count differs from image count
            ExtractionServiceError: Any other failure of the call
        """
        validate_images(images)

        logger.info(
            f"Extracting {len(images)} images in batch mode "
            f"(model={self.model}, roster size={len(roster)})"
        )

        try:
            analysis = self._parse(
                BatchExtractionResponse,
                model=self.model,
                messages=[
                    self._user_message(
                        build_batch_prompt(roster, len(images)), images
                    )
                ],
            )
        except ExtractionError:
            raise
        except Exception as e:
            logger.error(f"Batch extraction failed: {type(e).__name__}: {e}")
            raise ExtractionServiceError(f"Failed to process images: {e}") from e

        if len(analysis.images) != len(images):
            logger.warning(
                f"Model returned {len(analysis.images)} results "
                f"for {len(images)} images"
            )
            raise BatchConsistencyError(len(images), len(analysis.images))

        results = [
            ImageExtractionResult(
                detected_employee=match_employee(extracted.employee, roster),
                entries=list(extracted.entries),
                source_label=image.name,
            )
            for image, extracted in zip(images, analysis.images)
        ]

        logger.info(
            f"Batch extraction returned "
            f"{sum(len(r.entries) for r in results)} entries"
        )
        return results

    def extract_each(
        self, images: Sequence[ImagePayload], roster: Sequence[Employee]
    ) -> ExtractionOutcome:
        """
        Extract images one by one, collecting per-image failures.

        Args:
            images: Timesheet images in display order
            roster: Known employees, may be empty

        Returns:
            ExtractionOutcome with results and failures in input order

        Raises:
            ImageInputError: No images or an empty image
        """
        validate_images(images)

        outcome = ExtractionOutcome()
        for image in images:
            try:
                outcome.results.append(self.extract_single(image, roster))
            except ExtractionError as e:
                logger.warning(f"Skipping image '{image.name}': {e}")
                outcome.failures.append(
                    ImageExtractionFailure(source_label=image.name, message=str(e))
                )

        logger.info(
            f"Per-image extraction finished: {len(outcome.results)} succeeded, "
            f"{len(outcome.failures)} failed"
        )
        return outcome

    def extract_single(
        self, image: ImagePayload, roster: Sequence[Employee]
    ) -> ImageExtractionResult:
        """Extract entries of one image and identify its employee."""
        try:
            extracted = self._parse(
                SingleImageResponse,
                model=self.image_model,
                messages=[self._user_message(build_single_image_prompt(), [image])],
                max_tokens=1000,
            )
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionServiceError(f"Failed to process image: {e}") from e

        return ImageExtractionResult(
            detected_employee=self.identify_employee(image, roster),
            entries=list(extracted.entries),
            source_label=image.name,
        )

    def identify_employee(
        self, image: ImagePayload, roster: Sequence[Employee]
    ) -> Optional[str]:
        """
        Identify the employee a timesheet belongs to.

        Best effort: failures are retried and end in None, never an error.

        Returns:
            Roster name, or None if the employee was not identified
        """
        if not roster:
            return None

        return self.retry_handler.execute_with_fallback(
            self._identify_once, None, image, roster
        )

    def _identify_once(
        self, image: ImagePayload, roster: Sequence[Employee]
    ) -> Optional[str]:
        identification = self._parse(
            EmployeeIdentificationResponse,
            model=self.image_model,
            messages=[
                self._user_message(build_identification_prompt(roster), [image])
            ],
            max_tokens=300,
        )
        return match_employee(identification.employee, roster)

    def _user_message(
        self, prompt: str, images: Sequence[ImagePayload]
    ) -> Dict[str, Any]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        content.extend(
            {
                "type": "image_url",
                "image_url": {"url": encode_image(image), "detail": self.image_detail},
            }
            for image in images
        )
        return {"role": "user", "content": content}

    def _parse(
        self, response_format: Type[ResponseModel], **request: Any
    ) -> ResponseModel:
        """Request a structured answer and return it parsed as ``response_format``.

        The SDK sends the model's strict JSON schema and validates the answer
        against it.

        Raises:
            ExtractionFormatError: Missing, refused, truncated or malformed answer
        """
        try:
            completion = self.client.chat.completions.parse(
                response_format=response_format, **request
            )
        except ValidationError as e:
            logger.warning(
                f"Model answer does not match {response_format.__name__}: "
                f"{e.error_count()} validation errors"
            )
            raise ExtractionFormatError() from e
        except (LengthFinishReasonError, ContentFilterFinishReasonError) as e:
            logger.warning(f"Model answer was cut off: {type(e).__name__}")
            raise ExtractionFormatError() from e

        if not completion.choices:
            raise ExtractionFormatError()

        message = completion.choices[0].message
        if message.refusal:
            logger.warning(f"Model refused the request: {message.refusal}")
            raise ExtractionFormatError()

        if message.parsed is None:
            raise ExtractionFormatError()

        return message.parsed

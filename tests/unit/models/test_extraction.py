"""Tests for extraction wire schema and result containers."""

import pytest
from pydantic import ValidationError

from timesheet_extractor.models.extraction import (
    BatchExtractionResponse,
    ExtractionOutcome,
    ImagePayload,
)


class TestBatchExtractionResponse:
    """Tests for the batch response schema."""

    def test_parse_valid_answer(self):
        """Test parsing a well-formed answer."""
        answer = BatchExtractionResponse.model_validate_json(
            '{"images": [{"employee": null, "entries": '
            '[{"date": "01.01.24", "startTime": "09:00", "endTime": "10:00"}]}]}'
        )

        assert answer.images[0].employee is None
        assert answer.images[0].entries[0].end_time == "10:00"

    def test_employee_key_required(self):
        """Test that the employee key must be present even when null."""
        with pytest.raises(ValidationError):
            BatchExtractionResponse.model_validate_json('{"images": [{"entries": []}]}')

    def test_wrong_type_rejected(self):
        """Test that a mistyped field is rejected."""
        with pytest.raises(ValidationError):
            BatchExtractionResponse.model_validate_json('{"images": {"employee": null}}')

    def test_schema_is_strict_compatible(self):
        """Test that every object in the schema forbids extra keys and requires all."""
        schema = BatchExtractionResponse.model_json_schema()
        objects = [schema] + list(schema.get("$defs", {}).values())

        for obj in objects:
            assert obj["additionalProperties"] is False
            assert set(obj["required"]) == set(obj["properties"])


class TestImagePayload:
    """Tests for ImagePayload."""

    def test_from_path_guesses_mime_type(self, tmp_path):
        """Test reading a PNG file."""
        path = tmp_path / "scan.png"
        path.write_bytes(b"\x89PNG")

        image = ImagePayload.from_path(path)

        assert image.name == "scan.png"
        assert image.data == b"\x89PNG"
        assert image.mime_type == "image/png"

    def test_from_path_defaults_to_jpeg(self, tmp_path):
        """Test the fallback content type for unknown extensions."""
        path = tmp_path / "scan.unknownext"
        path.write_bytes(b"data")

        assert ImagePayload.from_path(path).mime_type == "image/jpeg"

    def test_from_path_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            ImagePayload.from_path(tmp_path / "missing.jpg")


def test_outcome_defaults():
    """Test that a new outcome is empty."""
    outcome = ExtractionOutcome()

    assert outcome.results == []
    assert outcome.failures == []

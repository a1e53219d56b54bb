"""Tests for prompt construction."""

from timesheet_extractor.models.employee import Employee
from timesheet_extractor.services.prompts import (
    NO_ROSTER_MARKER,
    build_batch_prompt,
    build_identification_prompt,
    build_single_image_prompt,
    format_roster,
    needs_elimination_hint,
)


def _roster(*names):
    return [Employee(id=str(i), name=name) for i, name in enumerate(names, 1)]


class TestFormatRoster:
    """Tests for roster serialization."""

    def test_comma_separated(self):
        """Test that names are joined with commas."""
        assert format_roster(_roster("Anna", "Ben")) == "Anna, Ben"

    def test_empty_roster_marker(self):
        """Test the explicit marker for an empty roster."""
        assert format_roster([]) == NO_ROSTER_MARKER


class TestEliminationHint:
    """Tests for when the exclusion instruction is added."""

    def test_requires_equal_counts_above_two(self):
        """Test the roster size == image count > 2 rule."""
        assert needs_elimination_hint(3, 3)
        assert not needs_elimination_hint(2, 2)
        assert not needs_elimination_hint(3, 4)
        assert not needs_elimination_hint(0, 0)

    def test_hint_in_batch_prompt(self):
        """Test that the hint names the counts."""
        prompt = build_batch_prompt(_roster("A", "B", "C"), 3)

        assert "elimination" in prompt
        assert "2 of 3" in prompt

    def test_no_hint_for_two_images(self):
        """Test that two images never get the hint."""
        assert "elimination" not in build_batch_prompt(_roster("A", "B"), 2)


class TestBatchPrompt:
    """Tests for the batch prompt content."""

    def test_contains_instructions(self):
        """Test that the required instructions are present."""
        prompt = build_batch_prompt(_roster("Anna Schmidt"), 2)

        assert "ALL 2 timesheet images" in prompt
        assert "Available employees: Anna Schmidt" in prompt
        assert "DD.MM.YY" in prompt
        assert "HH:MM" in prompt
        assert '"00:00"' in prompt
        assert "SAME order" in prompt

    def test_empty_roster(self):
        """Test that the marker is used without a roster."""
        assert NO_ROSTER_MARKER in build_batch_prompt([], 1)


class TestPerImagePrompts:
    """Tests for the per-image prompts."""

    def test_single_image_prompt_describes_json(self):
        """Test that the JSON structure is spelled out."""
        prompt = build_single_image_prompt()

        assert '"entries"' in prompt
        assert '"startTime"' in prompt

    def test_identification_prompt(self):
        """Test that the roster and unknown answer are described."""
        prompt = build_identification_prompt(_roster("Anna", "Ben"))

        assert "Available employees: Anna, Ben" in prompt
        assert '"unknown"' in prompt
        assert '"employee"' in prompt

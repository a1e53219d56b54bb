"""
Integration test fixtures and configuration.

Offline pipeline tests use a scripted client. Tests against the real
OpenAI API are skipped unless an API key and a sample image are set.
"""

import os
from pathlib import Path

import pytest

from timesheet_extractor.models import ImagePayload
from timesheet_extractor.services.key_value_store import JsonKeyValueStore
from timesheet_extractor.services.roster_store import RosterStore


@pytest.fixture
def roster_store(tmp_path) -> RosterStore:
    """Roster in a temporary store file."""
    return RosterStore(JsonKeyValueStore(tmp_path / "store.json"))


@pytest.fixture(scope="session")
def live_openai_client():
    """
    Real OpenAI client for live tests.

    Requires OPENAI_API_KEY and TIMESHEET_SAMPLE_IMAGE (path to a photo of a
    filled timesheet).
    """
    required_vars = ["OPENAI_API_KEY", "TIMESHEET_SAMPLE_IMAGE"]
    missing_vars = [var for var in required_vars if not os.getenv(var)]
    if missing_vars:
        pytest.skip(
            f"Live tests require environment variables: {', '.join(missing_vars)}"
        )

    from openai import OpenAI

    return OpenAI()


@pytest.fixture(scope="session")
def live_sample_image(live_openai_client) -> ImagePayload:
    """The sample timesheet photo for live tests."""
    return ImagePayload.from_path(Path(os.environ["TIMESHEET_SAMPLE_IMAGE"]))

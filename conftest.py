"""
Global pytest configuration and fixtures.
"""
import json
import logging
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from unittest.mock import Mock

from timesheet_extractor.config import ExtractorConfig, reload_config
from timesheet_extractor.config.logging_config import reset_logging
from timesheet_extractor.models import Employee, ImagePayload


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'OPENAI_API_KEY': 'sk-test-env-key-1234567890',
        'OPENAI_BATCH_MODEL': 'gpt-5',
        'OPENAI_IMAGE_MODEL': 'gpt-4o',
        'IDENTIFICATION_RETRY_DELAY': '0',
        'DEBUG': 'false',
        'LOG_LEVEL': 'INFO',
        'LOG_FORMAT': 'standard',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch, tmp_path):
    """Mock environment variables and point the store at a temp file."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv('STORE_FILE', str(tmp_path / 'store.json'))
    monkeypatch.delenv('OPENAI_BASE_URL', raising=False)
    monkeypatch.delenv('OPENAI_TIMEOUT', raising=False)
    monkeypatch.delenv('LOG_FILE', raising=False)

    # Clear the global config to force reload with test values
    import timesheet_extractor.config.settings
    timesheet_extractor.config.settings._config = None

    yield test_env_vars

    # Clean up
    timesheet_extractor.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> ExtractorConfig:
    """Test configuration instance."""
    return reload_config()


def _completion(content: Optional[str], refusal: Optional[str] = None):
    message = SimpleNamespace(content=content, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def make_completion():
    """Factory for chat completion responses.

    Dicts are serialized to JSON; strings are used as message content.
    """

    def factory(payload: Any = None, refusal: Optional[str] = None):
        if isinstance(payload, (dict, list)):
            payload = json.dumps(payload)
        return _completion(payload, refusal)

    return factory


class FakeChatCompletions:
    """Stands in for ``client.chat.completions``.

    Tests script raw answers (or exceptions) on ``answers``; ``parse``
    validates them against the requested model like the SDK does.
    """

    def __init__(self):
        self.answers = Mock()
        self.parse = Mock(side_effect=self._parse)

    def _parse(self, *, response_format, **kwargs):
        completion = self.answers()
        for choice in completion.choices:
            message = choice.message
            message.parsed = None
            if message.content and not message.refusal:
                message.parsed = response_format.model_validate_json(message.content)
        return completion


@pytest.fixture
def fake_openai_client():
    """Mock OpenAI client; script answers on ``chat.completions.answers``."""
    client = Mock()
    client.chat.completions = FakeChatCompletions()
    return client


@pytest.fixture
def sample_roster() -> List[Employee]:
    """Three employees, as stored in the roster."""
    return [
        Employee(id='1700000000001', name='Anna Schmidt'),
        Employee(id='1700000000002', name='Ben Müller'),
        Employee(id='1700000000003', name='Clara Weber'),
    ]


@pytest.fixture
def sample_images() -> List[ImagePayload]:
    """Two small fake images."""
    return [
        ImagePayload(name='week1.jpg', data=b'\xff\xd8fake-jpeg-1'),
        ImagePayload(name='week2.png', data=b'\x89PNGfake-png-2', mime_type='image/png'),
    ]


@pytest.fixture
def sample_batch_payload() -> Dict[str, Any]:
    """Batch answer matching ``sample_images``."""
    return {
        'images': [
            {
                'employee': 'anna schmidt',
                'entries': [
                    {'date': '01.01.24', 'startTime': '09:00', 'endTime': '10:30'},
                    {'date': '02.01.24', 'startTime': '09:00', 'endTime': '11:00'},
                ],
            },
            {
                'employee': None,
                'entries': [
                    {'date': '03.01.24', 'startTime': '22:00', 'endTime': '06:00'},
                ],
            },
        ]
    }


@pytest.fixture(autouse=True)
def reset_root_logging():
    """CLI commands reconfigure the root logger; restore it after each test."""
    yield
    reset_logging()
    logging.getLogger('httpx').setLevel(logging.NOTSET)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow (calls a real API)"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        path = str(item.fspath).replace("\\", "/")
        if "tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path:
            item.add_marker(pytest.mark.integration)

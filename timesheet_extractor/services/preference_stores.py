"""
Stores for the OpenAI API key and the hourly wage.
"""

import logging
import math
from typing import Optional

from timesheet_extractor.services.key_value_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

API_KEY_STORAGE_KEY = "openai-api-key"
WAGE_STORAGE_KEY = "hourly-wage"
API_KEY_PREFIX = "sk-"


def validate_api_key(key: str) -> str:
    """
    Check an API key and return it trimmed.

    Raises:
        ValueError: If the key is blank or does not start with "sk-"
    """
    trimmed = (key or "").strip()
    if not trimmed:
        raise ValueError("API key must not be empty")
    if not trimmed.startswith(API_KEY_PREFIX):
        raise ValueError(f"API key must start with '{API_KEY_PREFIX}'")
    return trimmed


def validate_wage(wage: float) -> float:
    """
    Check an hourly wage.

    Raises:
        ValueError: If the wage is negative or not a number
    """
    try:
        wage = float(wage)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Hourly wage must be a number, got {wage!r}") from e

    if math.isnan(wage):
        raise ValueError("Hourly wage must be a number")
    if wage < 0:
        raise ValueError("Hourly wage must not be negative")
    return wage


class CredentialStore:
    """Stores the OpenAI API key."""

    def __init__(self, kv: JsonKeyValueStore):
        self.kv = kv

    def get(self) -> Optional[str]:
        return self.kv.get(API_KEY_STORAGE_KEY) or None

    def set(self, key: str) -> None:
        self.kv.set(API_KEY_STORAGE_KEY, validate_api_key(key))
        logger.info("API key saved")

    def delete(self) -> None:
        self.kv.delete(API_KEY_STORAGE_KEY)
        logger.info("API key deleted")


class WageStore:
    """Stores the hourly wage; 0.0 when none was set."""

    def __init__(self, kv: JsonKeyValueStore):
        self.kv = kv

    def get(self) -> float:
        return float(self.kv.get(WAGE_STORAGE_KEY) or 0.0)

    def set(self, wage: float) -> None:
        wage = validate_wage(wage)
        self.kv.set(WAGE_STORAGE_KEY, wage)
        logger.info(f"Hourly wage set to {wage:.2f}")

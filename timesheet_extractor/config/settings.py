"""
Configuration management for the timesheet extractor.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORE_FILE = "~/.timesheet_extractor/store.json"


class ExtractorConfig(BaseSettings):
    """Configuration settings for the timesheet extractor."""

    # OpenAI Configuration
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: Optional[str] = Field(default=None, alias="OPENAI_BASE_URL")
    openai_timeout: Optional[float] = Field(default=None, alias="OPENAI_TIMEOUT")
    batch_model: str = Field(default="gpt-5", alias="OPENAI_BATCH_MODEL")
    image_model: str = Field(default="gpt-4o", alias="OPENAI_IMAGE_MODEL")
    image_detail: str = Field(default="high", alias="OPENAI_IMAGE_DETAIL")

    # Local Storage
    store_file: Path = Field(default=Path(DEFAULT_STORE_FILE), alias="STORE_FILE")

    # Logging Configuration
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_file: Optional[Path] = Field(default=None, alias="LOG_FILE")

    # Processing Configuration
    identification_max_attempts: int = Field(
        default=3, ge=1, alias="IDENTIFICATION_MAX_ATTEMPTS"
    )
    identification_retry_delay: float = Field(
        default=1.0, ge=0, alias="IDENTIFICATION_RETRY_DELAY"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("openai_api_key", "openai_base_url")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty strings like unset values."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    @field_validator("store_file")
    @classmethod
    def expand_store_file(cls, v):
        """Expand ~ in the store path."""
        return Path(v).expanduser()

    @field_validator("image_detail")
    @classmethod
    def validate_image_detail(cls, v):
        """Ensure image detail level is valid."""
        valid_details = ["low", "high", "auto"]
        if v.lower() not in valid_details:
            raise ValueError(f"Image detail must be one of: {valid_details}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("log_file", mode="before")
    @classmethod
    def blank_log_file_to_none(cls, v):
        """Treat an empty LOG_FILE like an unset one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_openai_client_options(self) -> dict:
        """Get keyword arguments for the OpenAI client (without the API key)."""
        options = {}
        if self.openai_base_url:
            options["base_url"] = self.openai_base_url
        if self.openai_timeout is not None:
            options["timeout"] = self.openai_timeout
        return options


def load_config(env_file: Optional[str] = None) -> ExtractorConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return ExtractorConfig()


# Global configuration instance
_config: Optional[ExtractorConfig] = None


def get_config() -> ExtractorConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> ExtractorConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config

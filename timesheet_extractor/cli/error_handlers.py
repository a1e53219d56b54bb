"""Error handling for CLI commands.

Every failure is reported as one message plus an optional recovery hint,
and mapped to a distinct exit code.
"""

import sys
import traceback
from typing import Optional

import click
import openai
from pydantic import ValidationError

from timesheet_extractor.cli.utils.formatters import format_error, format_warning
from timesheet_extractor.config.settings import ExtractorConfig
from timesheet_extractor.services.extraction_errors import (
    BatchConsistencyError,
    ExtractionFormatError,
    ExtractionServiceError,
    ImageInputError,
)
from timesheet_extractor.utils.logging_utils import redact_api_keys

EXIT_CONFIGURATION = 1
EXIT_DATA_VALIDATION = 3
EXIT_PROCESSING = 4
EXIT_EXTRACTION_FORMAT = 5
EXIT_BATCH_CONSISTENCY = 6
EXIT_IMAGE_INPUT = 7
EXIT_EXTRACTION_SERVICE = 8
EXIT_ABORTED = 130
EXIT_UNEXPECTED = 255


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues (e.g. missing API key)."""

    pass


class DataValidationError(CLIError):
    """Error related to invalid user input (names, wages, keys)."""

    pass


class ProcessingError(CLIError):
    """Error related to data processing (e.g. unreadable files)."""

    pass


def _echo(message: str, hint: Optional[str] = None) -> None:
    click.echo(format_error(redact_api_keys(message)), err=True)
    if hint:
        click.echo(format_warning(f"Hint: {hint}"), err=True)


def _service_error_hint(error: ExtractionServiceError) -> str:
    cause = error.__cause__
    if isinstance(cause, openai.AuthenticationError):
        return (
            "The OpenAI API key was rejected. "
            "Store a valid key with 'timesheet-cli api-key set'"
        )
    if isinstance(cause, openai.RateLimitError):
        return "Rate limit or quota exceeded. Wait a few minutes before retrying"
    if isinstance(cause, (openai.APIConnectionError, openai.APITimeoutError)):
        return "Check your network connection and OPENAI_BASE_URL"
    return "Retry later or run with --debug for details"


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an error to the user.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code for the error type
    """
    if isinstance(error, ConfigurationError):
        _echo(f"Configuration Error: {error.message}", error.recovery_hint)
        return EXIT_CONFIGURATION

    elif isinstance(error, ValidationError) and error.title == ExtractorConfig.__name__:
        fields = ", ".join(
            str(detail["loc"][0]) for detail in error.errors() if detail["loc"]
        )
        _echo(
            f"Configuration Error: Invalid settings ({fields})",
            "Check your environment variables and .env file",
        )
        return EXIT_CONFIGURATION

    elif isinstance(error, DataValidationError):
        _echo(f"Data Validation Error: {error.message}", error.recovery_hint)
        return EXIT_DATA_VALIDATION

    elif isinstance(error, ProcessingError):
        _echo(f"Processing Error: {error.message}", error.recovery_hint)
        return EXIT_PROCESSING

    elif isinstance(error, ExtractionFormatError):
        _echo(
            f"Extraction Error: {error}",
            "Take the photo again with good lighting and the whole sheet in view",
        )
        return EXIT_EXTRACTION_FORMAT

    elif isinstance(error, BatchConsistencyError):
        _echo(
            f"Extraction Error: {error}",
            "Retry, or use --per-image to process the images one by one",
        )
        return EXIT_BATCH_CONSISTENCY

    elif isinstance(error, ImageInputError):
        _echo(f"Image Error: {error}", "Pass at least one non-empty image file")
        return EXIT_IMAGE_INPUT

    elif isinstance(error, ExtractionServiceError):
        _echo(f"Extraction Error: {error}", _service_error_hint(error))
        return EXIT_EXTRACTION_SERVICE

    # Handle click.Abort (user cancellation)
    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return EXIT_ABORTED

    else:
        _echo(f"Unexpected Error: {type(error).__name__}: {error}")

        if debug:
            click.echo("\nFull stack trace:", err=True)
            click.echo(
                redact_api_keys(
                    "".join(
                        traceback.format_exception(
                            type(error), error, error.__traceback__
                        )
                    )
                ),
                err=True,
            )
        else:
            click.echo(
                format_warning("\nRun with --debug flag for full stack trace"),
                err=True,
            )

        return EXIT_UNEXPECTED


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                ...
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is None or isinstance(exc_val, (SystemExit, click.exceptions.Exit)):
                return False
            sys.exit(handle_cli_error(exc_val, self.show_debug))

    return ErrorHandler(debug)

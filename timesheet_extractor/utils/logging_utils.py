"""Structured logging utilities with context support."""

import functools
import logging
import re
import threading
import uuid
from typing import Any, Callable, Dict, Optional, cast

# Thread-local storage for log context
_thread_local = threading.local()

# Field names whose values are redacted
SENSITIVE_FIELDS = {
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "authorization",
}

REDACTED = "***REDACTED***"
_API_KEY_PATTERN = re.compile(r"sk-[A-Za-z0-9_\-]{8,}")
_MAX_ARG_REPR = 80


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for one processing run."""
    return str(uuid.uuid4())


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and copied onto every record
    by ``_ContextFilter``. Nested contexts are merged and restored on exit.

    Example:
        with LogContext(correlation_id=generate_correlation_id(), images=3):
            logger.info("Processing timesheet images")
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}

        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _thread_local.context = self.previous_context
        else:
            _thread_local.context = {}


class _ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(_thread_local, "context"):
            for key, value in _thread_local.context.items():
                setattr(record, key, value)
        return True


def mask_api_key(key: Optional[str]) -> str:
    """
    Mask an API key for display, keeping only its prefix and last 4 characters.

    Example:
        >>> mask_api_key("sk-abcdefghijklmnop")
        'sk-...mnop'
        >>> mask_api_key(None)
        '(not set)'
    """
    if not key:
        return "(not set)"
    if len(key) <= 8:
        return "***"
    return f"{key[:3]}...{key[-4:]}"


def redact_api_keys(text: str) -> str:
    """Replace anything that looks like an OpenAI API key in free text."""
    return _API_KEY_PATTERN.sub(REDACTED, text)


def sanitize_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize sensitive fields in a dictionary.

    Values of sensitive field names are redacted, nested dictionaries are
    processed recursively and API keys embedded in strings are masked.

    Args:
        data: Dictionary to sanitize

    Returns:
        Sanitized copy of the dictionary
    """
    if not isinstance(data, dict):
        return data

    sanitized: Dict[str, Any] = {}

    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
            sanitized[key] = REDACTED if value is not None else None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_sensitive_data(cast(Dict[str, Any], value))
        elif isinstance(value, str):
            sanitized[key] = redact_api_keys(value)
        else:
            sanitized[key] = value

    return sanitized


def _short_repr(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    text = redact_api_keys(repr(value))
    if len(text) > _MAX_ARG_REPR:
        return text[: _MAX_ARG_REPR - 3] + "..."
    return text


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry, exit and exceptions.

    Argument values are shortened and API keys are masked, so image bytes
    and credentials never end up in the log.

    Example:
        @log_function_call(include_args=True)
        def process_images(self, images, per_image=False):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [_short_repr(a) for a in args]
                kwargs_repr = [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__name__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__name__}")

            try:
                result = f(*args, **kwargs)
                logger.log(log_level, f"Exiting {f.__name__}")
                return result

            except Exception as e:
                logger.error(
                    f"Exception in {f.__name__}: {type(e).__name__}: "
                    f"{redact_api_keys(str(e))}"
                )
                raise

        return wrapper

    if func is None:
        return decorator
    return decorator(func)

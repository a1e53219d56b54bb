"""
Retry handler with a bounded number of attempts and linear backoff.
"""

import logging
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RetryExhaustedException(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, last_exception: Optional[Exception] = None):
        super().__init__(message)
        self.last_exception = last_exception


class RetryHandler:
    """
    Handles retries with linear backoff.

    The n-th failed attempt waits ``base_delay * n`` seconds before the next
    one, so three attempts with a base delay of 1s wait 1s and then 2s.

    Features:
    - Fixed attempt count
    - Configurable retry conditions
    - Optional fallback value once all attempts failed
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize retry handler.

        Args:
            max_attempts: Total number of attempts, including the first one
            base_delay: Delay multiplied by the attempt number (seconds)
            retry_condition: Custom function to determine if retry should occur
            sleep: Function used to wait between attempts
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if base_delay < 0:
            raise ValueError("base_delay must not be negative")

        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.retry_condition = retry_condition or self._default_retry_condition
        self._sleep = sleep

    def _default_retry_condition(self, exception: Exception) -> bool:
        """Retry on every error; callers narrow this with ``retry_condition``."""
        return True

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate the linear delay after a failed attempt.

        Args:
            attempt: Failed attempt number (1-based)

        Returns:
            Delay in seconds
        """
        return self.base_delay * attempt

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with retry logic.

        Args:
            func: Function to execute
            *args: Positional arguments for function
            **kwargs: Keyword arguments for function

        Returns:
            Result of function execution

        Raises:
            RetryExhaustedException: If all attempts failed
            Exception: Original exception if not retryable
        """
        func_name = getattr(func, "__name__", repr(func))

        for attempt in range(1, self.max_attempts + 1):
            try:
                result = func(*args, **kwargs)

                if attempt > 1:
                    logger.info(
                        f"Function {func_name} succeeded after {attempt - 1} retries"
                    )

                return result

            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(
                        f"Not retrying - condition not met: {type(e).__name__}"
                    )
                    raise

                logger.warning(
                    f"Attempt {attempt}/{self.max_attempts} of {func_name} failed: "
                    f"{type(e).__name__}: {e}"
                )

                if attempt >= self.max_attempts:
                    raise RetryExhaustedException(
                        f"All {self.max_attempts} attempts failed. "
                        f"Last error: {type(e).__name__}: {e}",
                        last_exception=e,
                    ) from e

                delay = self._calculate_delay(attempt)
                logger.debug(f"Retrying {func_name} in {delay:.2f}s")
                self._sleep(delay)

        raise RetryExhaustedException(f"No attempts made for {func_name}")

    def execute_with_fallback(
        self, func: Callable, fallback: Any, *args, **kwargs
    ) -> Any:
        """
        Execute function with retry logic, returning ``fallback`` on failure.

        Non-retryable errors are not swallowed.
        """
        try:
            return self.execute_with_retry(func, *args, **kwargs)
        except RetryExhaustedException as e:
            logger.error(f"{e} Using fallback value {fallback!r}")
            return fallback

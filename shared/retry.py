"""
Retry logic with exponential backoff.

Used for storage uploads only; language-model calls are never retried.
"""

import asyncio
import functools
import time
from typing import Callable, Iterator, Type, Tuple, Any, TypeVar

from shared.errors import RetryableError
from shared.logging import get_logger

T = TypeVar("T")
logger = get_logger("retry")


def backoff_delays(max_attempts: int, base_delay: float, max_delay: float) -> Iterator[float]:
    """Delays to wait between attempts: base, 2x base, 4x base ... capped at max_delay."""
    for attempt in range(max_attempts - 1):
        yield min(base_delay * (2 ** attempt), max_delay)


def _log_retry(func_name: str, attempt: int, max_attempts: int, delay: float, error: Exception) -> None:
    logger.warning(
        f"Retry attempt {attempt}/{max_attempts} for {func_name} after {delay}s delay",
        extra={"error": str(error), "attempt": attempt}
    )


def _log_exhausted(func_name: str, max_attempts: int, error: Exception) -> None:
    logger.error(
        f"All {max_attempts} retry attempts failed for {func_name}",
        extra={"error": str(error)}
    )


def retry_with_backoff(
    max_attempts: int = 3,
    base_delay: float = 2,
    max_delay: float = 30,
    retryable_exceptions: Tuple[Type[Exception], ...] = (RetryableError,)
):
    """
    Decorator for retrying functions with exponential backoff.

    Exceptions outside `retryable_exceptions` propagate on the first attempt.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        base_delay: Delay before the second attempt, doubled after that (default: 2)
        max_delay: Upper bound for any single delay (default: 30)
        retryable_exceptions: Exception types that trigger another attempt

    Example:
        @retry_with_backoff(max_attempts=3, base_delay=2)
        async def upload_file(self, local_path, remote_path):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> T:
                delays = backoff_delays(max_attempts, base_delay, max_delay)
                for attempt in range(1, max_attempts + 1):
                    try:
                        return await func(*args, **kwargs)
                    except retryable_exceptions as e:
                        if attempt == max_attempts:
                            _log_exhausted(func.__name__, max_attempts, e)
                            raise
                        delay = next(delays)
                        _log_retry(func.__name__, attempt, max_attempts, delay, e)
                        await asyncio.sleep(delay)
                raise RuntimeError(f"{func.__name__} called with max_attempts={max_attempts}")

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            delays = backoff_delays(max_attempts, base_delay, max_delay)
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    if attempt == max_attempts:
                        _log_exhausted(func.__name__, max_attempts, e)
                        raise
                    delay = next(delays)
                    _log_retry(func.__name__, attempt, max_attempts, delay, e)
                    time.sleep(delay)
            raise RuntimeError(f"{func.__name__} called with max_attempts={max_attempts}")

        return sync_wrapper

    return decorator

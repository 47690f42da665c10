"""
Bounded polling for long-running external operations.

Not tied to any particular service: the caller supplies how to fetch the
latest state and how to recognise completion.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from shared.errors import PollTimeoutError
from shared.logging import get_logger

T = TypeVar("T")
logger = get_logger("polling")


async def poll_until(
    fetch: Callable[[], Union[T, Awaitable[T]]],
    is_done: Callable[[T], bool],
    interval_s: float,
    max_attempts: int,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_attempt: Optional[Callable[[int, T], Any]] = None,
    description: str = "operation",
) -> T:
    """
    Poll until `is_done(result)` holds or the attempt ceiling is reached.

    Each attempt waits `interval_s` and then calls `fetch()`, so the worst case
    wall time is `interval_s * max_attempts`.

    Args:
        fetch: Returns the latest state (sync or async)
        is_done: Completion predicate
        interval_s: Seconds to wait before each fetch
        max_attempts: Maximum number of fetches
        sleep: Awaitable sleep (injectable for tests)
        on_attempt: Optional hook called with (attempt_number, result)
        description: Used in log lines and the timeout message

    Returns:
        The first result for which `is_done` is true

    Raises:
        PollTimeoutError: If the operation is still pending after `max_attempts`
    """
    for attempt in range(1, max_attempts + 1):
        await sleep(interval_s)

        result = fetch()
        if inspect.isawaitable(result):
            result = await result

        if on_attempt is not None:
            on_attempt(attempt, result)

        if is_done(result):
            logger.debug(
                f"{description} finished after {attempt} polls",
                extra={"attempt": attempt}
            )
            return result

    raise PollTimeoutError(f"{description} timed out after {max_attempts} polls")

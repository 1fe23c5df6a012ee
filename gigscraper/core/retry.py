"""Bounded retry with exponential backoff for flaky browser operations."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
) -> T:
    """Run ``operation`` until it succeeds or attempts run out.

    Waits ``base_delay`` seconds after the first failure and doubles the wait
    after each further failure, so k failures cost ``base_delay * (2**k - 1)``
    seconds in total. The last error is re-raised unchanged.

    Raises:
        ValueError: If max_attempts is below 1.
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)

    delay = base_delay
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == max_attempts:
                logger.warning("Attempt %d/%d failed, giving up: %s", attempt, max_attempts, e)
                raise
            logger.warning(
                "Attempt %d/%d failed, retrying in %.1fs: %s",
                attempt, max_attempts, delay, e,
            )
            await asyncio.sleep(delay)
            delay *= 2

    msg = "unreachable"  # loop always returns or raises
    raise RuntimeError(msg)

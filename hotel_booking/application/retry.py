"""
Retry utilities for optimistic-concurrency conflicts.

A conditional write that loses against a concurrent writer raises
OptimisticLockError; the whole read-check-write unit is re-run with a short
exponential backoff before the conflict is surfaced.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from hotel_booking.domain.errors import OptimisticLockError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_conflict_error(error: Exception) -> bool:
    return isinstance(error, OptimisticLockError)


async def retry_on_conflict(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 2,
    base_delay: float = 0.01,
) -> T:
    """
    Run `func`, retrying when it fails with a write conflict.

    Uses exponential backoff: base_delay * (2 ** attempt)

    Args:
        func: The async function to execute
        max_attempts: Total attempts, first call included (default: 2)
        base_delay: Base delay in seconds for the backoff (default: 0.01)

    Raises:
        The last OptimisticLockError once attempts are exhausted, or any
        other exception immediately.
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_conflict_error(e):
                raise

            if attempt < max_attempts - 1:
                delay = base_delay * (2 ** attempt)
                logger.warning(
                    "Write conflict detected, retrying",
                    extra={
                        "attempt": attempt + 1,
                        "max_attempts": max_attempts,
                        "retry_delay": delay,
                        "error": str(e),
                    },
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    "Write conflict persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

    raise RuntimeError("retry_on_conflict called with max_attempts < 1")


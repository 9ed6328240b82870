"""Bounded retry primitive shared by the startup waits."""

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def poll_until(
    action: Callable[[], Awaitable[T]],
    *,
    interval: float,
    timeout: float,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """Call ``action`` until it returns without raising one of ``retry_on``.

    The first attempt is made immediately, then one attempt per ``interval``
    until ``timeout`` seconds have passed since the call. At least one
    attempt is always made.

    Args:
        action: Coroutine function performing one attempt
        interval: Delay between attempts, in seconds
        timeout: Overall bound, in seconds
        retry_on: Exception types that mean "not yet, try again"

    Returns:
        The value returned by the first successful attempt

    Raises:
        asyncio.TimeoutError: When the bound elapses; chained from the last
            retried exception
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    attempts = 0

    while True:
        attempts += 1
        try:
            return await action()
        except retry_on as e:
            last_error = e
            logger.debug(f"Attempt {attempts} failed: {e}")

        remaining = deadline - loop.time()
        if remaining <= 0:
            raise asyncio.TimeoutError(
                f"Gave up after {attempts} attempts in {timeout:.1f}s"
            ) from last_error

        await asyncio.sleep(min(interval, remaining))

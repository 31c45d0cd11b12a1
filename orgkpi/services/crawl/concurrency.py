"""Sliding-window task execution.

At most ``limit`` workers run at once; a new item is admitted as soon as a
slot frees and results are yielded in completion order, not input order.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def bounded_as_completed(
    items: Iterable[T],
    worker: Callable[[T], Awaitable[R]],
    limit: int,
) -> AsyncIterator[R]:
    """
    Run ``worker`` over ``items`` with at most ``limit`` in flight.

    Items are admitted in iteration order. If a worker raises, the exception
    propagates to the consumer and workers still pending are cancelled.

    Raises:
        ValueError: If limit is less than 1
    """
    if limit < 1:
        raise ValueError(f"Concurrency limit must be at least 1, got {limit}")

    semaphore = asyncio.Semaphore(limit)

    async def run(item: T) -> R:
        async with semaphore:
            return await worker(item)

    tasks = [asyncio.create_task(run(item)) for item in items]
    logger.debug(f"Dispatched {len(tasks)} tasks with concurrency {limit}")
    try:
        for next_done in asyncio.as_completed(tasks):
            yield await next_done
    finally:
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        # Retrieve outcomes so no task exception goes unobserved
        await asyncio.gather(*tasks, return_exceptions=True)

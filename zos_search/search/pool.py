"""
Bounded concurrency runner for asynchronous work
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Tuple


logger = logging.getLogger("async_pool")


async def async_pool(
    limit: Optional[int],
    items: Iterable[Any],
    worker: Callable[[Any], Awaitable[None]]
) -> List[Tuple[Any, BaseException]]:
    """
    Run ``worker`` once for every item with at most ``limit`` calls in flight

    Args:
        limit: Maximum number of simultaneous calls. 0 or None runs every
            item at once
        items: Items to process, submitted in order
        worker: Coroutine function called with each item

    Returns:
        (item, exception) pairs for calls that raised. A raising call never
        stops the remaining items from being processed.
    """
    queue = list(items)
    errors: List[Tuple[Any, BaseException]] = []

    if not queue:
        return errors

    async def run_one(item):
        try:
            await worker(item)
        except Exception as e:
            logger.error(f"Unhandled error while processing {item}: {e}")
            errors.append((item, e))

    if not limit or limit >= len(queue):
        await asyncio.gather(*(run_one(item) for item in queue))
        return errors

    pending = iter(queue)

    async def drain():
        # next() on a shared iterator hands each item to exactly one worker
        for item in pending:
            await run_one(item)

    await asyncio.gather(*(drain() for _ in range(limit)))
    return errors

"""
Asynchronous batching.

The async counterparts of `bundel.backends.serial`. Elements are awaited from
the source strictly one at a time, and per-batch actions never overlap.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import (
    Any,
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    List,
    TypeVar,
    Union,
)

from ..core.log import get_logger
from ..core.validation import validate_action, validate_desired_length

T = TypeVar("T")

logger = get_logger("bundel.backends.asyncio")


def batch_items_async(
    items: Union[AsyncIterable[T], Iterable[T]],
    desired_length: int,
) -> AsyncIterator[List[T]]:
    """Generates lists of length `desired_length` containing the values from `items`.

    This is the async version of `batch_items`. The final list may be shorter
    than `desired_length`; no list is ever empty.

    Example:
        .. code-block:: python

            async for batch in batch_items_async(fetch_rows(), 100):
                await store(batch)

    Args:
        items: Async iterable of items to batch up. A regular iterable is
            accepted too and is iterated without blocking between items.
        desired_length: The desired length of the generated lists.

    Returns:
        An async generator of batches. It is not restartable.

    Raises:
        InvalidArgumentError: Immediately, before `items` is touched, if
            `desired_length` is not a positive integer.
    """
    validate_desired_length(desired_length)

    if not hasattr(items, "__aiter__"):
        items = _to_async(items)
    return _buffer_batches(items, desired_length)


async def for_each_batch_async(
    items: Union[AsyncIterable[T], Iterable[T]],
    desired_length: int,
    on_batch: Callable[[List[T], int], Union[Awaitable[Any], Any]],
) -> None:
    """Performs `on_batch` for each list generated from `items`.

    The action is called as ``on_batch(batch, batch_index)``. If it returns
    an awaitable, that is awaited before the next batch is requested, so the
    action for batch ``i + 1`` never starts before batch ``i`` is done.

    Args:
        items: Async iterable of items to batch up.
        desired_length: The desired length of the generated lists.
        on_batch: Action to perform for each list. Coroutine functions and
            plain functions are both accepted.
    """
    validate_action(on_batch)
    batches = batch_items_async(items, desired_length)
    batch_index = 0
    try:
        async for batch in batches:
            result = on_batch(batch, batch_index)
            if inspect.isawaitable(result):
                await result
            batch_index += 1
    finally:
        await batches.aclose()


async def _to_async(it: Iterable[T]) -> AsyncIterator[T]:
    for i in it:
        yield i


async def _buffer_batches(
    items: AsyncIterable[T], desired_length: int
) -> AsyncIterator[List[T]]:
    logger.debug("batching_started", desired_length=desired_length, backend="asyncio")
    loop = asyncio.get_running_loop()
    start_time = loop.time()
    items_in = 0
    batches_out = 0

    iterator = items.__aiter__()
    batch: List[T] = []
    try:
        async for item in iterator:
            items_in += 1
            batch.append(item)
            if len(batch) == desired_length:
                logger.debug("batch_emitted", batch_index=batches_out, size=len(batch))
                batches_out += 1
                yield batch
                batch = []

        if batch:
            logger.debug("batch_emitted", batch_index=batches_out, size=len(batch))
            batches_out += 1
            yield batch
    except Exception as e:
        logger.warning(
            "batching_failed",
            items_in=items_in,
            batches_out=batches_out,
            error=str(e),
        )
        raise
    finally:
        duration = loop.time() - start_time
        logger.debug(
            "batching_finished",
            items_in=items_in,
            batches_out=batches_out,
            duration=round(duration, 4),
        )
        if inspect.isasyncgen(iterator):
            await iterator.aclose()

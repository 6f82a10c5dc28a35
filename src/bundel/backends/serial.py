"""
Synchronous batching.

`batch_items` turns any iterable into a lazy iterator of lists, and
`for_each_batch` drives it to completion while handing every batch, together
with its zero-based index, to a callback.
"""
from __future__ import annotations

import time
import types
from typing import Any, Callable, Iterable, Iterator, List, TypeVar

from ..core.log import get_logger
from ..core.validation import validate_action, validate_desired_length

T = TypeVar("T")

# Materialized sequences that can be sliced without consuming them.
SLICEABLE_TYPES = (list, tuple, range)

logger = get_logger("bundel.backends.serial")


def batch_items(items: Iterable[T], desired_length: int) -> Iterator[List[T]]:
    """Generates lists of length `desired_length` containing the values from `items`.

    The final list may be shorter than `desired_length` if there are not
    enough values in `items`. No list is ever empty, so an empty source
    produces no batches at all.

    Example:
        >>> list(batch_items([1, 2, 3, 4, 5], 2))
        [[1, 2], [3, 4], [5]]

    Args:
        items: Iterable of items to batch up. It is consumed once, lazily,
            as batches are requested.
        desired_length: The desired length of the generated lists.

    Returns:
        A generator of batches. It is not restartable.

    Raises:
        InvalidArgumentError: Immediately, before `items` is touched, if
            `desired_length` is not a positive integer.
    """
    validate_desired_length(desired_length)

    if isinstance(items, SLICEABLE_TYPES):
        batches = _slice_batches(items, desired_length)
    else:
        batches = _buffer_batches(items, desired_length)
    return _logged(batches, desired_length)


def for_each_batch(
    items: Iterable[T],
    desired_length: int,
    on_batch: Callable[[List[T], int], Any],
) -> None:
    """Performs `on_batch` for each list generated from `items`.

    The action is called as ``on_batch(batch, batch_index)`` with indices
    0, 1, 2, ... in emission order. If the action raises, the exception
    propagates at once and no further batches are produced.

    Args:
        items: Iterable of items to batch up.
        desired_length: The desired length of the generated lists.
        on_batch: Action to perform for each list.
    """
    validate_action(on_batch)
    batches = batch_items(items, desired_length)
    try:
        for batch_index, batch in enumerate(batches):
            on_batch(batch, batch_index)
    finally:
        batches.close()


def _slice_batches(items, desired_length: int) -> Iterator[List[Any]]:
    # The length is re-read every step, so a list that grows or shrinks while
    # being batched behaves exactly like iterating over it.
    start = 0
    while start < len(items):
        yield list(items[start:start + desired_length])
        start += desired_length


def _buffer_batches(items: Iterable[T], desired_length: int) -> Iterator[List[T]]:
    iterator = iter(items)
    batch: List[T] = []
    try:
        for item in iterator:
            batch.append(item)
            if len(batch) == desired_length:
                yield batch
                batch = []
        if batch:
            yield batch
    finally:
        if isinstance(iterator, types.GeneratorType):
            iterator.close()


def _logged(batches: Iterator[List[T]], desired_length: int) -> Iterator[List[T]]:
    """Re-yields `batches` while logging the lifecycle of the run."""
    logger.debug("batching_started", desired_length=desired_length, backend="serial")
    start_time = time.time()
    items_in = 0
    batches_out = 0

    try:
        for batch in batches:
            items_in += len(batch)
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
        logger.debug(
            "batching_finished",
            items_in=items_in,
            batches_out=batches_out,
            duration=round(time.time() - start_time, 4),
        )
        batches.close()

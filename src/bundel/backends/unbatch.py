"""
The inverse of batching: flattens a stream of batches back into a stream of
items, preserving order.
"""
from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, TypeVar, Union

T = TypeVar("T")


def unbatch(batches: Iterable[Iterable[T]]) -> Iterator[T]:
    """Yields every item of every batch, in order."""
    for batch in batches:
        yield from batch


async def unbatch_async(
    batches: Union[AsyncIterable[Iterable[T]], Iterable[Iterable[T]]]
) -> AsyncIterator[T]:
    """Async version of `unbatch`. Accepts a sync or async stream of batches."""
    if hasattr(batches, "__aiter__"):
        async for batch in batches:
            for item in batch:
                yield item
    else:
        for batch in batches:
            for item in batch:
                yield item

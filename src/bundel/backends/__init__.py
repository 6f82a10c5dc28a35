# bundel.backends
# The batching implementations: `serial` for regular iterables and `asyncio`
# for async iterables.

from .serial import batch_items, for_each_batch
from .asyncio import batch_items_async, for_each_batch_async
from .unbatch import unbatch, unbatch_async

__all__ = [
    "batch_items",
    "for_each_batch",
    "batch_items_async",
    "for_each_batch_async",
    "unbatch",
    "unbatch_async",
]

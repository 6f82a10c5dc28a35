from .backends.serial import batch_items, for_each_batch
from .backends.asyncio import batch_items_async, for_each_batch_async
from .backends.unbatch import unbatch, unbatch_async
from .batcher import Batcher
from .core.errors import BundelError, InvalidArgumentError
from .core.hooks import BatchHooks
from .core.log import configure_logging
from .config import Config, load_config

__all__ = [
    "batch_items",
    "for_each_batch",
    "batch_items_async",
    "for_each_batch_async",
    "unbatch",
    "unbatch_async",
    "Batcher",
    "BatchHooks",
    "BundelError",
    "InvalidArgumentError",
    "configure_logging",
    "Config",
    "load_config",
]

# bundel.core
# This package contains the building blocks shared by the batching backends:
# error types, argument validation, hooks and logging.

from .errors import BundelError, InvalidArgumentError
from .hooks import BatchHooks
from .log import configure_logging, get_logger

__all__ = [
    "BatchHooks",
    "BundelError",
    "InvalidArgumentError",
    "configure_logging",
    "get_logger",
]

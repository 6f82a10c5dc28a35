"""
This module defines the `Batcher` class, a reusable batching configuration.

A `Batcher` fixes the desired batch length once, validates it up front, and
then exposes the four batching operations as methods. It keeps running
metrics and can notify `BatchHooks` as batches flow through it.
"""
from __future__ import annotations

import inspect
from typing import (
    Any,
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Union,
)

from .backends.asyncio import batch_items_async
from .backends.serial import batch_items
from .config import Config, load_config
from .core.errors import InvalidArgumentError
from .core.hooks import BatchHooks
from .core.log import get_logger
from .core.validation import validate_action, validate_desired_length


class Batcher:
    """Splits streams into batches of a fixed length.

    Example:
        .. code-block:: python

            batcher = Batcher(100, name="ingest")
            for rows in batcher.batch(read_rows()):
                db.insert_many(rows)

    Attributes:
        desired_length: The length of every batch except possibly the last.
        name: The name of the batcher, used for logging.
        hooks: Callbacks invoked as batches are produced.
        metrics: Running totals across every run of this batcher.
    """

    def __init__(
        self,
        desired_length: int,
        *,
        name: Optional[str] = None,
        hooks: Optional[BatchHooks] = None,
    ):
        self.desired_length = validate_desired_length(desired_length)
        self.name = name or "Batcher"
        self.hooks = hooks or BatchHooks()
        self.logger = get_logger(f"bundel.batcher.{self.name}")
        self.metrics: dict[str, int] = {
            "runs": 0, "items_in": 0, "batches_out": 0, "errors": 0,
        }

    @classmethod
    def from_config(
        cls,
        config: Union[Config, str, None],
        key: str = "batch",
        *,
        hooks: Optional[BatchHooks] = None,
    ) -> "Batcher":
        """Builds a batcher from the `size` and `name` entries of a config section.

        Args:
            config: A `Config` object, or the path to a YAML file.
            key: The dot-separated key of the section to read.
            hooks: Optional hooks for the new batcher.

        Raises:
            InvalidArgumentError: If the section has no valid `size`.
        """
        if not isinstance(config, Config):
            config = load_config(config)
        section = config.section(key)
        size = section.get("size")
        if size is None:
            raise InvalidArgumentError(f"{key}.size", None, "missing from configuration")
        validate_desired_length(size, argument=f"{key}.size")
        return cls(size, name=section.get("name"), hooks=hooks)

    def __repr__(self) -> str:
        return f"Batcher(name='{self.name}', desired_length={self.desired_length})"

    def batch(self, items: Iterable[Any]) -> Iterator[List[Any]]:
        """Lazily splits `items` into batches. See `batch_items`."""
        self.metrics["runs"] += 1
        return self._track(batch_items(items, self.desired_length))

    def batch_async(
        self, items: Union[AsyncIterable[Any], Iterable[Any]]
    ) -> AsyncIterator[List[Any]]:
        """Lazily splits `items` into batches. See `batch_items_async`."""
        self.metrics["runs"] += 1
        return self._track_async(batch_items_async(items, self.desired_length))

    def for_each(
        self, items: Iterable[Any], on_batch: Callable[[List[Any], int], Any]
    ) -> None:
        """Calls ``on_batch(batch, batch_index)`` for every batch of `items`."""
        validate_action(on_batch)
        batches = self.batch(items)
        try:
            for batch_index, batch in enumerate(batches):
                try:
                    on_batch(batch, batch_index)
                except Exception:
                    self.metrics["errors"] += 1
                    raise
        finally:
            batches.close()

    async def for_each_async(
        self,
        items: Union[AsyncIterable[Any], Iterable[Any]],
        on_batch: Callable[[List[Any], int], Union[Awaitable[Any], Any]],
    ) -> None:
        """Awaits ``on_batch(batch, batch_index)`` for every batch, one at a time."""
        validate_action(on_batch)
        batches = self.batch_async(items)
        batch_index = 0
        try:
            async for batch in batches:
                try:
                    result = on_batch(batch, batch_index)
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    self.metrics["errors"] += 1
                    raise
                batch_index += 1
        finally:
            await batches.aclose()

    def _record(self, batch: List[Any], batch_index: int) -> None:
        self.metrics["items_in"] += len(batch)
        self.metrics["batches_out"] += 1
        if self.hooks.on_batch:
            self.hooks.on_batch(batch, batch_index)

    def _finish(self, items_in: int, batches_out: int) -> None:
        self.logger.info("run_finished", items_in=items_in, batches_out=batches_out)
        if self.hooks.on_stream_end:
            self.hooks.on_stream_end(items_in, batches_out)

    def _track(self, batches: Iterator[List[Any]]) -> Iterator[List[Any]]:
        items_in = 0
        batch_index = 0
        try:
            for batch in batches:
                self._record(batch, batch_index)
                items_in += len(batch)
                batch_index += 1
                yield batch
        except Exception:
            self.metrics["errors"] += 1
            raise
        finally:
            batches.close()
        self._finish(items_in, batch_index)

    async def _track_async(
        self, batches: AsyncIterator[List[Any]]
    ) -> AsyncIterator[List[Any]]:
        items_in = 0
        batch_index = 0
        try:
            async for batch in batches:
                self._record(batch, batch_index)
                items_in += len(batch)
                batch_index += 1
                yield batch
        except Exception:
            self.metrics["errors"] += 1
            raise
        finally:
            await batches.aclose()
        self._finish(items_in, batch_index)

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass
class BatchHooks:
    """
    A collection of hook functions to monitor a `Batcher`.

    Attributes:
        on_batch: Called with ``(batch, batch_index)`` just before a batch is
                  handed to the consumer.
        on_stream_end: Called with ``(items_in, batches_out)`` once the source
                       is exhausted. Not called when the run fails or is
                       abandoned early.
    """
    on_batch: Optional[Callable[[List[Any], int], None]] = None
    on_stream_end: Optional[Callable[[int, int], None]] = None

"""
A simple example demonstrating synchronous batching with bundel.
Rows are read lazily from a generator and written in groups of three.
"""
from bundel import Batcher, BatchHooks, batch_items, for_each_batch


def read_rows():
    """Pretends to read rows from a large file."""
    for i in range(8):
        yield {"id": i}


def write_rows(rows, batch_index):
    ids = [row["id"] for row in rows]
    print(f"Batch {batch_index}: {ids}")


def main():
    print("--- batch_items ---")
    print(list(batch_items([1, 2, 3, 4, 5], 2)))

    print("\n--- for_each_batch ---")
    for_each_batch(read_rows(), 3, write_rows)

    print("\n--- Batcher with hooks ---")
    hooks = BatchHooks(
        on_stream_end=lambda items_in, batches_out: print(
            f"Processed {items_in} items in {batches_out} batches."
        )
    )
    batcher = Batcher(4, name="rows", hooks=hooks)
    batcher.for_each(read_rows(), write_rows)
    print(f"Metrics: {batcher.metrics}")


if __name__ == "__main__":
    main()

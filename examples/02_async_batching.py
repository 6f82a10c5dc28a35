"""
Demonstrates asynchronous batching. Items arrive from an async source with a
small delay, and every batch is stored by an async action. Actions never run
concurrently: batch 1 is only stored once batch 0 is done.
"""
import asyncio

from bundel import batch_items_async, for_each_batch_async


async def fetch_readings():
    """Simulates a sensor that produces a reading every few milliseconds."""
    for value in [21.5, 21.7, 22.0, 22.4, 22.1]:
        await asyncio.sleep(0.005)
        yield value


async def store(readings, batch_index):
    await asyncio.sleep(0.01)
    print(f"Stored batch {batch_index}: {readings}")


async def main():
    print("--- batch_items_async ---")
    async for batch in batch_items_async(fetch_readings(), 2):
        print(batch)

    print("\n--- for_each_batch_async ---")
    await for_each_batch_async(fetch_readings(), 3, store)


if __name__ == "__main__":
    asyncio.run(main())

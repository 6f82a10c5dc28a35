import pytest

from bundel import Batcher, BatchHooks, Config, InvalidArgumentError


async def async_items(items):
    for item in items:
        yield item


def test_batcher_batch():
    batcher = Batcher(2)
    assert list(batcher.batch([1, 2, 3, 4, 5])) == [[1, 2], [3, 4], [5]]


def test_batcher_validates_on_construction():
    with pytest.raises(InvalidArgumentError):
        Batcher(0)


def test_batcher_metrics_accumulate_across_runs():
    batcher = Batcher(3, name="rows")
    list(batcher.batch(range(7)))
    batcher.for_each(iter(range(3)), lambda batch, index: None)

    assert batcher.metrics == {"runs": 2, "items_in": 10, "batches_out": 4, "errors": 0}


def test_batcher_for_each_passes_indices():
    calls = []
    Batcher(2).for_each("abcde", lambda batch, index: calls.append(("".join(batch), index)))
    assert calls == [("ab", 0), ("cd", 1), ("e", 2)]


def test_batcher_hooks():
    seen = []
    ends = []
    hooks = BatchHooks(
        on_batch=lambda batch, index: seen.append((batch, index)),
        on_stream_end=lambda items_in, batches_out: ends.append((items_in, batches_out)),
    )
    batcher = Batcher(2, hooks=hooks)
    list(batcher.batch([1, 2, 3]))

    assert seen == [([1, 2], 0), ([3], 1)]
    assert ends == [(3, 2)]


def test_batcher_stream_end_not_called_when_abandoned():
    ends = []
    batcher = Batcher(2, hooks=BatchHooks(on_stream_end=lambda *args: ends.append(args)))
    batches = batcher.batch(iter(range(10)))
    next(batches)
    batches.close()
    assert ends == []


def test_batcher_counts_errors():
    def failing_source():
        yield 1
        raise RuntimeError("source failed")

    batcher = Batcher(5)
    with pytest.raises(RuntimeError, match="source failed"):
        list(batcher.batch(failing_source()))
    assert batcher.metrics["errors"] == 1


@pytest.mark.asyncio
async def test_batcher_batch_async():
    batcher = Batcher(2)
    batches = [batch async for batch in batcher.batch_async(async_items([1, 2, 3]))]
    assert batches == [[1, 2], [3]]
    assert batcher.metrics["batches_out"] == 2


@pytest.mark.asyncio
async def test_batcher_for_each_async():
    calls = []

    async def action(batch, index):
        calls.append((batch, index))

    ends = []
    batcher = Batcher(2, hooks=BatchHooks(on_stream_end=lambda *args: ends.append(args)))
    await batcher.for_each_async(async_items([1, 2, 3]), action)

    assert calls == [([1, 2], 0), ([3], 1)]
    assert ends == [(3, 2)]


def test_batcher_repr():
    assert repr(Batcher(4, name="ingest")) == "Batcher(name='ingest', desired_length=4)"


# --- Configuration ---


def test_batcher_from_config_object():
    batcher = Batcher.from_config(Config({"batch": {"size": 50, "name": "ingest"}}))
    assert batcher.desired_length == 50
    assert batcher.name == "ingest"


def test_batcher_from_config_custom_key():
    config = Config({"jobs": {"export": {"size": 3}}})
    batcher = Batcher.from_config(config, key="jobs.export")
    assert batcher.desired_length == 3
    assert batcher.name == "Batcher"


def test_batcher_from_config_file(tmp_path):
    config_file = tmp_path / "config.yml"
    config_file.write_text("batch:\n  size: 2\n")

    batcher = Batcher.from_config(str(config_file))
    assert list(batcher.batch([1, 2, 3])) == [[1, 2], [3]]


def test_batcher_from_config_missing_size():
    with pytest.raises(InvalidArgumentError) as exc_info:
        Batcher.from_config(Config({"batch": {"name": "x"}}))
    assert exc_info.value.argument == "batch.size"


def test_batcher_from_config_invalid_size():
    with pytest.raises(InvalidArgumentError) as exc_info:
        Batcher.from_config(Config({"batch": {"size": 0}}))
    assert exc_info.value.argument == "batch.size"


def test_batcher_from_missing_file():
    with pytest.raises(InvalidArgumentError):
        Batcher.from_config("path/that/does/not/exist.yml")


# --- Failing actions ---


class ActionError(Exception):
    pass


def test_batcher_counts_failing_action_once():
    def action(batch, index):
        raise ActionError("rejected")

    batcher = Batcher(2)
    with pytest.raises(ActionError):
        batcher.for_each([1, 2, 3], action)
    assert batcher.metrics["errors"] == 1
    assert batcher.metrics["batches_out"] == 1


def test_batcher_counts_source_failure_once_in_for_each():
    def failing_source():
        yield 1
        raise RuntimeError("source failed")

    batcher = Batcher(1)
    with pytest.raises(RuntimeError):
        batcher.for_each(failing_source(), lambda batch, index: None)
    assert batcher.metrics["errors"] == 1


@pytest.mark.asyncio
async def test_batcher_for_each_async_counts_failing_action_and_closes_source():
    closed = []

    async def source():
        try:
            for i in range(10):
                yield i
        finally:
            closed.append(True)

    async def action(batch, index):
        raise ActionError("rejected")

    batcher = Batcher(3)
    with pytest.raises(ActionError):
        await batcher.for_each_async(source(), action)

    assert batcher.metrics["errors"] == 1
    assert closed == [True]

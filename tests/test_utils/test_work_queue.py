"""Tests for the closeable WorkQueue."""

import asyncio

import pytest

from thumbnailer.utils.work_queue import QueueClosedError, WorkQueue


class TestWorkQueue:
    """Tests for put/get/close semantics."""

    async def test_fifo_order(self):
        queue: WorkQueue[int] = WorkQueue()
        for value in range(5):
            await queue.put(value)

        assert [await queue.get() for _ in range(5)] == [0, 1, 2, 3, 4]

    async def test_buffered_items_are_delivered_after_close(self):
        queue: WorkQueue[str] = WorkQueue()
        await queue.put("a")
        await queue.put("b")
        await queue.close()

        assert [item async for item in queue] == ["a", "b"]
        assert queue.closed

    async def test_get_on_closed_empty_queue_raises(self):
        queue: WorkQueue[int] = WorkQueue()
        await queue.close()

        with pytest.raises(QueueClosedError):
            await queue.get()

    async def test_put_after_close_raises(self):
        queue: WorkQueue[int] = WorkQueue()
        await queue.close()

        with pytest.raises(QueueClosedError):
            await queue.put(1)

    async def test_close_is_idempotent(self):
        queue: WorkQueue[int] = WorkQueue()

        await queue.close()
        await queue.close()

        assert queue.closed

    async def test_close_wakes_waiting_consumers(self):
        queue: WorkQueue[int] = WorkQueue()
        consumers = [asyncio.create_task(queue.get()) for _ in range(3)]
        await asyncio.sleep(0)

        await queue.close()
        results = await asyncio.gather(*consumers, return_exceptions=True)

        assert all(isinstance(result, QueueClosedError) for result in results)

    async def test_each_item_goes_to_exactly_one_consumer(self):
        queue: WorkQueue[int] = WorkQueue()
        received: list[list[int]] = [[] for _ in range(4)]

        async def consume(index: int) -> None:
            async for item in queue:
                received[index].append(item)
                await asyncio.sleep(0)

        consumers = [asyncio.create_task(consume(index)) for index in range(4)]
        for value in range(100):
            await queue.put(value)
        await queue.close()
        await asyncio.gather(*consumers)

        delivered = sorted(item for items in received for item in items)
        assert delivered == list(range(100))

    async def test_bounded_put_waits_for_room(self):
        queue: WorkQueue[int] = WorkQueue(maxsize=1)
        await queue.put(1)

        blocked = asyncio.create_task(queue.put(2))
        await asyncio.sleep(0)
        assert not blocked.done()
        assert queue.qsize() == 1

        assert await queue.get() == 1
        await blocked
        assert await queue.get() == 2

    async def test_close_releases_blocked_producer(self):
        queue: WorkQueue[int] = WorkQueue(maxsize=1)
        await queue.put(1)
        blocked = asyncio.create_task(queue.put(2))
        await asyncio.sleep(0)

        await queue.close()

        with pytest.raises(QueueClosedError):
            await blocked

    def test_negative_maxsize_is_rejected(self):
        with pytest.raises(ValueError, match="maxsize"):
            WorkQueue(maxsize=-1)

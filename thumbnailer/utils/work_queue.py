"""Closeable FIFO work queue for asyncio workers.

A single producer puts items and then closes the queue; any number of
consumers get items until the queue is closed and drained. Closing is the
only termination signal, so consumers never need sentinel values or
timeouts:

    queue: WorkQueue[WorkItem] = WorkQueue()

    async def consumer():
        async for item in queue:  # ends once closed and empty
            ...

    for item in items:
        await queue.put(item)
    await queue.close()

Each item is handed to exactly one consumer.
"""

import asyncio
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueClosedError(Exception):
    """Raised by ``get`` on a closed, empty queue and by ``put`` after close."""

    pass


class WorkQueue(Generic[T]):
    """Multi-consumer FIFO channel with explicit close.

    Attributes:
        maxsize: Maximum number of buffered items (0 = unbounded)
    """

    def __init__(self, maxsize: int = 0):
        if maxsize < 0:
            raise ValueError(f"maxsize must be >= 0, got {maxsize}")
        self.maxsize = maxsize
        self._items: deque[T] = deque()
        self._closed = False
        self._condition = asyncio.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return len(self._items)

    def _full(self) -> bool:
        return self.maxsize > 0 and len(self._items) >= self.maxsize

    async def put(self, item: T) -> None:
        """Append an item, waiting for room when the queue is bounded.

        Raises:
            QueueClosedError: If the queue is (or becomes) closed.
        """
        async with self._condition:
            while not self._closed and self._full():
                await self._condition.wait()
            if self._closed:
                raise QueueClosedError("Cannot put on a closed queue")
            self._items.append(item)
            self._condition.notify_all()

    async def get(self) -> T:
        """Remove and return the oldest item, waiting while the queue is empty.

        Raises:
            QueueClosedError: Once the queue is closed and no items remain.
        """
        async with self._condition:
            while not self._items and not self._closed:
                await self._condition.wait()
            if not self._items:
                raise QueueClosedError("Queue is closed and drained")
            item = self._items.popleft()
            self._condition.notify_all()
            return item

    async def close(self) -> None:
        """Signal that no more items will be put. Idempotent.

        Items already buffered are still delivered to consumers.
        """
        async with self._condition:
            self._closed = True
            self._condition.notify_all()

    def __aiter__(self) -> "WorkQueue[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.get()
        except QueueClosedError:
            raise StopAsyncIteration from None

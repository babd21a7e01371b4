"""Remote queues and deques backed by a remote list.

The head of the queue is the head of the list.
"""

from __future__ import annotations

import queue
from collections.abc import Iterable, Iterator
from typing import Any

from live_object.core.types import BlockingDeque, BlockingQueue, Deque, Queue
from live_object.remote.base import RemoteObject


class RemoteQueue(RemoteObject, Queue):
    """Non-blocking FIFO queue."""

    def offer(self, value: Any) -> bool:
        self._store.rpush(self._conn, self._name, self._encode(value))
        return True

    def poll(self) -> Any:
        """Remove and return the head, or None when empty."""
        return self._decode(self._store.lpop(self._conn, self._name))

    def peek(self) -> Any:
        """Return the head without removing it, or None when empty."""
        return self._decode(self._store.lindex(self._conn, self._name, 0))

    def add_all(self, values: Iterable[Any]) -> None:
        encoded = [self._encode(v) for v in values]
        if encoded:
            self._store.rpush(self._conn, self._name, *encoded)

    def read_all(self) -> list[Any]:
        return list(self)

    def __len__(self) -> int:
        return int(self._store.llen(self._conn, self._name))

    def __iter__(self) -> Iterator[Any]:
        for raw in self._store.lrange(self._conn, self._name, 0, -1):
            yield self._decode(raw)

    def __bool__(self) -> bool:
        return len(self) > 0


class RemoteBlockingQueue(RemoteQueue, BlockingQueue):
    """FIFO queue with the ``queue.Queue`` put/get API.

    Unbounded, so put never blocks. get raises ``queue.Empty`` like the stdlib.
    """

    def put(self, item: Any, block: bool = True, timeout: float | None = None) -> None:
        self.offer(item)

    def put_nowait(self, item: Any) -> None:
        self.offer(item)

    def get(self, block: bool = True, timeout: float | None = None) -> Any:
        if not block or timeout == 0:
            data = self._store.lpop(self._conn, self._name)
        else:
            if timeout is not None and timeout < 0:
                raise ValueError("'timeout' must be a non-negative number")
            data = self._store.blpop(self._conn, self._name, timeout)
        if data is None:
            raise queue.Empty
        return self._decode(data)

    def get_nowait(self) -> Any:
        return self.get(block=False)

    def qsize(self) -> int:
        return len(self)

    def empty(self) -> bool:
        return len(self) == 0


class RemoteDeque(RemoteQueue, Deque):
    """Double-ended queue with the ``collections.deque`` method names.

    pop/popleft raise IndexError when empty.
    """

    def append(self, value: Any) -> None:
        self._store.rpush(self._conn, self._name, self._encode(value))

    def appendleft(self, value: Any) -> None:
        self._store.lpush(self._conn, self._name, self._encode(value))

    def extend(self, values: Iterable[Any]) -> None:
        self.add_all(values)

    def extendleft(self, values: Iterable[Any]) -> None:
        encoded = [self._encode(v) for v in values]
        if encoded:
            self._store.lpush(self._conn, self._name, *encoded)

    def pop(self) -> Any:
        data = self._store.rpop(self._conn, self._name)
        if data is None:
            raise IndexError("pop from an empty deque")
        return self._decode(data)

    def popleft(self) -> Any:
        data = self._store.lpop(self._conn, self._name)
        if data is None:
            raise IndexError("pop from an empty deque")
        return self._decode(data)

    def peek_first(self) -> Any:
        return self.peek()

    def peek_last(self) -> Any:
        return self._decode(self._store.lindex(self._conn, self._name, -1))

    def __getitem__(self, index: int) -> Any:
        data = self._store.lindex(self._conn, self._name, index)
        if data is None:
            raise IndexError("deque index out of range")
        return self._decode(data)


class RemoteBlockingDeque(RemoteDeque, RemoteBlockingQueue, BlockingDeque):
    """Deque whose consumers can wait at either end.

    take_first and take_last wait up to timeout seconds for an item and raise
    ``queue.Empty`` when none arrives. A timeout of 0 does not wait; None
    waits until an item arrives.
    """

    def take_first(self, timeout: float | None = None) -> Any:
        return self._take(self._store.lpop, self._store.blpop, timeout)

    def take_last(self, timeout: float | None = None) -> Any:
        return self._take(self._store.rpop, self._store.brpop, timeout)

    def _take(self, pop: Any, blocking_pop: Any, timeout: float | None) -> Any:
        if timeout == 0:
            data = pop(self._conn, self._name)
        else:
            if timeout is not None and timeout < 0:
                raise ValueError("'timeout' must be a non-negative number")
            data = blocking_pop(self._conn, self._name, timeout)
        if data is None:
            raise queue.Empty
        return self._decode(data)

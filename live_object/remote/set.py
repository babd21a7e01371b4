"""Remote sets: unordered (remote set) and sorted (remote list kept in order)."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator, MutableSet
from typing import Any

from live_object.core.types import SortedSet
from live_object.remote.base import RemoteObject


class RemoteSet(RemoteObject, MutableSet):  # type: ignore[type-arg]
    """Set stored as a remote set."""

    def __contains__(self, value: object) -> bool:
        return bool(self._store.sismember(self._conn, self._name, self._encode(value)))

    def __iter__(self) -> Iterator[Any]:
        for raw in self._store.smembers(self._conn, self._name):
            yield self._decode(raw)

    def __len__(self) -> int:
        return int(self._store.scard(self._conn, self._name))

    def add(self, value: Any) -> None:
        self._store.sadd(self._conn, self._name, self._encode(value))

    def discard(self, value: Any) -> None:
        self._store.srem(self._conn, self._name, self._encode(value))

    def add_all(self, values: Iterable[Any]) -> None:
        encoded = [self._encode(v) for v in values]
        if encoded:
            self._store.sadd(self._conn, self._name, *encoded)

    def read_all(self) -> set[Any]:
        return set(self)


class RemoteSortedSet(RemoteObject, SortedSet):
    """Set kept in natural order inside a remote list.

    Members must be mutually comparable. Insert position is computed client
    side, so concurrent writers can interleave.
    """

    def __contains__(self, value: object) -> bool:
        return value in self._items()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items())

    def __len__(self) -> int:
        return int(self._store.llen(self._conn, self._name))

    def add(self, value: Any) -> None:
        raw = list(self._store.lrange(self._conn, self._name, 0, -1))
        items = [self._decode(r) for r in raw]
        index = bisect.bisect_left(items, value)
        if index < len(items) and items[index] == value:
            return
        encoded = self._encode(value)
        if index == len(items):
            self._store.rpush(self._conn, self._name, encoded)
        else:
            # members are unique, so the pivot is unambiguous
            self._store.linsert(self._conn, self._name, True, raw[index], encoded)

    def discard(self, value: Any) -> None:
        raw = self._store.lrange(self._conn, self._name, 0, -1)
        for r in raw:
            if self._decode(r) == value:
                self._store.lrem(self._conn, self._name, 1, r)
                return

    def add_all(self, values: Iterable[Any]) -> None:
        for value in values:
            self.add(value)

    def first(self) -> Any:
        data = self._store.lindex(self._conn, self._name, 0)
        if data is None:
            raise KeyError("first(): sorted set is empty")
        return self._decode(data)

    def last(self) -> Any:
        data = self._store.lindex(self._conn, self._name, -1)
        if data is None:
            raise KeyError("last(): sorted set is empty")
        return self._decode(data)

    def read_all(self) -> list[Any]:
        return self._items()

    def _items(self) -> list[Any]:
        return [self._decode(r) for r in self._store.lrange(self._conn, self._name, 0, -1)]

"""Remote list-backed sequence."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence
from typing import Any

from live_object.remote.base import RemoteObject


class RemoteList(RemoteObject, MutableSequence):  # type: ignore[type-arg]
    """Sequence stored as a remote list.

    Appends and index reads are single commands. Middle inserts, deletes and
    slice assignment rewrite the whole list and are not atomic.
    """

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return [self._decode(raw) for raw in self._raw_items()][index]
        data = self._store.lindex(self._conn, self._name, index)
        if data is None:
            raise IndexError("list index out of range")
        return self._decode(data)

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            raw = self._raw_items()
            raw[index] = [self._encode(v) for v in value]
            self._rewrite(raw)
            return
        if not -len(self) <= index < len(self):
            raise IndexError("list assignment index out of range")
        self._store.lset(self._conn, self._name, index, self._encode(value))

    def __delitem__(self, index: Any) -> None:
        raw = self._raw_items()
        if not isinstance(index, slice) and not -len(raw) <= index < len(raw):
            raise IndexError("list assignment index out of range")
        del raw[index]
        self._rewrite(raw)

    def __len__(self) -> int:
        return int(self._store.llen(self._conn, self._name))

    def __iter__(self) -> Iterator[Any]:
        for raw in self._raw_items():
            yield self._decode(raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RemoteList):
            return self.name == other.name
        if isinstance(other, list):
            return list(self) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def insert(self, index: int, value: Any) -> None:
        size = len(self)
        if index >= size:
            self.append(value)
        elif index <= -size or index == 0:
            self._store.lpush(self._conn, self._name, self._encode(value))
        else:
            raw = self._raw_items()
            raw.insert(index, self._encode(value))
            self._rewrite(raw)

    def append(self, value: Any) -> None:
        self._store.rpush(self._conn, self._name, self._encode(value))

    def extend(self, values: Iterable[Any]) -> None:
        encoded = [self._encode(v) for v in values]
        if encoded:
            self._store.rpush(self._conn, self._name, *encoded)

    def add_all(self, values: Iterable[Any]) -> None:
        self.extend(values)

    def read_all(self) -> list[Any]:
        return list(self)

    def _raw_items(self) -> list[bytes]:
        return list(self._store.lrange(self._conn, self._name, 0, -1))

    def _rewrite(self, raw: list[bytes]) -> None:
        self._store.delete(self._conn, self._name)
        if raw:
            self._store.rpush(self._conn, self._name, *raw)

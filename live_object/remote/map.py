"""Remote hash-backed mapping."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from live_object.core.types import ConcurrentMapping
from live_object.remote.base import RemoteObject


class RemoteMap(RemoteObject, ConcurrentMapping):
    """Mapping stored as a remote hash. Also used as an entity's live map."""

    def __getitem__(self, key: Any) -> Any:
        data = self._store.hget(self._conn, self._name, self._encode_key(key))
        if data is None:
            raise KeyError(key)
        return self._decode(data)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.fast_put(key, value)

    def __delitem__(self, key: Any) -> None:
        if not self.fast_remove(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[Any]:
        for raw in self._store.hkeys(self._conn, self._name):
            yield self._decode_key(raw)

    def __len__(self) -> int:
        return int(self._store.hlen(self._conn, self._name))

    def __contains__(self, key: object) -> bool:
        return bool(self._store.hexists(self._conn, self._name, self._encode_key(key)))

    def get(self, key: Any, default: Any = None) -> Any:
        """Single round trip lookup; default when absent."""
        data = self._store.hget(self._conn, self._name, self._encode_key(key))
        if data is None:
            return default
        return self._decode(data)

    def fast_put(self, key: Any, value: Any) -> bool:
        """Unconditional overwrite. Returns True if the key is new."""
        return bool(
            self._store.hset(self._conn, self._name, self._encode_key(key), self._encode(value))
        )

    def fast_put_if_absent(self, key: Any, value: Any) -> bool:
        """Store only if the key is absent. Returns True if stored."""
        return bool(
            self._store.hsetnx(self._conn, self._name, self._encode_key(key), self._encode(value))
        )

    def fast_remove(self, *keys: Any) -> int:
        return int(self._store.hdel(self._conn, self._name, *(self._encode_key(k) for k in keys)))

    def put_all(self, entries: Mapping[Any, Any]) -> None:
        for key, value in entries.items():
            self.fast_put(key, value)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if self.fast_put_if_absent(key, default):
            return default
        return self[key]

    def read_all(self) -> dict[Any, Any]:
        """All entries in one round trip."""
        return {
            self._decode_key(k): self._decode(v)
            for k, v in self._store.hgetall(self._conn, self._name).items()
        }

"""In-process store adapter.

Implements the subset of Redis key, hash, list and set semantics used by the
remote objects: empty containers vanish, wrong-type access fails, and
blocking pops wait on a condition variable.
"""

from __future__ import annotations

import threading
from typing import Any

from live_object.core.client import StoreConfig
from live_object.core.exceptions import StoreOperationError


class MemoryStore:
    """Connection handle for the memory adapter: the data plus its lock."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.cond = threading.Condition()


def _container(store: MemoryStore, key: str, kind: type, create: bool = False) -> Any:
    """Return the container at key, checking its type. Caller holds the lock."""
    value = store.data.get(key)
    if value is None:
        if not create:
            return None
        value = kind()
        store.data[key] = value
    elif not isinstance(value, kind):
        raise StoreOperationError(
            f"WRONGTYPE key '{key}' holds a {type(value).__name__}, not a {kind.__name__}"
        )
    return value


def _drop_if_empty(store: MemoryStore, key: str) -> None:
    if key in store.data and not store.data[key]:
        del store.data[key]


class MemoryStoreAdapter:
    """Thread-safe in-memory adapter, mostly for tests and local development."""

    def connect(self, config: StoreConfig) -> MemoryStore:
        """Return the shared store from config.extra, or a fresh one."""
        store = config.extra.get("store")
        if store is not None:
            return store  # type: ignore[no-any-return]
        return MemoryStore()

    def close(self, conn: MemoryStore) -> None:
        """Nothing to release for an in-process store."""

    # --- Keys ---

    def exists(self, conn: MemoryStore, key: str) -> bool:
        with conn.cond:
            return key in conn.data

    def delete(self, conn: MemoryStore, *keys: str) -> int:
        with conn.cond:
            removed = 0
            for key in keys:
                if conn.data.pop(key, None) is not None:
                    removed += 1
            return removed

    def rename(self, conn: MemoryStore, src: str, dst: str) -> None:
        with conn.cond:
            if src not in conn.data:
                raise StoreOperationError(f"ERR no such key '{src}'")
            conn.data[dst] = conn.data.pop(src)
            conn.cond.notify_all()

    # --- Hashes ---

    def hget(self, conn: MemoryStore, key: str, field: bytes) -> bytes | None:
        with conn.cond:
            h = _container(conn, key, dict)
            return None if h is None else h.get(field)

    def hset(self, conn: MemoryStore, key: str, field: bytes, value: bytes) -> bool:
        with conn.cond:
            h = _container(conn, key, dict, create=True)
            is_new = field not in h
            h[field] = value
            return is_new

    def hsetnx(self, conn: MemoryStore, key: str, field: bytes, value: bytes) -> bool:
        with conn.cond:
            h = _container(conn, key, dict, create=True)
            if field in h:
                return False
            h[field] = value
            return True

    def hdel(self, conn: MemoryStore, key: str, *fields: bytes) -> int:
        with conn.cond:
            h = _container(conn, key, dict)
            if h is None:
                return 0
            removed = 0
            for field in fields:
                if h.pop(field, None) is not None:
                    removed += 1
            _drop_if_empty(conn, key)
            return removed

    def hgetall(self, conn: MemoryStore, key: str) -> dict[bytes, bytes]:
        with conn.cond:
            h = _container(conn, key, dict)
            return {} if h is None else dict(h)

    def hlen(self, conn: MemoryStore, key: str) -> int:
        with conn.cond:
            h = _container(conn, key, dict)
            return 0 if h is None else len(h)

    def hexists(self, conn: MemoryStore, key: str, field: bytes) -> bool:
        with conn.cond:
            h = _container(conn, key, dict)
            return h is not None and field in h

    def hkeys(self, conn: MemoryStore, key: str) -> list[bytes]:
        with conn.cond:
            h = _container(conn, key, dict)
            return [] if h is None else list(h)

    # --- Lists ---

    def rpush(self, conn: MemoryStore, key: str, *values: bytes) -> int:
        with conn.cond:
            lst = _container(conn, key, list, create=True)
            lst.extend(values)
            conn.cond.notify_all()
            return len(lst)

    def lpush(self, conn: MemoryStore, key: str, *values: bytes) -> int:
        with conn.cond:
            lst = _container(conn, key, list, create=True)
            for value in values:
                lst.insert(0, value)
            conn.cond.notify_all()
            return len(lst)

    def lpop(self, conn: MemoryStore, key: str) -> bytes | None:
        with conn.cond:
            return self._pop(conn, key, 0)

    def rpop(self, conn: MemoryStore, key: str) -> bytes | None:
        with conn.cond:
            return self._pop(conn, key, -1)

    def lrange(self, conn: MemoryStore, key: str, start: int, stop: int) -> list[bytes]:
        with conn.cond:
            lst = _container(conn, key, list)
            if lst is None:
                return []
            n = len(lst)
            if start < 0:
                start = max(n + start, 0)
            if stop < 0:
                stop = n + stop
            stop = min(stop, n - 1)
            if start > stop:
                return []
            return lst[start : stop + 1]

    def llen(self, conn: MemoryStore, key: str) -> int:
        with conn.cond:
            lst = _container(conn, key, list)
            return 0 if lst is None else len(lst)

    def lindex(self, conn: MemoryStore, key: str, index: int) -> bytes | None:
        with conn.cond:
            lst = _container(conn, key, list)
            if lst is None:
                return None
            try:
                return lst[index]  # type: ignore[no-any-return]
            except IndexError:
                return None

    def lset(self, conn: MemoryStore, key: str, index: int, value: bytes) -> None:
        with conn.cond:
            lst = _container(conn, key, list)
            if lst is None:
                raise StoreOperationError(f"ERR no such key '{key}'")
            try:
                lst[index] = value
            except IndexError:
                raise StoreOperationError("ERR index out of range") from None

    def lrem(self, conn: MemoryStore, key: str, count: int, value: bytes) -> int:
        with conn.cond:
            lst = _container(conn, key, list)
            if lst is None:
                return 0
            limit = abs(count) if count else len(lst)
            indexes = [i for i, item in enumerate(lst) if item == value]
            if count < 0:
                indexes.reverse()
            doomed = set(indexes[:limit])
            lst[:] = [item for i, item in enumerate(lst) if i not in doomed]
            _drop_if_empty(conn, key)
            return len(doomed)

    def linsert(
        self, conn: MemoryStore, key: str, before: bool, pivot: bytes, value: bytes
    ) -> int:
        with conn.cond:
            lst = _container(conn, key, list)
            if lst is None:
                return 0
            try:
                index = lst.index(pivot)
            except ValueError:
                return -1
            lst.insert(index if before else index + 1, value)
            conn.cond.notify_all()
            return len(lst)

    def blpop(self, conn: MemoryStore, key: str, timeout: float | None = None) -> bytes | None:
        return self._blocking_pop(conn, key, 0, timeout)

    def brpop(self, conn: MemoryStore, key: str, timeout: float | None = None) -> bytes | None:
        return self._blocking_pop(conn, key, -1, timeout)

    # --- Sets ---

    def sadd(self, conn: MemoryStore, key: str, *members: bytes) -> int:
        with conn.cond:
            s = _container(conn, key, set, create=True)
            before = len(s)
            s.update(members)
            return len(s) - before

    def srem(self, conn: MemoryStore, key: str, *members: bytes) -> int:
        with conn.cond:
            s = _container(conn, key, set)
            if s is None:
                return 0
            before = len(s)
            s.difference_update(members)
            removed = before - len(s)
            _drop_if_empty(conn, key)
            return removed

    def smembers(self, conn: MemoryStore, key: str) -> set[bytes]:
        with conn.cond:
            s = _container(conn, key, set)
            return set() if s is None else set(s)

    def scard(self, conn: MemoryStore, key: str) -> int:
        with conn.cond:
            s = _container(conn, key, set)
            return 0 if s is None else len(s)

    def sismember(self, conn: MemoryStore, key: str, member: bytes) -> bool:
        with conn.cond:
            s = _container(conn, key, set)
            return s is not None and member in s

    # --- Internals ---

    def _pop(self, conn: MemoryStore, key: str, index: int) -> bytes | None:
        lst = _container(conn, key, list)
        if not lst:
            return None
        value = lst.pop(index)
        _drop_if_empty(conn, key)
        return value  # type: ignore[no-any-return]

    def _blocking_pop(
        self, conn: MemoryStore, key: str, index: int, timeout: float | None
    ) -> bytes | None:
        with conn.cond:
            conn.cond.wait_for(lambda: bool(_container(conn, key, list)), timeout=timeout)
            return self._pop(conn, key, index)

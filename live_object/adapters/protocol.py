"""Store adapter protocol.

Every adapter module MUST implement this protocol. Remote objects only ever
talk to the store through these calls, so all adapters expose identical
public interfaces. Keys are strings, stored values are bytes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from live_object.core.client import StoreConfig


@runtime_checkable
class StoreAdapter(Protocol):
    """Synchronous key-value store adapter protocol."""

    def connect(self, config: StoreConfig) -> Any:
        """Open a connection handle."""
        ...

    def close(self, conn: Any) -> None:
        """Release the connection handle."""
        ...

    # --- Keys ---

    def exists(self, conn: Any, key: str) -> bool:
        """Return True if the key holds any value."""
        ...

    def delete(self, conn: Any, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        ...

    def rename(self, conn: Any, src: str, dst: str) -> None:
        """Rename a key, overwriting dst."""
        ...

    # --- Hashes ---

    def hget(self, conn: Any, key: str, field: bytes) -> bytes | None:
        ...

    def hset(self, conn: Any, key: str, field: bytes, value: bytes) -> bool:
        """Set a hash field. Returns True if the field is new."""
        ...

    def hsetnx(self, conn: Any, key: str, field: bytes, value: bytes) -> bool:
        """Set a hash field only if absent. Returns True if it was set."""
        ...

    def hdel(self, conn: Any, key: str, *fields: bytes) -> int:
        ...

    def hgetall(self, conn: Any, key: str) -> dict[bytes, bytes]:
        ...

    def hlen(self, conn: Any, key: str) -> int:
        ...

    def hexists(self, conn: Any, key: str, field: bytes) -> bool:
        ...

    def hkeys(self, conn: Any, key: str) -> list[bytes]:
        ...

    # --- Lists ---

    def rpush(self, conn: Any, key: str, *values: bytes) -> int:
        ...

    def lpush(self, conn: Any, key: str, *values: bytes) -> int:
        ...

    def lpop(self, conn: Any, key: str) -> bytes | None:
        ...

    def rpop(self, conn: Any, key: str) -> bytes | None:
        ...

    def lrange(self, conn: Any, key: str, start: int, stop: int) -> list[bytes]:
        """Inclusive range, negative indexes count from the end."""
        ...

    def llen(self, conn: Any, key: str) -> int:
        ...

    def lindex(self, conn: Any, key: str, index: int) -> bytes | None:
        ...

    def lset(self, conn: Any, key: str, index: int, value: bytes) -> None:
        ...

    def lrem(self, conn: Any, key: str, count: int, value: bytes) -> int:
        ...

    def linsert(self, conn: Any, key: str, before: bool, pivot: bytes, value: bytes) -> int:
        ...

    def blpop(self, conn: Any, key: str, timeout: float | None = None) -> bytes | None:
        """Pop from the head, waiting up to timeout seconds (0 does not wait, None waits forever)."""
        ...

    def brpop(self, conn: Any, key: str, timeout: float | None = None) -> bytes | None:
        """Pop from the tail, waiting up to timeout seconds (0 does not wait, None waits forever)."""
        ...

    # --- Sets ---

    def sadd(self, conn: Any, key: str, *members: bytes) -> int:
        ...

    def srem(self, conn: Any, key: str, *members: bytes) -> int:
        ...

    def smembers(self, conn: Any, key: str) -> set[bytes]:
        ...

    def scard(self, conn: Any, key: str) -> int:
        ...

    def sismember(self, conn: Any, key: str, member: bytes) -> bool:
        ...

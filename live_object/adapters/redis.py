"""Redis adapter using redis-py."""

from __future__ import annotations

from typing import Any

from live_object.core.client import StoreConfig
from live_object.core.exceptions import StoreConnectionError, StoreOperationError


class RedisStoreAdapter:
    """Synchronous Redis adapter using redis-py."""

    def connect(self, config: StoreConfig) -> Any:
        """Create a redis.Redis client from url or host/port/db."""
        import redis

        try:
            if config.url:
                client = redis.Redis.from_url(config.url, **config.extra)
            else:
                client = redis.Redis(
                    host=config.host,
                    port=config.port,
                    db=config.db,
                    password=config.password,
                    **config.extra,
                )
            client.ping()
        except redis.RedisError as e:
            raise StoreConnectionError(f"Cannot connect to Redis: {e}") from e
        return client

    def close(self, conn: Any) -> None:
        conn.close()

    # --- Keys ---

    def exists(self, conn: Any, key: str) -> bool:
        return bool(conn.exists(key))

    def delete(self, conn: Any, *keys: str) -> int:
        if not keys:
            return 0
        return int(conn.delete(*keys))

    def rename(self, conn: Any, src: str, dst: str) -> None:
        import redis

        try:
            conn.rename(src, dst)
        except redis.ResponseError as e:
            raise StoreOperationError(str(e)) from e

    # --- Hashes ---

    def hget(self, conn: Any, key: str, field: bytes) -> bytes | None:
        return conn.hget(key, field)  # type: ignore[no-any-return]

    def hset(self, conn: Any, key: str, field: bytes, value: bytes) -> bool:
        return bool(conn.hset(key, field, value))

    def hsetnx(self, conn: Any, key: str, field: bytes, value: bytes) -> bool:
        return bool(conn.hsetnx(key, field, value))

    def hdel(self, conn: Any, key: str, *fields: bytes) -> int:
        if not fields:
            return 0
        return int(conn.hdel(key, *fields))

    def hgetall(self, conn: Any, key: str) -> dict[bytes, bytes]:
        return dict(conn.hgetall(key))

    def hlen(self, conn: Any, key: str) -> int:
        return int(conn.hlen(key))

    def hexists(self, conn: Any, key: str, field: bytes) -> bool:
        return bool(conn.hexists(key, field))

    def hkeys(self, conn: Any, key: str) -> list[bytes]:
        return list(conn.hkeys(key))

    # --- Lists ---

    def rpush(self, conn: Any, key: str, *values: bytes) -> int:
        if not values:
            return self.llen(conn, key)
        return int(conn.rpush(key, *values))

    def lpush(self, conn: Any, key: str, *values: bytes) -> int:
        if not values:
            return self.llen(conn, key)
        return int(conn.lpush(key, *values))

    def lpop(self, conn: Any, key: str) -> bytes | None:
        return conn.lpop(key)  # type: ignore[no-any-return]

    def rpop(self, conn: Any, key: str) -> bytes | None:
        return conn.rpop(key)  # type: ignore[no-any-return]

    def lrange(self, conn: Any, key: str, start: int, stop: int) -> list[bytes]:
        return list(conn.lrange(key, start, stop))

    def llen(self, conn: Any, key: str) -> int:
        return int(conn.llen(key))

    def lindex(self, conn: Any, key: str, index: int) -> bytes | None:
        return conn.lindex(key, index)  # type: ignore[no-any-return]

    def lset(self, conn: Any, key: str, index: int, value: bytes) -> None:
        import redis

        try:
            conn.lset(key, index, value)
        except redis.ResponseError as e:
            raise StoreOperationError(str(e)) from e

    def lrem(self, conn: Any, key: str, count: int, value: bytes) -> int:
        return int(conn.lrem(key, count, value))

    def linsert(self, conn: Any, key: str, before: bool, pivot: bytes, value: bytes) -> int:
        where = "BEFORE" if before else "AFTER"
        return int(conn.linsert(key, where, pivot, value))

    def blpop(self, conn: Any, key: str, timeout: float | None = None) -> bytes | None:
        # BLPOP waits forever on 0
        if timeout == 0:
            return conn.lpop(key)
        result = conn.blpop([key], timeout=0 if timeout is None else timeout)
        return None if result is None else result[1]

    def brpop(self, conn: Any, key: str, timeout: float | None = None) -> bytes | None:
        if timeout == 0:
            return conn.rpop(key)
        result = conn.brpop([key], timeout=0 if timeout is None else timeout)
        return None if result is None else result[1]

    # --- Sets ---

    def sadd(self, conn: Any, key: str, *members: bytes) -> int:
        if not members:
            return 0
        return int(conn.sadd(key, *members))

    def srem(self, conn: Any, key: str, *members: bytes) -> int:
        if not members:
            return 0
        return int(conn.srem(key, *members))

    def smembers(self, conn: Any, key: str) -> set[bytes]:
        return set(conn.smembers(key))

    def scard(self, conn: Any, key: str) -> int:
        return int(conn.scard(key))

    def sismember(self, conn: Any, key: str, member: bytes) -> bool:
        return bool(conn.sismember(key, member))

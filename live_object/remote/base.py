"""Base class for remote-backed objects."""

from __future__ import annotations

from typing import Any

from live_object.core.reference import RemoteReference


class RemoteObject:
    """A structure living under one key of the store.

    Args:
        client: StoreClient the object talks through.
        name: Remote key name.
        codec: Codec for values (and hash keys).
    """

    def __init__(self, client: Any, name: str, codec: Any) -> None:
        self._client = client
        self._name = name
        self._codec = codec

    @property
    def name(self) -> str:
        return self._name

    @property
    def codec(self) -> Any:
        return self._codec

    @property
    def _store(self) -> Any:
        return self._client.adapter

    @property
    def _conn(self) -> Any:
        return self._client.connection

    def is_exists(self) -> bool:
        return bool(self._store.exists(self._conn, self._name))

    def delete(self) -> bool:
        return self._store.delete(self._conn, self._name) > 0

    def rename(self, new_name: str) -> None:
        self._store.rename(self._conn, self._name, new_name)
        self._name = new_name

    def _encode(self, value: Any) -> bytes:
        if isinstance(value, RemoteReference):
            return value.to_wire()
        return self._codec.encode(value)  # type: ignore[no-any-return]

    def _decode(self, data: bytes | None) -> Any:
        if data is None:
            return None
        if RemoteReference.is_wire(data):
            return RemoteReference.from_wire(data)
        return self._codec.decode(data)

    def _encode_key(self, key: Any) -> bytes:
        return self._codec.encode_key(key)  # type: ignore[no-any-return]

    def _decode_key(self, data: bytes) -> Any:
        return self._codec.decode_key(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

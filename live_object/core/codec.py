"""Value codecs and the codec registry.

A codec turns values into the bytes stored remotely and back. Hash keys and
identity values go through ``encode_key``/``decode_key`` so that naming stays
deterministic for a given codec.
"""

from __future__ import annotations

import logging
import pickle
import threading
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic_core import from_json, to_json

from live_object.core.exceptions import CodecConstructionError

if TYPE_CHECKING:
    from live_object.mapping.descriptor import EntityDescriptor

logger = logging.getLogger(__name__)


@runtime_checkable
class Codec(Protocol):
    """Value encode/decode strategy."""

    def encode(self, value: Any) -> bytes:
        ...

    def decode(self, data: bytes) -> Any:
        ...

    def encode_key(self, key: Any) -> bytes:
        ...

    def decode_key(self, data: bytes) -> Any:
        ...


class PickleCodec:
    """Default codec: any picklable value."""

    def encode(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def decode(self, data: bytes) -> Any:
        return pickle.loads(data)

    def encode_key(self, key: Any) -> bytes:
        return self.encode(key)

    def decode_key(self, data: bytes) -> Any:
        return self.decode(data)


class JsonCodec:
    """JSON codec backed by pydantic-core.

    Sets and tuples come back as lists; stick to JSON-shaped values.
    """

    def encode(self, value: Any) -> bytes:
        return to_json(value)

    def decode(self, data: bytes) -> Any:
        return from_json(data)

    def encode_key(self, key: Any) -> bytes:
        return self.encode(key)

    def decode_key(self, data: bytes) -> Any:
        return self.decode(data)


class StringCodec:
    """UTF-8 text codec."""

    def encode(self, value: Any) -> bytes:
        return str(value).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return data.decode("utf-8")

    def encode_key(self, key: Any) -> bytes:
        return self.encode(key)

    def decode_key(self, data: bytes) -> Any:
        return self.decode(data)


class CodecRegistry:
    """Shared codec instances, one per codec type."""

    def __init__(self) -> None:
        self._codecs: dict[type, Any] = {}
        self._lock = threading.Lock()

    def get_codec(self, codec_type: type) -> Any:
        """Return the shared instance of codec_type, constructing it once."""
        codec = self._codecs.get(codec_type)
        if codec is not None:
            return codec
        try:
            candidate = codec_type()
        except TypeError as e:
            raise CodecConstructionError(codec_type.__name__, str(e)) from e
        with self._lock:
            return self._codecs.setdefault(codec_type, candidate)

    def get_entity_codec(self, descriptor: EntityDescriptor) -> Any:
        """Entity-level default codec."""
        return self.get_codec(descriptor.codec)

    def get_field_codec(
        self,
        descriptor: EntityDescriptor,
        remote_type: type,
        field_name: str,
    ) -> Any:
        """Field override codec if declared, otherwise the entity default."""
        override = descriptor.field_codec(field_name)
        if override is not None:
            logger.debug(
                "Using %s for %s.%s (%s)",
                override.__name__,
                descriptor.entity_name,
                field_name,
                remote_type.__name__,
            )
            return self.get_codec(override)
        return self.get_entity_codec(descriptor)

    def register_codec(self, codec_type: type, owner: Any, codec: Any) -> None:
        """Seed the shared instance of codec_type with the codec owner was built with.

        An instance already registered for codec_type is kept.
        """
        with self._lock:
            registered = self._codecs.setdefault(codec_type, codec)
        if registered is not codec:
            logger.debug(
                "%s already registered, %s keeps its own instance", codec_type.__name__, owner.name
            )

    def __len__(self) -> int:
        return len(self._codecs)

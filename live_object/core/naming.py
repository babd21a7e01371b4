"""Naming schemes.

A naming scheme deterministically derives remote key names from an entity
type, its identity and, for field structures, the field name. Schemes are
constructed with the codec used to encode identity values.
"""

from __future__ import annotations

import hashlib
import logging
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping, Set
from typing import Any

from live_object.core.exceptions import NamingSchemeConstructionError

logger = logging.getLogger(__name__)


def _class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class NamingScheme(ABC):
    """Base class for naming schemes. Subclasses take the codec as sole argument."""

    def __init__(self, codec: Any) -> None:
        self.codec = codec

    @abstractmethod
    def get_name(
        self,
        entity_type: type,
        id_field_type: Any,
        id_field_name: str,
        id_value: Any,
    ) -> str:
        """Name of the live map holding an entity's fields."""

    @abstractmethod
    def resolve_id(self, name: str) -> Any:
        """Inverse of get_name: the identity value encoded in a live map name."""

    @abstractmethod
    def get_field_reference_name(
        self,
        entity_type: type,
        id_value: Any,
        remote_type: type,
        field_name: str,
        seed: Any,
    ) -> str:
        """Name of the remote structure backing one field of an entity."""


class DefaultNamingScheme(NamingScheme):
    """Hex-encoded identity inside braces, so one entity's keys share a hash slot.

        live_object:{<id>}:<module.Entity>
        live_object_field:{<id>}:<module.Entity>:<field>:<RemoteType>

    The seed is ignored.
    """

    PREFIX = "live_object"
    FIELD_PREFIX = "live_object_field"

    def get_name(
        self,
        entity_type: type,
        id_field_type: Any,
        id_field_name: str,
        id_value: Any,
    ) -> str:
        return f"{self.PREFIX}:{{{self._encode_id(id_value)}}}:{_class_name(entity_type)}"

    def resolve_id(self, name: str) -> Any:
        start = name.index("{") + 1
        end = name.index("}", start)
        return self.codec.decode_key(bytes.fromhex(name[start:end]))

    def get_field_reference_name(
        self,
        entity_type: type,
        id_value: Any,
        remote_type: type,
        field_name: str,
        seed: Any,
    ) -> str:
        return (
            f"{self.FIELD_PREFIX}:{{{self._encode_id(id_value)}}}:"
            f"{_class_name(entity_type)}:{field_name}:{remote_type.__name__}"
        )

    def _encode_id(self, id_value: Any) -> str:
        return bytes(self.codec.encode_key(id_value)).hex()


class ContentNamingScheme(DefaultNamingScheme):
    """Like DefaultNamingScheme, but appends a digest of the seed when given.

    Assigning different local collections to a field then lands them on
    different remote keys.
    """

    def get_field_reference_name(
        self,
        entity_type: type,
        id_value: Any,
        remote_type: type,
        field_name: str,
        seed: Any,
    ) -> str:
        name = super().get_field_reference_name(
            entity_type, id_value, remote_type, field_name, seed
        )
        if seed is None:
            return name
        return f"{name}:{self._digest(seed)}"

    def _digest(self, seed: Any) -> str:
        if isinstance(seed, Mapping):
            items = list(seed.items())
        elif isinstance(seed, queue.Queue):
            items = list(seed.queue)
        else:
            items = list(seed)
        encoded = [self.codec.encode(item) for item in items]
        # unordered containers must not depend on iteration order
        if isinstance(seed, (Set, Mapping)):
            encoded.sort()
        h = hashlib.sha256()
        for chunk in encoded:
            h.update(chunk)
            h.update(b"|")
        return h.hexdigest()


def build_naming_scheme(scheme_type: type, codec: Any) -> NamingScheme:
    """Construct a naming scheme from its type and a codec."""
    try:
        scheme = scheme_type(codec)
    except TypeError as e:
        raise NamingSchemeConstructionError(scheme_type.__name__, str(e)) from e
    if not isinstance(scheme, NamingScheme):
        raise NamingSchemeConstructionError(scheme_type.__name__, "not a NamingScheme")
    return scheme


class NamingSchemeCache:
    """Naming schemes keyed by (entity type, field name).

    The first scheme stored for a key wins; later lookups return it no matter
    which codec they pass in. Concurrent first lookups may each build a
    scheme, only one is kept.
    """

    def __init__(self) -> None:
        self._schemes: dict[tuple[type, str], NamingScheme] = {}
        self._lock = threading.Lock()

    def get(self, scheme_type: type, entity_type: type, field_name: str, codec: Any) -> NamingScheme:
        key = (entity_type, field_name)
        scheme = self._schemes.get(key)
        if scheme is not None:
            return scheme
        candidate = build_naming_scheme(scheme_type, codec)
        with self._lock:
            scheme = self._schemes.setdefault(key, candidate)
        if scheme is candidate:
            logger.debug(
                "Cached %s for %s.%s", scheme_type.__name__, entity_type.__name__, field_name
            )
        return scheme

    def __len__(self) -> int:
        return len(self._schemes)

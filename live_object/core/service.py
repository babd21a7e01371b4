"""Live object service.

The service registers entity types (one interceptor and one proxy class per
type) and hands out live objects bound to identities.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, TypeVar

from live_object.core.classifier import setter_name
from live_object.core.client import StoreClient, StoreConfig
from live_object.core.codec import CodecRegistry
from live_object.core.enums import MaterializationPolicy
from live_object.core.exceptions import (
    EntityExistsError,
    EntityNotRegisteredError,
    IdentityFieldError,
)
from live_object.core.factory import ObjectFactory
from live_object.core.interceptor import AccessorInterceptor, is_live_object
from live_object.core.naming import build_naming_scheme
from live_object.core.proxy import build_proxy_class, check_identity, new_live_object
from live_object.core.reference import RemoteReference
from live_object.mapping.descriptor import EntityDescriptor
from live_object.remote.map import RemoteMap

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Registration:
    descriptor: EntityDescriptor
    interceptor: AccessorInterceptor
    proxy_class: type


class LiveObjectService:
    """Entry point for working with live objects.

    Args:
        client: StoreClient all live maps and field structures live in.
        codec_registry: Shared codec registry; a fresh one by default.
        materialization: Write policy for lazily created field structures.
    """

    def __init__(
        self,
        client: StoreClient,
        *,
        codec_registry: CodecRegistry | None = None,
        materialization: MaterializationPolicy = MaterializationPolicy.LAST_WRITE_WINS,
    ) -> None:
        self._client = client
        self._codec_registry = codec_registry or CodecRegistry()
        self._factory = ObjectFactory(self._codec_registry, self._resolve_entity)
        self._materialization = materialization
        self._registrations: dict[type, _Registration] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: StoreConfig, **kwargs: Any) -> LiveObjectService:
        """Create a service from a StoreConfig.

        Args:
            config: StoreConfig instance
            **kwargs: Passed through to the constructor.

        Returns:
            LiveObjectService instance
        """
        return cls(StoreClient(config), **kwargs)

    @property
    def client(self) -> StoreClient:
        return self._client

    @property
    def codec_registry(self) -> CodecRegistry:
        return self._codec_registry

    # --- Registration ---

    def register(self, descriptor: EntityDescriptor) -> type:
        """Register an entity type and return its proxy class.

        Registering a type twice returns the first proxy class.
        """
        existing = self._registrations.get(descriptor.entity_type)
        if existing is not None:
            return existing.proxy_class
        with self._lock:
            existing = self._registrations.get(descriptor.entity_type)
            if existing is not None:
                return existing.proxy_class
            interceptor = AccessorInterceptor(
                self._client,
                descriptor,
                self._codec_registry,
                self._factory,
                self._materialization,
            )
            proxy_class = build_proxy_class(descriptor, interceptor, self)
            self._registrations[descriptor.entity_type] = _Registration(
                descriptor, interceptor, proxy_class
            )
        logger.debug("Registered live entity %s", descriptor.entity_name)
        return proxy_class

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self._registrations

    def descriptor(self, entity_type: type) -> EntityDescriptor:
        return self._registration(entity_type).descriptor

    def proxy_class(self, entity_type: type) -> type:
        return self._registration(entity_type).proxy_class

    # --- Live objects ---

    def live_map(self, descriptor: EntityDescriptor, identity: Any) -> RemoteMap:
        """The RemoteMap holding the fields of one entity instance."""
        codec = self._codec_registry.get_entity_codec(descriptor)
        scheme = build_naming_scheme(descriptor.naming_scheme, codec)
        name = scheme.get_name(
            descriptor.entity_type, descriptor.id_type, descriptor.id_field, identity
        )
        return RemoteMap(self._client, name, codec)

    def attach(self, entity_type: type[T], identity: Any) -> T:
        """Live object for identity. Does not touch the store."""
        check_identity(identity)
        registration = self._registration(entity_type)
        live_map = self.live_map(registration.descriptor, identity)
        return new_live_object(registration.proxy_class, identity, live_map)  # type: ignore[no-any-return]

    def get(self, entity_type: type[T], identity: Any) -> T | None:
        """Live object for identity, or None if it was never stored."""
        obj = self.attach(entity_type, identity)
        return obj if obj.is_exists() else None  # type: ignore[attr-defined]

    def get_or_create(self, entity_type: type[T], identity: Any) -> T:
        """Live object for identity, storing it first if needed."""
        obj = self.attach(entity_type, identity)
        descriptor = self.descriptor(entity_type)
        obj.get_live_object_live_map().fast_put_if_absent(descriptor.id_field, identity)  # type: ignore[attr-defined]
        return obj

    def persist(self, detached: T) -> T:
        """Store a plain (detached) entity instance and return its live object.

        Fields that are unset or None are skipped.

        Raises:
            EntityExistsError: If an entity with the same identity is stored.
        """
        entity_type = type(detached)
        descriptor = self.descriptor(entity_type)
        try:
            identity = getattr(detached, descriptor.id_field)
        except AttributeError:
            raise IdentityFieldError(descriptor.entity_name, "identity is not set") from None
        obj = self.attach(entity_type, identity)
        live_map = obj.get_live_object_live_map()  # type: ignore[attr-defined]
        if not live_map.fast_put_if_absent(descriptor.id_field, identity):
            raise EntityExistsError(descriptor.entity_name, identity)

        for name in descriptor.field_names:
            value = getattr(detached, name, None)
            if value is not None:
                getattr(obj, setter_name(name))(value)
        logger.debug("Persisted %s %r", descriptor.entity_name, identity)
        return obj

    def delete(self, target: Any, identity: Any = None) -> bool:
        """Delete a live object, or the entity of type target with identity."""
        if is_live_object(target):
            return bool(target.delete())
        descriptor = self.descriptor(target)
        return self.live_map(descriptor, identity).delete()

    def is_exists(self, obj: Any) -> bool:
        return bool(obj.is_exists())

    @staticmethod
    def is_live_object(obj: Any) -> bool:
        return is_live_object(obj)

    def close(self) -> None:
        self._client.close()

    # --- Internals ---

    def _registration(self, entity_type: type) -> _Registration:
        registration = self._registrations.get(entity_type)
        if registration is None:
            # proxy classes resolve to their entity type
            descriptor = getattr(entity_type, "__live_object_descriptor__", None)
            if descriptor is not None:
                registration = self._registrations.get(descriptor.entity_type)
        if registration is None:
            raise EntityNotRegisteredError(getattr(entity_type, "__name__", repr(entity_type)))
        return registration

    def _resolve_entity(self, reference: RemoteReference) -> Any:
        descriptor = self.descriptor(reference.type)
        codec_type = reference.codec_type or descriptor.codec
        codec = self._codec_registry.get_codec(codec_type)
        scheme = build_naming_scheme(descriptor.naming_scheme, codec)
        return self.attach(reference.type, scheme.resolve_id(reference.name))

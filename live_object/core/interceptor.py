"""Accessor interceptor.

One interceptor exists per entity type and is shared by all of its
instances, across threads. Each intercepted accessor call is classified and
then served from the entity's live map: plain values are stored as they are,
remote structures and other entities are stored as RemoteReferences and
materialized on read.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from live_object.core.capability import get_mapped_type, is_local_collection, local_items
from live_object.core.classifier import (
    FieldGet,
    FieldSet,
    IdentityGet,
    IdentitySet,
    classify,
)
from live_object.core.codec import CodecRegistry
from live_object.core.enums import MaterializationPolicy, TransformationMode
from live_object.core.factory import ObjectFactory
from live_object.core.naming import NamingSchemeCache, build_naming_scheme
from live_object.core.reference import RemoteReference
from live_object.mapping.descriptor import EntityDescriptor
from live_object.remote.base import RemoteObject

logger = logging.getLogger(__name__)


def is_live_object(value: Any) -> bool:
    """True for instances of generated live object proxy classes."""
    return getattr(type(value), "__live_object_descriptor__", None) is not None


class AccessorInterceptor:
    """Serves accessor calls of one entity type from its live maps.

    Args:
        client: StoreClient remote objects are created against.
        descriptor: Descriptor of the intercepted entity type.
        codec_registry: Shared codec instances.
        factory: Creates and dereferences remote objects.
        materialization: How a lazily created field reference is written.
    """

    def __init__(
        self,
        client: Any,
        descriptor: EntityDescriptor,
        codec_registry: CodecRegistry,
        factory: ObjectFactory,
        materialization: MaterializationPolicy = MaterializationPolicy.LAST_WRITE_WINS,
    ) -> None:
        self._client = client
        self._descriptor = descriptor
        self._codec_registry = codec_registry
        self._factory = factory
        self._materialization = materialization
        self._naming_schemes = NamingSchemeCache()

    @property
    def descriptor(self) -> EntityDescriptor:
        return self._descriptor

    def intercept(
        self,
        method: str | Callable[..., Any],
        original: Callable[..., Any] | None,
        args: tuple[Any, ...],
        instance: Any,
        live_map: Any,
    ) -> Any:
        """Handle one accessor call.

        Args:
            method: Name of the called method, or the method itself.
            original: The non-intercepted method body, for passthrough calls.
            args: Positional call arguments.
            instance: The live object the call was made on.
            live_map: The instance's backing RemoteMap.
        """
        method_name = method if isinstance(method, str) else method.__name__
        op = classify(method_name, args, self._descriptor)

        if isinstance(op, IdentityGet):
            return instance.get_live_object_id()
        if isinstance(op, IdentitySet):
            instance.set_live_object_id(op.value)
            return None
        if isinstance(op, FieldGet):
            return self._read(op.name, instance, live_map)
        if isinstance(op, FieldSet):
            return self._write(op.name, op.value, instance, live_map)

        if original is None:
            raise AttributeError(
                f"'{self._descriptor.entity_name}' object has no method '{method_name}'"
            )
        return original(*args)

    # --- Read path ---

    def _read(self, field_name: str, instance: Any, live_map: Any) -> Any:
        declared = self._descriptor.field_type(field_name)
        result = live_map.get(field_name)
        if result is None:
            remote_type = get_mapped_type(declared)
            if remote_type is None:
                return None
            return self._materialize(field_name, remote_type, instance, live_map)
        if isinstance(result, RemoteReference):
            return self._factory.from_reference(self._client, result, declared)
        return result

    def _materialize(
        self, field_name: str, remote_type: type, instance: Any, live_map: Any
    ) -> Any:
        obj = self._create_field_object(field_name, remote_type, instance, None)
        self._codec_registry.register_codec(type(obj.codec), obj, obj.codec)
        reference = RemoteReference(type(obj), obj.name, type(obj.codec))

        if self._materialization is MaterializationPolicy.FIRST_WRITE_WINS:
            if not live_map.fast_put_if_absent(field_name, reference):
                winner = live_map.get(field_name)
                logger.debug(
                    "Lost materialization race for %s.%s, using %r",
                    self._descriptor.entity_name,
                    field_name,
                    winner,
                )
                if isinstance(winner, RemoteReference):
                    return self._factory.from_reference(
                        self._client, winner, self._descriptor.field_type(field_name)
                    )
                return winner
        else:
            live_map.fast_put(field_name, reference)

        logger.debug(
            "Materialized %s.%s as %s '%s'",
            self._descriptor.entity_name,
            field_name,
            remote_type.__name__,
            obj.name,
        )
        return obj

    # --- Write path ---

    def _write(self, field_name: str, value: Any, instance: Any, live_map: Any) -> Any:
        if is_live_object(value):
            live_map.fast_put(field_name, self._entity_reference(value))
            return instance

        arg = value
        if (
            is_local_collection(arg)
            and self._descriptor.transformation is TransformationMode.ANNOTATION_BASED
        ):
            remote_type = get_mapped_type(type(arg))
            if remote_type is not None:
                obj = self._create_field_object(field_name, remote_type, instance, arg)
                self._replace_contents(obj, arg)
                logger.debug(
                    "Converted local %s in %s.%s to %s '%s'",
                    type(arg).__name__,
                    self._descriptor.entity_name,
                    field_name,
                    remote_type.__name__,
                    obj.name,
                )
                arg = obj

        if isinstance(arg, RemoteObject):
            codec = arg.codec
            self._codec_registry.register_codec(type(codec), arg, codec)
            live_map.fast_put(field_name, RemoteReference(type(arg), arg.name, type(codec)))
            return instance

        live_map.fast_put(field_name, value)
        return instance

    def _replace_contents(self, obj: Any, value: Any) -> None:
        """Make obj hold exactly the items of the local collection value.

        Items are copied into a staging key that is renamed over obj, so a
        copy that fails part way leaves obj's previous contents in place.
        """
        staging = self._factory.create(
            self._client, type(obj), f"{obj.name}:staging:{uuid.uuid4().hex}", obj.codec
        )
        try:
            if isinstance(value, Mapping):
                staging.put_all(value)
            else:
                staging.add_all(local_items(value))
        except Exception:
            staging.delete()
            raise
        if staging.is_exists():
            staging.rename(obj.name)
        else:
            obj.delete()

    def _entity_reference(self, value: Any) -> RemoteReference:
        """Reference to another live object, named by its own naming scheme."""
        descriptor: EntityDescriptor = type(value).__live_object_descriptor__
        codec = self._codec_registry.get_entity_codec(descriptor)
        scheme = build_naming_scheme(descriptor.naming_scheme, codec)
        name = scheme.get_name(
            descriptor.entity_type,
            descriptor.id_type,
            descriptor.id_field,
            value.get_live_object_id(),
        )
        return RemoteReference(descriptor.entity_type, name, descriptor.codec)

    # --- Identity change ---

    def rebind_fields(self, old_identity: Any, new_identity: Any, live_map: Any) -> None:
        """Move field structures named after old_identity to new_identity's names.

        Called after live_map has been renamed to the new identity. Only
        structures whose names this entity's naming scheme derived from
        old_identity move; shared structures assigned to a field keep their
        names.
        """
        entity_type = self._descriptor.entity_type
        for field_name, value in live_map.read_all().items():
            if not (
                isinstance(value, RemoteReference)
                and issubclass(value.type, RemoteObject)
                and self._descriptor.has_field(field_name)
            ):
                continue
            codec = self._codec_registry.get_field_codec(self._descriptor, value.type, field_name)
            scheme = self._naming_schemes.get(
                self._descriptor.naming_scheme, entity_type, field_name, codec
            )
            old_name = scheme.get_field_reference_name(
                entity_type, old_identity, value.type, field_name, None
            )
            if value.name != old_name and not value.name.startswith(old_name + ":"):
                continue
            new_name = (
                scheme.get_field_reference_name(
                    entity_type, new_identity, value.type, field_name, None
                )
                + value.name[len(old_name):]
            )
            obj = self._factory.create(self._client, value.type, value.name, codec)
            if obj.is_exists():
                obj.rename(new_name)
            live_map.fast_put(field_name, RemoteReference(value.type, new_name, value.codec_type))
            logger.debug(
                "Moved %s.%s from '%s' to '%s'",
                self._descriptor.entity_name,
                field_name,
                value.name,
                new_name,
            )

    # --- Naming / codecs ---

    def _create_field_object(
        self, field_name: str, remote_type: type, instance: Any, seed: Any
    ) -> Any:
        codec = self._codec_registry.get_field_codec(self._descriptor, remote_type, field_name)
        scheme = self._naming_schemes.get(
            self._descriptor.naming_scheme, self._descriptor.entity_type, field_name, codec
        )
        name = scheme.get_field_reference_name(
            self._descriptor.entity_type,
            instance.get_live_object_id(),
            remote_type,
            field_name,
            seed,
        )
        return self._factory.create(self._client, remote_type, name, codec)

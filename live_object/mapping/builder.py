"""Entity descriptor DSL builder.

Provides a fluent builder for declaring how an entity type is stored.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any

from live_object.core.capability import unwrap_type
from live_object.core.codec import Codec, PickleCodec
from live_object.core.enums import TransformationMode
from live_object.core.exceptions import DescriptorCompilationError, IdentityFieldError
from live_object.core.naming import DefaultNamingScheme, NamingScheme
from live_object.mapping.descriptor import EntityDescriptor

_UNSUPPORTED_ID_TYPES = (list, set, frozenset, dict, bytearray)


def _get_field_types(cls: type) -> dict[str, Any]:
    """Extract annotated fields from a class (dataclass, Pydantic, or plain)."""
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return {name: f.annotation for name, f in cls.model_fields.items()}

    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = dict(getattr(cls, "__annotations__", {}))

    # Dataclass: keep declared field order, skip ClassVar and InitVar pseudo-fields
    if dataclasses.is_dataclass(cls):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}

    return {
        name: hint
        for name, hint in hints.items()
        if not name.startswith("_") and typing.get_origin(hint) is not typing.ClassVar
    }


def entity(entity_class: type) -> EntityDescriptorBuilder:
    """Entry point for the entity descriptor DSL.

    Args:
        entity_class: The class whose instances become live objects.

    Returns:
        A builder for chaining descriptor declarations.
    """
    return EntityDescriptorBuilder(entity_class)


class EntityDescriptorBuilder:
    """Fluent builder for entity descriptors."""

    def __init__(self, entity_class: type) -> None:
        self._entity_class = entity_class
        self._key_field: str | None = None
        self._fields: dict[str, Any] = {}
        self._auto_fields_enabled = False
        self._transformation = TransformationMode.ANNOTATION_BASED
        self._naming_scheme: type = DefaultNamingScheme
        self._codec: type = PickleCodec
        self._field_codecs: dict[str, type] = {}

    def key(self, field_name: str) -> EntityDescriptorBuilder:
        """Set the identity field."""
        self._key_field = field_name
        return self

    def auto_fields(self) -> EntityDescriptorBuilder:
        """Declare every annotated field of the entity class."""
        self._auto_fields_enabled = True
        return self

    def field(self, name: str, declared_type: Any = Any) -> EntityDescriptorBuilder:
        """Explicitly declare a single field and its type."""
        self._fields[name] = declared_type
        return self

    def transformation(self, mode: TransformationMode) -> EntityDescriptorBuilder:
        """Choose how assigned local collections are stored."""
        self._transformation = mode
        return self

    def naming_scheme(self, scheme_type: type) -> EntityDescriptorBuilder:
        """Use a NamingScheme subclass other than DefaultNamingScheme."""
        self._naming_scheme = scheme_type
        return self

    def codec(self, codec_type: type) -> EntityDescriptorBuilder:
        """Set the entity-level default codec type."""
        self._codec = codec_type
        return self

    def field_codec(self, name: str, codec_type: type) -> EntityDescriptorBuilder:
        """Override the codec for one field's remote structure."""
        self._field_codecs[name] = codec_type
        return self

    def build(self) -> EntityDescriptor:
        """Compile and validate the declarations into an EntityDescriptor."""
        name = self._entity_class.__name__

        fields: dict[str, Any] = {}
        if self._auto_fields_enabled:
            fields.update(_get_field_types(self._entity_class))
        fields.update(self._fields)

        # Validate identity field
        if self._key_field is None:
            raise IdentityFieldError(name, "no identity field set via .key()")
        if self._key_field not in fields:
            raise IdentityFieldError(name, f"'{self._key_field}' is not a declared field")
        id_cls = unwrap_type(fields[self._key_field])
        if id_cls is not None and issubclass(id_cls, _UNSUPPORTED_ID_TYPES):
            raise IdentityFieldError(name, f"unsupported identity type {id_cls.__name__}")

        for field_name, codec_type in self._field_codecs.items():
            if field_name not in fields:
                raise DescriptorCompilationError(
                    f"Codec override for undeclared field '{field_name}' on {name}"
                )
            _check_codec(codec_type)
        _check_codec(self._codec)

        if not (isinstance(self._naming_scheme, type) and issubclass(self._naming_scheme, NamingScheme)):
            raise DescriptorCompilationError(
                f"Naming scheme for {name} must be a NamingScheme subclass"
            )

        return EntityDescriptor(
            entity_type=self._entity_class,
            id_field=self._key_field,
            fields=fields,
            transformation=self._transformation,
            naming_scheme=self._naming_scheme,
            codec=self._codec,
            field_codecs=dict(self._field_codecs),
        )


def _check_codec(codec_type: type) -> None:
    if not isinstance(codec_type, type) or not issubclass(codec_type, Codec):
        raise DescriptorCompilationError(f"{codec_type!r} is not a Codec type")

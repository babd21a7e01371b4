"""Entity descriptor data class.

Frozen description of how one entity type maps onto the store. Built once
per entity type by the builder DSL and read, never mutated, afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from live_object.core.codec import PickleCodec
from live_object.core.enums import TransformationMode
from live_object.core.exceptions import FieldNotFoundError
from live_object.core.naming import DefaultNamingScheme


@dataclass(frozen=True)
class EntityDescriptor:
    """Compiled, validated entity mapping."""

    entity_type: type
    id_field: str
    fields: dict[str, Any]  # field name -> declared type, identity included
    transformation: TransformationMode = TransformationMode.ANNOTATION_BASED
    naming_scheme: type = DefaultNamingScheme
    codec: type = PickleCodec
    field_codecs: dict[str, type] = field(default_factory=dict)

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    @property
    def id_type(self) -> Any:
        return self.fields[self.id_field]

    @property
    def field_names(self) -> list[str]:
        """Declared non-identity fields, in declaration order."""
        return [name for name in self.fields if name != self.id_field]

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def field_type(self, name: str) -> Any:
        try:
            return self.fields[name]
        except KeyError:
            raise FieldNotFoundError(self.entity_name, name) from None

    def field_codec(self, name: str) -> type | None:
        """Codec override declared for a field, if any."""
        if name not in self.fields:
            raise FieldNotFoundError(self.entity_name, name)
        return self.field_codecs.get(name)

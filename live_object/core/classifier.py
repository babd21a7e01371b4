"""Accessor call classification.

Every intercepted call maps to exactly one operation. Accessors follow the
``get_<field>`` / ``set_<field>`` convention; the identity field is checked
before ordinary fields, and anything else passes through to the original
method.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from live_object.mapping.descriptor import EntityDescriptor

GETTER_PREFIX = "get_"
SETTER_PREFIX = "set_"


def getter_name(field_name: str) -> str:
    return GETTER_PREFIX + field_name


def setter_name(field_name: str) -> str:
    return SETTER_PREFIX + field_name


@dataclass(frozen=True)
class IdentityGet:
    pass


@dataclass(frozen=True)
class IdentitySet:
    value: Any


@dataclass(frozen=True)
class FieldGet:
    name: str


@dataclass(frozen=True)
class FieldSet:
    name: str
    value: Any


@dataclass(frozen=True)
class Passthrough:
    pass


Operation = IdentityGet | IdentitySet | FieldGet | FieldSet | Passthrough


def classify(method_name: str, args: tuple[Any, ...], descriptor: EntityDescriptor) -> Operation:
    """Classify an intercepted call on an instance of descriptor's entity."""
    if method_name.startswith(GETTER_PREFIX) and not args:
        field_name = method_name[len(GETTER_PREFIX) :]
        if field_name == descriptor.id_field:
            return IdentityGet()
        if descriptor.has_field(field_name):
            return FieldGet(field_name)
    elif method_name.startswith(SETTER_PREFIX) and len(args) == 1:
        field_name = method_name[len(SETTER_PREFIX) :]
        if field_name == descriptor.id_field:
            return IdentitySet(args[0])
        if descriptor.has_field(field_name):
            return FieldSet(field_name, args[0])
    return Passthrough()

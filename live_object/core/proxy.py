"""Live object proxy classes.

A proxy class subclasses the user's entity class. Every accessor and every
other public method of the entity is routed through the entity type's
AccessorInterceptor; each declared field also becomes a property, so plain
attribute access reads and writes the store as well.
"""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Callable
from typing import Any, ClassVar

from live_object.core.classifier import getter_name, setter_name
from live_object.core.exceptions import UnsupportedIdentityError

_UNSUPPORTED_IDENTITIES = (list, set, frozenset, dict, bytearray)


def check_identity(identity: Any) -> None:
    """Reject identity values that cannot name a live map."""
    if identity is None or isinstance(identity, _UNSUPPORTED_IDENTITIES):
        raise UnsupportedIdentityError(identity)


class LiveObject:
    """Mixin shared by all generated proxy classes."""

    __live_object_descriptor__: ClassVar[Any] = None
    __live_object_interceptor__: ClassVar[Any] = None
    __live_object_service__: ClassVar[Any] = None

    def get_live_object_id(self) -> Any:
        return self.__dict__["_live_object_id"]

    def set_live_object_id(self, identity: Any) -> None:
        """Rebind to a new identity.

        An existing live map is renamed, and field structures named after the
        old identity move with it, so a new entity created under the old
        identity starts empty.
        """
        check_identity(identity)
        cls = type(self)
        descriptor = cls.__live_object_descriptor__
        new_map = cls.__live_object_service__.live_map(descriptor, identity)
        old_map = self.__dict__.get("_live_object_live_map")
        if old_map is not None and old_map.name != new_map.name and old_map.is_exists():
            old_map.rename(new_map.name)
            new_map.fast_put(descriptor.id_field, identity)
            cls.__live_object_interceptor__.rebind_fields(
                self.__dict__["_live_object_id"], identity, new_map
            )
        self.__dict__["_live_object_id"] = identity
        self.__dict__["_live_object_live_map"] = new_map

    def get_live_object_live_map(self) -> Any:
        return self.__dict__["_live_object_live_map"]

    def is_exists(self) -> bool:
        return bool(self.get_live_object_live_map().is_exists())

    def delete(self) -> bool:
        """Delete the live map. Field structures it references are left alone."""
        return bool(self.get_live_object_live_map().delete())


def _routed(method_name: str, original: Callable[..., Any] | None) -> Callable[..., Any]:
    """Method that hands the call to the class's interceptor."""

    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        bound = None if original is None else types.MethodType(original, self)
        if bound is not None and kwargs:
            bound = functools.partial(bound, **kwargs)
        return type(self).__live_object_interceptor__.intercept(
            method_name,
            bound,
            args,
            self,
            self.__dict__["_live_object_live_map"],
        )

    method.__name__ = method_name
    if original is not None:
        method.__doc__ = original.__doc__
    return method


def _field_property(field_name: str) -> property:
    getter = getter_name(field_name)
    setter = setter_name(field_name)

    def fget(self: Any) -> Any:
        return getattr(self, getter)()

    def fset(self: Any, value: Any) -> None:
        getattr(self, setter)(value)

    return property(fget, fset, doc=f"Live field '{field_name}'.")


def _public_methods(entity_type: type) -> dict[str, Callable[..., Any]]:
    """Plain public functions defined on the entity class and its bases."""
    methods: dict[str, Callable[..., Any]] = {}
    for klass in reversed(entity_type.__mro__[:-1]):
        for name, attr in vars(klass).items():
            if not name.startswith("_") and inspect.isfunction(attr):
                methods[name] = attr
    return methods


def build_proxy_class(descriptor: Any, interceptor: Any, service: Any) -> type:
    """Generate the live object class for descriptor's entity type."""
    entity_type: type = descriptor.entity_type
    namespace: dict[str, Any] = {
        "__module__": entity_type.__module__,
        "__qualname__": f"{entity_type.__qualname__}LiveObject",
        "__live_object_descriptor__": descriptor,
        "__live_object_interceptor__": interceptor,
        "__live_object_service__": service,
    }

    for name, function in _public_methods(entity_type).items():
        namespace[name] = _routed(name, function)

    for field_name in descriptor.fields:
        for accessor in (getter_name(field_name), setter_name(field_name)):
            original = getattr(entity_type, accessor, None)
            namespace[accessor] = _routed(
                accessor, original if inspect.isfunction(original) else None
            )
        namespace[field_name] = _field_property(field_name)

    return type(f"{entity_type.__name__}LiveObject", (entity_type, LiveObject), namespace)


def new_live_object(proxy_class: type, identity: Any, live_map: Any) -> Any:
    """Instance of a proxy class bound to identity, without running __init__."""
    obj = object.__new__(proxy_class)
    obj.__dict__["_live_object_id"] = identity
    obj.__dict__["_live_object_live_map"] = live_map
    return obj

"""Remote references.

A RemoteReference stands in for a remote-backed object or another live
entity inside a live map. References are stored in a tagged JSON wire form
so they survive whatever value codec the map uses.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from live_object.core.exceptions import ReferenceResolutionError

REFERENCE_TAG: bytes = b"\x00live-object:ref\x00"

# Types seen while building references; lets locally defined classes resolve
# within the same process.
_TYPE_CACHE: dict[str, type] = {}


def type_path(cls: type) -> str:
    """``module:qualname`` path for a class, remembered for later lookup."""
    path = f"{cls.__module__}:{cls.__qualname__}"
    _TYPE_CACHE.setdefault(path, cls)
    return path


def import_type(path: str) -> type:
    """Resolve a ``module:qualname`` path back into a class."""
    cached = _TYPE_CACHE.get(path)
    if cached is not None:
        return cached
    module_name, _, qualname = path.partition(":")
    try:
        obj: object = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError, ValueError) as e:
        raise ReferenceResolutionError(path, str(e)) from e
    if not isinstance(obj, type):
        raise ReferenceResolutionError(path, "not a class")
    _TYPE_CACHE[path] = obj
    return obj


@dataclass(frozen=True)
class RemoteReference:
    """Pointer to a remote-backed object: its type, remote name and codec."""

    type: type
    name: str
    codec_type: type | None = None

    def to_wire(self) -> bytes:
        wire = _ReferenceWire(
            type=type_path(self.type),
            name=self.name,
            codec=type_path(self.codec_type) if self.codec_type is not None else None,
        )
        return REFERENCE_TAG + wire.model_dump_json().encode("utf-8")

    @classmethod
    def from_wire(cls, data: bytes) -> RemoteReference:
        try:
            wire = _ReferenceWire.model_validate_json(data[len(REFERENCE_TAG) :])
        except ValidationError as e:
            raise ReferenceResolutionError(repr(data[:64]), str(e)) from e
        return cls(
            type=import_type(wire.type),
            name=wire.name,
            codec_type=import_type(wire.codec) if wire.codec is not None else None,
        )

    @staticmethod
    def is_wire(data: bytes) -> bool:
        return data.startswith(REFERENCE_TAG)


class _ReferenceWire(BaseModel):
    type: str
    name: str
    codec: str | None = None

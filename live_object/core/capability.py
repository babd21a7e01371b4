"""Collection capability map.

Ordered table from a local structural capability to the remote-backed type
that implements it. The first capability the local type satisfies wins, so
specific capabilities are listed before their general supertypes
(``collections.deque`` is also a MutableSequence, ``SortedSet`` is also a Set).
"""

from __future__ import annotations

import queue
import types
import typing
from collections.abc import Collection, Mapping, MutableSequence, Set
from typing import Any

from live_object.core.types import (
    BlockingDeque,
    BlockingQueue,
    ConcurrentMapping,
    Deque,
    Queue,
    SortedSet,
)
from live_object.remote import (
    RemoteBlockingDeque,
    RemoteBlockingQueue,
    RemoteDeque,
    RemoteList,
    RemoteMap,
    RemoteObject,
    RemoteQueue,
    RemoteSet,
    RemoteSortedSet,
)

CAPABILITIES: tuple[tuple[type, type[RemoteObject]], ...] = (
    (SortedSet, RemoteSortedSet),
    (Set, RemoteSet),
    (ConcurrentMapping, RemoteMap),
    (Mapping, RemoteMap),
    (BlockingDeque, RemoteBlockingDeque),
    (Deque, RemoteDeque),
    (BlockingQueue, RemoteBlockingQueue),
    (Queue, RemoteQueue),
    (MutableSequence, RemoteList),
)


def unwrap_type(declared: Any) -> type | None:
    """Reduce a field annotation to a class.

    ``list[int]`` -> ``list``; ``X | None`` -> ``X``; anything that is not
    a class (``Any``, a TypeVar, a multi-member union) -> None.
    """
    if declared is typing.Any:
        return None
    origin = typing.get_origin(declared)
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in typing.get_args(declared) if a is not type(None)]
        if len(members) != 1:
            return None
        return unwrap_type(members[0])
    if origin is not None:
        declared = origin
    return declared if isinstance(declared, type) else None


_REMOTE_TYPES: dict[type, type[RemoteObject]] = dict(CAPABILITIES)


def get_capability(declared: Any) -> type | None:
    """First capability a declared or runtime type satisfies, or None."""
    cls = unwrap_type(declared)
    if cls is None or issubclass(cls, (str, bytes, bytearray)):
        return None
    for capability, _ in CAPABILITIES:
        if issubclass(cls, capability):
            return capability
    return None


def get_mapped_type(declared: Any) -> type[RemoteObject] | None:
    """Remote implementation for a declared or runtime type, or None."""
    capability = get_capability(declared)
    return None if capability is None else _REMOTE_TYPES[capability]


def is_local_collection(value: Any) -> bool:
    """True for local collections and mappings that could be made remote."""
    if isinstance(value, (RemoteObject, str, bytes, bytearray)):
        return False
    return isinstance(value, (Collection, queue.Queue))


def local_items(value: Any) -> Any:
    """Items to bulk copy out of a local collection, in order."""
    if isinstance(value, queue.Queue):
        return list(value.queue)
    return value


def satisfies(actual: type, declared: Any) -> bool:
    """True when instances of actual can serve a field declared as declared.

    Remote types satisfy the local type whose capability they implement,
    so a RemoteList satisfies ``list[str]``. Declarations that do not reduce
    to a class accept anything.
    """
    expected = unwrap_type(declared)
    if expected is None or issubclass(actual, expected):
        return True
    capability = get_capability(expected)
    return capability is not None and issubclass(actual, capability)

"""Remote-backed collections."""

from __future__ import annotations

from live_object.remote.base import RemoteObject
from live_object.remote.list import RemoteList
from live_object.remote.map import RemoteMap
from live_object.remote.queue import (
    RemoteBlockingDeque,
    RemoteBlockingQueue,
    RemoteDeque,
    RemoteQueue,
)
from live_object.remote.set import RemoteSet, RemoteSortedSet

__all__ = [
    "RemoteObject",
    "RemoteMap",
    "RemoteList",
    "RemoteSet",
    "RemoteSortedSet",
    "RemoteQueue",
    "RemoteBlockingQueue",
    "RemoteDeque",
    "RemoteBlockingDeque",
]

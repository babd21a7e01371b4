"""Structural capabilities that have no stdlib ABC.

Entity fields are declared with these (or with stdlib types registered to
them) to ask for a particular remote-backed implementation.
"""

from __future__ import annotations

import collections
import queue
from abc import ABC
from collections.abc import MutableMapping, MutableSet


class SortedSet(MutableSet):  # type: ignore[type-arg]
    """A set iterated in natural order of its members."""


class ConcurrentMapping(MutableMapping):  # type: ignore[type-arg]
    """A mapping safe for use from several threads or processes."""


class Queue(ABC):
    """FIFO container."""


class BlockingQueue(Queue):
    """Queue whose consumers can wait for items."""


class Deque(Queue):
    """Double-ended queue."""


class BlockingDeque(Deque, BlockingQueue):
    """Double-ended queue whose consumers can wait for items."""


Deque.register(collections.deque)
BlockingQueue.register(queue.Queue)

"""Repository layer - DDD repository pattern."""

from __future__ import annotations

from live_object.repository.base import LiveRepository

__all__ = [
    "LiveRepository",
]

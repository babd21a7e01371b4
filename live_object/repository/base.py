"""Repository base class.

Thin wrapper over LiveObjectService for DDD-oriented usage.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class LiveRepository(Generic[T]):
    """Base repository for one live entity type.

    Subclasses add domain-specific access methods on top of these.
    """

    def __init__(self, service: Any, entity_type: type[T]) -> None:
        self.service = service
        self.entity_type = entity_type

    def get(self, identity: Any) -> T | None:
        return self.service.get(self.entity_type, identity)  # type: ignore[no-any-return]

    def get_or_create(self, identity: Any) -> T:
        return self.service.get_or_create(self.entity_type, identity)  # type: ignore[no-any-return]

    def persist(self, detached: T) -> T:
        return self.service.persist(detached)  # type: ignore[no-any-return]

    def delete(self, identity: Any) -> bool:
        return bool(self.service.delete(self.entity_type, identity))

    def exists(self, identity: Any) -> bool:
        return self.service.get(self.entity_type, identity) is not None

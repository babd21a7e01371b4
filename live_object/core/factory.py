"""Remote object factory.

Creates remote-backed objects by type and name, and turns stored
references back into live objects.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from live_object.core.capability import satisfies
from live_object.core.codec import CodecRegistry
from live_object.core.exceptions import (
    ReferenceResolutionError,
    RemoteObjectConstructionError,
)
from live_object.core.reference import RemoteReference
from live_object.remote.base import RemoteObject

logger = logging.getLogger(__name__)

EntityResolver = Callable[[RemoteReference], Any]


class ObjectFactory:
    """Builds remote objects and dereferences RemoteReferences.

    Args:
        codec_registry: Source of shared codec instances.
        entity_resolver: Turns a reference to a live entity into its proxy.
            Set by the service once entity types can be resolved.
    """

    def __init__(
        self,
        codec_registry: CodecRegistry,
        entity_resolver: EntityResolver | None = None,
    ) -> None:
        self._codec_registry = codec_registry
        self.entity_resolver = entity_resolver

    def create(self, client: Any, remote_type: type, name: str, codec: Any) -> Any:
        """Construct remote_type at name with codec. No store access."""
        if not (isinstance(remote_type, type) and issubclass(remote_type, RemoteObject)):
            raise RemoteObjectConstructionError(
                getattr(remote_type, "__name__", repr(remote_type)), name, "not a RemoteObject type"
            )
        try:
            return remote_type(client, name, codec)
        except TypeError as e:
            raise RemoteObjectConstructionError(remote_type.__name__, name, str(e)) from e

    def from_reference(
        self,
        client: Any,
        reference: RemoteReference,
        expected_type: Any = None,
    ) -> Any:
        """Live object for a stored reference.

        The object is always built as the referenced type, which a write
        chose from the runtime type of the assigned value. expected_type is
        the declared type of the field the reference was read from; a
        referenced type that does not satisfy it is logged.
        """
        if not satisfies(reference.type, expected_type):
            logger.debug(
                "Reference '%s' is a %s, declared %s",
                reference.name,
                reference.type.__name__,
                expected_type,
            )

        if issubclass(reference.type, RemoteObject):
            if reference.codec_type is None:
                raise ReferenceResolutionError(reference.name, "reference carries no codec")
            codec = self._codec_registry.get_codec(reference.codec_type)
            return self.create(client, reference.type, reference.name, codec)

        if self.entity_resolver is None:
            raise ReferenceResolutionError(
                reference.name, f"no resolver for entity type {reference.type.__name__}"
            )
        return self.entity_resolver(reference)

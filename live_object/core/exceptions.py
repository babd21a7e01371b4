"""LiveObject exception hierarchy.

All exceptions are LiveObject-specific. Raw driver exceptions are wrapped
before they reach callers.
"""

from __future__ import annotations


class LiveObjectError(Exception):
    """Base exception for all LiveObject errors."""


# --- Descriptor ---


class DescriptorError(LiveObjectError):
    """Base for entity descriptor (structural lookup) errors."""


class FieldNotFoundError(DescriptorError):
    """Raised when a field is not declared on the entity."""

    def __init__(self, entity_name: str, field_name: str) -> None:
        self.entity_name = entity_name
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' is not declared on {entity_name}")


class IdentityFieldError(DescriptorError):
    """Raised when the identity field is missing or unusable."""

    def __init__(self, entity_name: str, detail: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Identity field error for {entity_name}: {detail}")


class DescriptorCompilationError(DescriptorError):
    """Raised when an EntityDescriptor fails validation during build()."""


# --- Construction ---


class ConstructionError(LiveObjectError):
    """Base for failures constructing schemes, codecs or remote objects."""


class NamingSchemeConstructionError(ConstructionError):
    """Raised when a naming scheme cannot be constructed from a codec."""

    def __init__(self, scheme_name: str, detail: str) -> None:
        self.scheme_name = scheme_name
        super().__init__(f"Cannot construct naming scheme {scheme_name}: {detail}")


class RemoteObjectConstructionError(ConstructionError):
    """Raised when a remote-backed object cannot be constructed."""

    def __init__(self, remote_type: str, name: str, detail: str) -> None:
        self.remote_type = remote_type
        self.name = name
        super().__init__(f"Cannot construct {remote_type} at '{name}': {detail}")


class CodecConstructionError(ConstructionError):
    """Raised when a codec type cannot be instantiated."""

    def __init__(self, codec_name: str, detail: str) -> None:
        self.codec_name = codec_name
        super().__init__(f"Cannot construct codec {codec_name}: {detail}")


# --- Reference ---


class ReferenceResolutionError(LiveObjectError):
    """Raised when a stored reference cannot be turned back into an object."""

    def __init__(self, reference: str, detail: str) -> None:
        self.reference = reference
        super().__init__(f"Cannot resolve reference {reference}: {detail}")


# --- Entity ---


class EntityError(LiveObjectError):
    """Base for live entity errors."""


class EntityNotRegisteredError(EntityError):
    """Raised when an entity type has no registered descriptor."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Entity type {entity_name} is not registered")


class EntityExistsError(EntityError):
    """Raised when persisting an entity whose live map already exists."""

    def __init__(self, entity_name: str, identity: object) -> None:
        self.entity_name = entity_name
        self.identity = identity
        super().__init__(f"{entity_name} with id {identity!r} already exists")


class UnsupportedIdentityError(EntityError):
    """Raised when an identity value cannot be used to name a live map."""

    def __init__(self, identity: object) -> None:
        self.identity = identity
        super().__init__(
            f"Identity value of type {type(identity).__name__} is not supported"
        )


# --- Adapter ---


class AdapterError(LiveObjectError):
    """Base for adapter errors."""


class StoreConnectionError(AdapterError):
    """Raised on store connection failures."""


class StoreOperationError(AdapterError):
    """Raised when a store command fails (wrong type, missing key, ...)."""

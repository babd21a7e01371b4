"""LiveObject - entity fields transparently backed by a remote key-value store."""

from __future__ import annotations

from live_object.core.client import StoreClient, StoreConfig
from live_object.core.codec import CodecRegistry, JsonCodec, PickleCodec, StringCodec
from live_object.core.enums import MaterializationPolicy, StoreBackend, TransformationMode
from live_object.core.exceptions import (
    AdapterError,
    CodecConstructionError,
    ConstructionError,
    DescriptorCompilationError,
    DescriptorError,
    EntityError,
    EntityExistsError,
    EntityNotRegisteredError,
    FieldNotFoundError,
    IdentityFieldError,
    LiveObjectError,
    NamingSchemeConstructionError,
    ReferenceResolutionError,
    RemoteObjectConstructionError,
    StoreConnectionError,
    StoreOperationError,
    UnsupportedIdentityError,
)
from live_object.core.interceptor import AccessorInterceptor
from live_object.core.naming import ContentNamingScheme, DefaultNamingScheme, NamingScheme
from live_object.core.proxy import LiveObject
from live_object.core.reference import RemoteReference
from live_object.core.service import LiveObjectService
from live_object.core.types import (
    BlockingDeque,
    BlockingQueue,
    ConcurrentMapping,
    Deque,
    Queue,
    SortedSet,
)
from live_object.mapping import EntityDescriptor, entity
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
from live_object.repository import LiveRepository

__all__ = [
    # Client
    "StoreConfig",
    "StoreClient",
    # Service
    "LiveObjectService",
    "LiveObject",
    "AccessorInterceptor",
    "LiveRepository",
    # Mapping
    "EntityDescriptor",
    "entity",
    # Naming
    "NamingScheme",
    "DefaultNamingScheme",
    "ContentNamingScheme",
    # Codecs
    "CodecRegistry",
    "PickleCodec",
    "JsonCodec",
    "StringCodec",
    # References
    "RemoteReference",
    # Capabilities
    "SortedSet",
    "ConcurrentMapping",
    "Queue",
    "BlockingQueue",
    "Deque",
    "BlockingDeque",
    # Remote objects
    "RemoteObject",
    "RemoteMap",
    "RemoteList",
    "RemoteSet",
    "RemoteSortedSet",
    "RemoteQueue",
    "RemoteBlockingQueue",
    "RemoteDeque",
    "RemoteBlockingDeque",
    # Enums
    "StoreBackend",
    "TransformationMode",
    "MaterializationPolicy",
    # Exceptions
    "LiveObjectError",
    "DescriptorError",
    "FieldNotFoundError",
    "IdentityFieldError",
    "DescriptorCompilationError",
    "ConstructionError",
    "NamingSchemeConstructionError",
    "RemoteObjectConstructionError",
    "CodecConstructionError",
    "ReferenceResolutionError",
    "EntityError",
    "EntityNotRegisteredError",
    "EntityExistsError",
    "UnsupportedIdentityError",
    "AdapterError",
    "StoreConnectionError",
    "StoreOperationError",
]

"""Mapping layer - entity descriptors and their builder DSL."""

from __future__ import annotations

from live_object.mapping.builder import EntityDescriptorBuilder, entity
from live_object.mapping.descriptor import EntityDescriptor

__all__ = [
    "EntityDescriptor",
    "EntityDescriptorBuilder",
    "entity",
]

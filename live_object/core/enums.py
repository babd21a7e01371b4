"""Live object enumerations."""

from __future__ import annotations

from enum import Enum


class StoreBackend(Enum):
    """Supported store backends."""

    MEMORY = "memory"
    REDIS = "redis"


class TransformationMode(Enum):
    """How local collections assigned to entity fields are stored.

    RAW keeps them as opaque encoded values. ANNOTATION_BASED converts them
    into remote-backed equivalents and stores a reference.
    """

    RAW = "raw"
    ANNOTATION_BASED = "annotation_based"


class MaterializationPolicy(Enum):
    """Write policy for lazily materialized field references."""

    LAST_WRITE_WINS = "last_write_wins"
    FIRST_WRITE_WINS = "first_write_wins"

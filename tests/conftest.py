"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from live_object.adapters.memory import MemoryStore
from live_object.core.client import StoreClient, StoreConfig
from live_object.core.service import LiveObjectService


@pytest.fixture
def memory_config() -> StoreConfig:
    """In-memory store config."""
    return StoreConfig(driver="memory")


@pytest.fixture
def client(memory_config: StoreConfig) -> Iterator[StoreClient]:
    """Client over a fresh in-memory store."""
    store_client = StoreClient(memory_config)
    yield store_client
    store_client.close()


@pytest.fixture
def store(client: StoreClient) -> MemoryStore:
    """The raw in-memory store behind client, for asserting on stored keys."""
    return client.connection  # type: ignore[no-any-return]


@pytest.fixture
def service(client: StoreClient) -> LiveObjectService:
    """Service with the default (last-write-wins) materialization policy."""
    return LiveObjectService(client)

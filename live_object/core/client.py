"""Store configuration and client.

StoreConfig is a Pydantic model for type-safe store config.
StoreClient loads the adapter for the configured driver and owns the
lazily opened connection handle that remote objects talk through.
"""

from __future__ import annotations

import importlib
import logging
import threading
from typing import Any

from pydantic import BaseModel

from live_object.core.enums import StoreBackend
from live_object.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Configuration for store connections."""

    driver: str = StoreBackend.MEMORY.value
    host: str = "127.0.0.1"
    port: int = 6379
    db: int = 0
    password: str | None = None
    url: str | None = None
    extra: dict[str, Any] = {}


# Adapter module mapping: driver name -> (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    StoreBackend.MEMORY.value: ("live_object.adapters.memory", "MemoryStoreAdapter"),
    StoreBackend.REDIS.value: ("live_object.adapters.redis", "RedisStoreAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load a store adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported store driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class StoreClient:
    """Client handle shared by the live map and every remote object.

    The connection is opened on first use and reused afterwards.
    """

    def __init__(self, config: StoreConfig | None = None, adapter: Any = None) -> None:
        self.config = config or StoreConfig()
        self._adapter = adapter if adapter is not None else _load_adapter(self.config.driver)
        self._connection: Any = None
        self._lock = threading.Lock()

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def connection(self) -> Any:
        """The open connection, connecting on first access."""
        if self._connection is None:
            with self._lock:
                if self._connection is None:
                    self._connection = self._adapter.connect(self.config)
                    logger.debug("Connected %s store", self.config.driver)
        return self._connection

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            if self._connection is not None:
                self._adapter.close(self._connection)
                self._connection = None

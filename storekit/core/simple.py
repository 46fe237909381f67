"""
Simplified storage API for storekit.

``SimpleStore`` wraps a ``StorageManager`` behind short method names for
the common cases. The manager stays reachable for everything else.
"""

from typing import Any, List, Optional

from ..adapters.registry import AdapterName
from ..host.environment import StorageHost
from .config import StorageManagerOptions
from .manager import Duration, StorageManager


class SimpleStore:
    """Short-named facade over a StorageManager."""

    def __init__(self, options: Optional[StorageManagerOptions] = None,
                 host: Optional[StorageHost] = None,
                 manager: Optional[StorageManager] = None):
        """
        Initialize the simple store.

        Args:
            options: Manager configuration, ignored when ``manager`` is given
            host: Host primitives, ignored when ``manager`` is given
            manager: Existing manager to wrap
        """
        self.manager = manager or StorageManager(options, host=host)

    async def put(self, key: str, value: Any, *, expires: Optional[Duration] = None,
                  adapter: Optional[AdapterName] = None) -> None:
        await self.manager.set(key, value, expires=expires, adapter=adapter)

    async def get(self, key: str, *, adapter: Optional[AdapterName] = None,
                  default: Any = None) -> Any:
        return await self.manager.get(key, adapter=adapter, default=default)

    async def delete(self, key: str, *, adapter: Optional[AdapterName] = None) -> None:
        await self.manager.remove(key, adapter=adapter)

    async def has(self, key: str, *, adapter: Optional[AdapterName] = None) -> bool:
        return await self.manager.has(key, adapter=adapter)

    async def keys(self, *, adapter: Optional[AdapterName] = None) -> List[str]:
        return await self.manager.keys(adapter=adapter)

    async def clear(self, *, adapter: Optional[AdapterName] = None) -> None:
        await self.manager.clear(adapter=adapter)

    def get_manager(self) -> StorageManager:
        """Get the underlying storage manager."""
        return self.manager

    def registered_adapters(self) -> List[str]:
        """Names of every adapter registered with the manager."""
        return self.manager.adapter_names()


_default_store: Optional[SimpleStore] = None


def get_store() -> SimpleStore:
    """
    Get the process-wide default store.

    Built on first use from environment configuration
    (``StorageManagerOptions.from_env`` and ``StorageHost.detect``).
    """
    global _default_store
    if _default_store is None:
        _default_store = SimpleStore(StorageManagerOptions.from_env(), host=StorageHost.detect())
    return _default_store

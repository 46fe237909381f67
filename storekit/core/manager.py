"""
Storage manager for storekit.

``StorageManager`` is the facade over every adapter: it resolves the
requested (or default) adapter, applies the namespace to keys, wraps values
in envelopes on write and enforces expiry on read.

Expired items are evicted lazily: the first read that finds one deletes it
from the adapter it was read from and reports the key as absent. There is
no background sweep.
"""

import logging
from datetime import timedelta
from typing import Any, Callable, List, Optional, Set, Union

from ..adapters.base import StorageAdapter
from ..adapters.cookie import CookieOptions
from ..adapters.registry import AdapterName, AdapterRegistry, AdapterType
from ..common.utils import namespace_key, now_ms, strip_namespace
from ..errors import AdapterNotFoundError
from ..host.environment import StorageHost
from ..item.envelope import StorageItem, is_expired
from ..util.config import parse_duration_ms
from .config import StorageManagerOptions


logger = logging.getLogger(__name__)

Duration = Union[int, float, str, timedelta]


class StorageManager:
    """
    Unified key-value storage over the adapters a host provides.

    Example:
        manager = StorageManager(StorageManagerOptions(namespace="app"))
        await manager.set("user", {"id": 1}, expires="1h")
        user = await manager.get("user")
    """

    def __init__(
        self,
        options: Optional[StorageManagerOptions] = None,
        host: Optional[StorageHost] = None,
        clock: Optional[Callable[[], int]] = None,
        cookie_options: Optional[CookieOptions] = None,
    ):
        """
        Initialize the storage manager.

        Never raises because a backend is missing: unavailable adapters are
        skipped with a warning, and an unavailable default adapter is
        replaced by memory.

        Args:
            options: Manager configuration (defaults to StorageManagerOptions())
            host: Raw primitives offered by the environment (defaults to StorageHost.detect())
            clock: Millisecond clock, defaults to wall-clock time
            cookie_options: Attributes for the cookie adapter
        """
        self.options = options or StorageManagerOptions()
        self.options.validate()
        self.host = host if host is not None else StorageHost.detect()
        self._clock = clock or now_ms
        self._warned: Set[str] = set()
        self._unavailable = AdapterRegistry()

        self.registry = AdapterRegistry.build(
            self.host,
            obfuscate=self.options.default_encrypt,
            cookie_options=cookie_options,
            clock=self._clock,
            on_skip=self._adapter_skipped,
        )
        self.default_adapter = self._choose_default_adapter()

    def _warn_once(self, message: str) -> None:
        if message not in self._warned:
            self._warned.add(message)
            logger.warning(message)

    def _adapter_skipped(self, adapter: StorageAdapter) -> None:
        self._unavailable.register(adapter.name, adapter, adapter.aliases)
        self._warn_once(
            f"Storage adapter '{adapter.name}' unavailable: {adapter.unavailable_reason}"
        )

    def _choose_default_adapter(self) -> str:
        requested = self.options.default_adapter
        if requested is None:
            requested = (AdapterType.LOCAL_STORAGE if self.host.has_persistent_storage
                         else AdapterType.MEMORY).value

        adapter = self.registry.get(requested)
        if adapter is None or not adapter.available:
            self._warn_once(
                f"Default adapter '{requested}' is not available, falling back to memory"
            )
            return AdapterType.MEMORY.value

        return adapter.name

    def _key(self, key: str) -> str:
        return namespace_key(key, self.options.namespace)

    def get_adapter(self, name: Optional[AdapterName] = None) -> StorageAdapter:
        """
        Resolve an adapter by name or alias (the default adapter when None).

        Raises:
            AdapterNotFoundError: If nothing matches
            BackendUnavailableError: If the name belongs to an adapter skipped as unavailable
        """
        target = self.default_adapter if name is None else name
        try:
            return self.registry.resolve(target)
        except AdapterNotFoundError:
            skipped = self._unavailable.get(target)
            if skipped is not None:
                skipped.ensure_available()
            raise

    def register_adapter(self, name: AdapterName, adapter: StorageAdapter) -> None:
        """Register an adapter under ``name`` and the adapter's own aliases."""
        self.registry.register(name, adapter, getattr(adapter, "aliases", ()))

    def adapter_names(self) -> List[str]:
        """Names of every registered adapter."""
        return self.registry.names()

    async def set(
        self,
        key: str,
        value: Any,
        *,
        expires: Optional[Duration] = None,
        adapter: Optional[AdapterName] = None,
        obfuscate: Optional[bool] = None,
    ) -> None:
        """
        Store a value.

        Values go through JSON, so they read back as JSON types: tuples
        become lists and non-string dict keys become strings.

        Args:
            key: Key, namespaced before it reaches the adapter
            value: JSON-serializable value
            expires: Time-to-live in ms (or a duration string such as "5m");
                defaults to the configured default, 0 means never
            adapter: Adapter name or alias (defaults to the default adapter)
            obfuscate: Per-call override of the obfuscation setting

        Raises:
            ValueError: If ``expires`` is negative
            AdapterNotFoundError: If ``adapter`` does not resolve
            StorageWriteError: If the adapter rejects the write
        """
        target = self.get_adapter(adapter)
        ttl = self.options.default_expires if expires is None else parse_duration_ms(expires)
        if ttl < 0:
            raise ValueError("expires must be >= 0")

        item = StorageItem(value=value, created_at=self._clock(), ttl=ttl)
        await target.put(self._key(key), item, obfuscate=obfuscate)

    async def _lookup(self, key: str, adapter: Optional[AdapterName]) -> Optional[StorageItem]:
        target = self.get_adapter(adapter)
        raw_key = self._key(key)

        item = await target.fetch(raw_key)
        if item is None:
            return None

        if is_expired(item, self._clock()):
            await target.delete(raw_key)
            logger.debug(f"Evicted expired item '{raw_key}' from '{target.name}'")
            return None

        return item

    async def get(self, key: str, *, adapter: Optional[AdapterName] = None,
                  default: Any = None) -> Any:
        """
        Get a value.

        Returns:
            The stored value, or ``default`` if the key is absent or expired
        """
        item = await self._lookup(key, adapter)
        return default if item is None else item.value

    async def has(self, key: str, *, adapter: Optional[AdapterName] = None) -> bool:
        """Check if a live item exists; evicts the key if it has expired."""
        return await self._lookup(key, adapter) is not None

    async def remove(self, key: str, *, adapter: Optional[AdapterName] = None) -> None:
        """Remove a key; no-op if absent."""
        await self.get_adapter(adapter).delete(self._key(key))

    async def clear(self, *, adapter: Optional[AdapterName] = None) -> None:
        """Remove every entry of the adapter, whatever its namespace."""
        await self.get_adapter(adapter).wipe()

    async def keys(self, *, adapter: Optional[AdapterName] = None) -> List[str]:
        """
        List keys of the adapter.

        With a namespace configured, only keys in that namespace are
        returned, without their prefix.
        """
        raw_keys = await self.get_adapter(adapter).list_keys()
        return strip_namespace(raw_keys, self.options.namespace)

    def __repr__(self) -> str:
        return (f"<StorageManager default={self.default_adapter!r} "
                f"adapters={self.adapter_names()!r} namespace={self.options.namespace!r}>")

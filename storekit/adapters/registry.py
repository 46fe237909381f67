"""
Adapter registry for storekit.

Maps logical adapter names and aliases, case-insensitively, to constructed
adapter instances. Several names may point to the same instance.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..errors import AdapterNotFoundError
from ..host.environment import StorageHost
from .base import StorageAdapter
from .cookie import CookieOptions, CookieStorageAdapter
from .local import LocalStorageAdapter
from .memory import MemoryStorageAdapter
from .session import SessionStorageAdapter


logger = logging.getLogger(__name__)


class AdapterType(str, Enum):
    """Canonical names of the built-in adapters."""

    MEMORY = "memory"
    LOCAL_STORAGE = "localStorage"
    SESSION_STORAGE = "sessionStorage"
    COOKIE = "cookie"


# Applied after lower-casing, before lookup
BUILTIN_ALIASES: Dict[str, str] = {
    "mem": "memory",
    "memorystorage": "memory",
    "local": "localstorage",
    "local_storage": "localstorage",
    "local-storage": "localstorage",
    "session": "sessionstorage",
    "session_storage": "sessionstorage",
    "session-storage": "sessionstorage",
    "cookies": "cookie",
}

AdapterName = Union[str, AdapterType]


def normalize_name(name: AdapterName) -> str:
    """Lower-case and trim an adapter name; enum members contribute their value."""
    if isinstance(name, Enum):
        name = name.value
    return str(name).strip().lower()


class AdapterRegistry:
    """
    Registry of storage adapters keyed by lower-cased name and alias.

    Registering a primary name again replaces the previous adapter; an alias
    claimed by a later registration silently points to the newer adapter.
    """

    def __init__(self):
        self._adapters: Dict[str, StorageAdapter] = {}
        self._primary: Dict[str, str] = {}

    def register(self, primary_name: AdapterName, adapter: StorageAdapter,
                 aliases: Iterable[str] = ()) -> None:
        """
        Register an adapter under its primary name and aliases.

        Args:
            primary_name: Name the adapter is registered under
            adapter: Adapter instance
            aliases: Alternate names; an alias equal to the primary name is ignored
        """
        primary = normalize_name(primary_name)
        if not primary:
            raise ValueError("Adapter name must not be empty")

        self._adapters[primary] = adapter
        self._primary[primary] = primary_name.value if isinstance(primary_name, Enum) else str(primary_name)

        for alias in aliases:
            key = normalize_name(alias)
            if key and key != primary:
                self._adapters[key] = adapter

        logger.debug(f"Registered adapter '{primary_name}' ({adapter.__class__.__name__})")

    def resolve(self, name: AdapterName) -> StorageAdapter:
        """
        Resolve a name or alias to an adapter.

        Raises:
            AdapterNotFoundError: If nothing matches
        """
        key = normalize_name(name)
        adapter = self._adapters.get(BUILTIN_ALIASES.get(key, key))
        if adapter is None:
            # A custom registration may have claimed the alias itself
            adapter = self._adapters.get(key)
        if adapter is None:
            raise AdapterNotFoundError(str(name.value if isinstance(name, Enum) else name))
        return adapter

    def get(self, name: AdapterName) -> Optional[StorageAdapter]:
        """Resolve a name, returning None instead of raising."""
        try:
            return self.resolve(name)
        except AdapterNotFoundError:
            return None

    def names(self) -> List[str]:
        """Primary names in registration order, as given at registration."""
        return list(self._primary.values())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._primary)

    @classmethod
    def build(cls,
              host: StorageHost,
              obfuscate: bool = False,
              cookie_options: Optional[CookieOptions] = None,
              clock: Optional[Callable[[], int]] = None,
              on_skip: Optional[Callable[[StorageAdapter], None]] = None) -> "AdapterRegistry":
        """
        Populate a registry from the primitives a host provides.

        Memory is registered first and is always available. Local, session
        and cookie adapters follow, each independently; one that fails its
        availability probe is skipped and reported to ``on_skip``.
        """
        registry = cls()
        memory = MemoryStorageAdapter(obfuscate=obfuscate, clock=clock)
        registry.register(AdapterType.MEMORY, memory, memory.aliases)

        factories = (
            lambda: LocalStorageAdapter(host.local, obfuscate=obfuscate, clock=clock),
            lambda: SessionStorageAdapter(host.session, obfuscate=obfuscate, clock=clock),
            lambda: CookieStorageAdapter(host.cookies, options=cookie_options,
                                         obfuscate=obfuscate, clock=clock),
        )

        for factory in factories:
            adapter = factory()
            if adapter.available:
                registry.register(adapter.name, adapter, adapter.aliases)
            else:
                logger.debug(f"Skipping adapter '{adapter.name}': {adapter.unavailable_reason}")
                if on_skip is not None:
                    on_skip(adapter)

        logger.info(f"Adapter registry built with: {', '.join(registry.names())}")
        return registry

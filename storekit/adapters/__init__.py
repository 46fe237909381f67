"""
Storage adapters package for storekit.

This package provides the uniform adapter interface over every backing
medium (memory, local storage, session storage, cookies) and the registry
resolving adapter names and aliases to instances.
"""

from .base import (
    StorageAdapter,
    RawStoreAdapter,
    PROBE_KEY,
)

from .memory import MemoryStorageAdapter
from .local import LocalStorageAdapter
from .session import SessionStorageAdapter

from .cookie import (
    CookieStorageAdapter,
    CookieOptions,
)

from .registry import (
    AdapterRegistry,
    AdapterType,
    BUILTIN_ALIASES,
    normalize_name,
)

__all__ = [
    # Interface
    "StorageAdapter",
    "RawStoreAdapter",
    "PROBE_KEY",

    # Variants
    "MemoryStorageAdapter",
    "LocalStorageAdapter",
    "SessionStorageAdapter",
    "CookieStorageAdapter",
    "CookieOptions",

    # Registry
    "AdapterRegistry",
    "AdapterType",
    "BUILTIN_ALIASES",
    "normalize_name",
]

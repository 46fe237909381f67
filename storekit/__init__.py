"""
storekit Python Package

Uniform key-value storage over memory, local, session and cookie backends,
with expiration, namespacing and optional obfuscation.
"""

__version__ = "0.1.0"

from .core.manager import StorageManager
from .core.config import StorageManagerOptions
from .core.simple import SimpleStore, get_store
from .adapters import (
    AdapterRegistry,
    AdapterType,
    StorageAdapter,
    MemoryStorageAdapter,
    LocalStorageAdapter,
    SessionStorageAdapter,
    CookieStorageAdapter,
    CookieOptions,
)
from .host import StorageHost, DictRawStore, FileRawStore, CookieJar
from .item import StorageItem
from .errors import (
    StorageError,
    BackendUnavailableError,
    AdapterNotFoundError,
    StorageWriteError,
    DecodeError,
)

__all__ = [
    "StorageManager",
    "StorageManagerOptions",
    "SimpleStore",
    "get_store",
    "AdapterRegistry",
    "AdapterType",
    "StorageAdapter",
    "MemoryStorageAdapter",
    "LocalStorageAdapter",
    "SessionStorageAdapter",
    "CookieStorageAdapter",
    "CookieOptions",
    "StorageHost",
    "DictRawStore",
    "FileRawStore",
    "CookieJar",
    "StorageItem",
    "StorageError",
    "BackendUnavailableError",
    "AdapterNotFoundError",
    "StorageWriteError",
    "DecodeError",
]

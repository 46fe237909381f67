"""
Core package for storekit: the storage manager facade, its configuration
and the simplified store API.
"""

from .config import StorageManagerOptions
from .manager import StorageManager
from .simple import SimpleStore, get_store

__all__ = [
    "StorageManagerOptions",
    "StorageManager",
    "SimpleStore",
    "get_store",
]

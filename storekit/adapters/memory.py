"""
In-memory storage adapter for storekit.

Data lives in a private mapping owned by the adapter instance and is lost
when the process exits. This adapter is always available and is the
fallback every manager can rely on.
"""

from typing import Callable, Optional

from ..host.raw import DictRawStore
from .base import RawStoreAdapter


class MemoryStorageAdapter(RawStoreAdapter):
    """Adapter over a private in-process mapping."""

    name = "memory"
    aliases = ("mem", "memorystorage")

    def __init__(self, obfuscate: bool = False, clock: Optional[Callable[[], int]] = None):
        super().__init__(DictRawStore(), obfuscate=obfuscate, clock=clock)

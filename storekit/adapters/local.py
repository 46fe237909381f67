"""
Local storage adapter for storekit.

Thin pass-through to the host's persistent raw store.
"""

from .base import RawStoreAdapter


class LocalStorageAdapter(RawStoreAdapter):
    """Adapter over the host's persistent local store."""

    name = "localStorage"
    aliases = ("local", "local_storage", "local-storage")

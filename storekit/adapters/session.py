"""
Session storage adapter for storekit.

Thin pass-through to the host's session-scoped raw store.
"""

from .base import RawStoreAdapter


class SessionStorageAdapter(RawStoreAdapter):
    """Adapter over the host's session store."""

    name = "sessionStorage"
    aliases = ("session", "session_storage", "session-storage")

"""
Storage adapter interface for storekit.

A ``StorageAdapter`` exposes one backing medium through a uniform set of
asynchronous operations on ``StorageItem`` envelopes. Availability is probed
once, at construction, by writing and removing a sentinel key; an adapter
that failed its probe rejects every operation with
``BackendUnavailableError``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from ..common.utils import now_ms
from ..errors import BackendUnavailableError, StorageWriteError
from ..host.raw import RawStore
from ..item.envelope import StorageItem, parse_lenient, serialize_item


logger = logging.getLogger(__name__)

PROBE_KEY = "__storekit_probe__"


class StorageAdapter(ABC):
    """
    Abstract storage adapter.

    Subclasses set ``name`` and ``aliases``, prepare whatever host object they
    borrow, then call ``super().__init__`` which runs the availability probe.
    """

    name: str = ""
    aliases: Tuple[str, ...] = ()

    def __init__(self, obfuscate: bool = False, clock: Optional[Callable[[], int]] = None):
        """
        Initialize adapter and probe its backing store.

        Args:
            obfuscate: Whether values are obfuscated before being persisted
            clock: Millisecond clock used to stamp leniently decoded items
        """
        self.obfuscate = obfuscate
        self._clock = clock or now_ms
        self.unavailable_reason: Optional[str] = None

        try:
            self._probe()
            self.available = True
        except Exception as e:
            self.available = False
            self.unavailable_reason = str(e) or e.__class__.__name__
            logger.debug(f"Adapter '{self.name}' unavailable: {self.unavailable_reason}")

    @abstractmethod
    def _probe(self) -> None:
        """Write then clean a sentinel entry; raise if the store is unusable."""
        pass

    def ensure_available(self) -> None:
        """Raise BackendUnavailableError if the probe at construction failed."""
        if not self.available:
            raise BackendUnavailableError(
                f"Storage adapter '{self.name}' is unavailable: {self.unavailable_reason}",
                adapter=self.name,
            )

    def _serialize(self, key: str, item: StorageItem, obfuscate: Optional[bool]) -> str:
        use_obfuscation = self.obfuscate if obfuscate is None else obfuscate
        try:
            return serialize_item(item, use_obfuscation)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize item '{key}' for adapter '{self.name}': {e}")
            raise StorageWriteError(f"Failed to set item '{key}'", adapter=self.name, cause=e)

    def _decode(self, text: Optional[str]) -> Optional[StorageItem]:
        if not text:
            return None
        return parse_lenient(text, self.obfuscate, self._clock())

    @abstractmethod
    async def put(self, key: str, item: StorageItem, obfuscate: Optional[bool] = None) -> None:
        """
        Persist an item under ``key``.

        Args:
            key: Raw key (already namespaced)
            item: Envelope to persist
            obfuscate: Per-call override of the adapter's obfuscation setting

        Raises:
            BackendUnavailableError: If the adapter is unavailable
            StorageWriteError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def fetch(self, key: str) -> Optional[StorageItem]:
        """
        Read the item stored under ``key``.

        Malformed data never raises; it is decoded leniently.

        Returns:
            The stored item or None if absent
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``; no-op if absent."""
        pass

    @abstractmethod
    async def wipe(self) -> None:
        """Remove every entry this adapter can see."""
        pass

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """List every raw key visible to this adapter."""
        pass

    def __repr__(self) -> str:
        state = "available" if self.available else f"unavailable: {self.unavailable_reason}"
        return f"<{self.__class__.__name__} name={self.name!r} {state}>"


class RawStoreAdapter(StorageAdapter):
    """
    Adapter passing envelopes straight through to a borrowed ``RawStore``.

    A ``None`` raw store means the host does not provide this medium.
    """

    def __init__(self, raw: Optional[RawStore], obfuscate: bool = False,
                 clock: Optional[Callable[[], int]] = None):
        self.raw = raw
        super().__init__(obfuscate=obfuscate, clock=clock)

    def _probe(self) -> None:
        if self.raw is None:
            raise BackendUnavailableError(
                f"Host provides no raw store for '{self.name}'", adapter=self.name
            )
        self.raw.set_raw(PROBE_KEY, PROBE_KEY)
        self.raw.remove_raw(PROBE_KEY)

    async def put(self, key: str, item: StorageItem, obfuscate: Optional[bool] = None) -> None:
        self.ensure_available()
        text = self._serialize(key, item, obfuscate)
        try:
            self.raw.set_raw(key, text)
        except Exception as e:
            logger.error(f"Failed to set item '{key}' in '{self.name}': {e}")
            raise StorageWriteError(f"Failed to set item '{key}'", adapter=self.name, cause=e)
        logger.debug(f"Stored item '{key}' in '{self.name}'")

    async def fetch(self, key: str) -> Optional[StorageItem]:
        self.ensure_available()
        return self._decode(self.raw.get_raw(key))

    async def delete(self, key: str) -> None:
        self.ensure_available()
        try:
            self.raw.remove_raw(key)
        except Exception as e:
            raise StorageWriteError(f"Failed to remove item '{key}'", adapter=self.name, cause=e)

    async def wipe(self) -> None:
        self.ensure_available()
        try:
            self.raw.clear()
        except Exception as e:
            raise StorageWriteError(f"Failed to clear '{self.name}'", adapter=self.name, cause=e)
        logger.info(f"Cleared all items from '{self.name}'")

    async def list_keys(self) -> List[str]:
        self.ensure_available()
        return self.raw.list_keys()

"""
Raw key-value store primitives for storekit.

A raw store is the host-provided object an adapter borrows: it maps string
keys to string values and knows nothing about envelopes, expiry or
namespaces. This module defines the contract and the two implementations a
Python host can offer out of the box: an in-process mapping and a JSON file.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union


logger = logging.getLogger(__name__)


class QuotaExceededError(Exception):
    """Raised by a raw store when a write would exceed its size quota."""
    pass


class RawStore(ABC):
    """
    Abstract raw string store.

    Implementations must be usable synchronously; adapters wrap them in the
    asynchronous capability interface.
    """

    @abstractmethod
    def set_raw(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def get_raw(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or None."""
        pass

    @abstractmethod
    def remove_raw(self, key: str) -> None:
        """Remove ``key``; no-op if absent."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass

    @abstractmethod
    def list_keys(self) -> List[str]:
        """List every key currently stored."""
        pass

    def __len__(self) -> int:
        return len(self.list_keys())


class DictRawStore(RawStore):
    """In-process raw store backed by a dictionary; contents die with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def set_raw(self, key: str, value: str) -> None:
        self._data[key] = value

    def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def remove_raw(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def list_keys(self) -> List[str]:
        return list(self._data.keys())


class FileRawStore(RawStore):
    """
    Persistent raw store backed by a single JSON file.

    The whole mapping is rewritten on every mutation through a temporary file
    and an atomic rename, so a crash never leaves a half-written file behind.
    An optional ``max_bytes`` quota bounds the encoded size of the file.
    """

    def __init__(self, path: Union[str, Path], max_bytes: Optional[int] = None):
        """
        Initialize file raw store.

        Args:
            path: Location of the JSON file (created on first write)
            max_bytes: Optional quota on the encoded file size
        """
        self.path = Path(path)
        self.max_bytes = max_bytes
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        with open(self.path, 'r', encoding='utf-8') as f:
            content = f.read()

        if not content.strip():
            return {}

        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Raw store file does not contain a mapping: {self.path}")
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self, data: Dict[str, str]) -> None:
        encoded = json.dumps(data, ensure_ascii=False)

        if self.max_bytes is not None and len(encoded.encode('utf-8')) > self.max_bytes:
            raise QuotaExceededError(
                f"Writing {self.path} would exceed quota of {self.max_bytes} bytes"
            )

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(encoded)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        self._data = data

    def set_raw(self, key: str, value: str) -> None:
        data = dict(self._data)
        data[key] = value
        self._flush(data)

    def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def remove_raw(self, key: str) -> None:
        if key not in self._data:
            return
        data = dict(self._data)
        del data[key]
        self._flush(data)

    def clear(self) -> None:
        self._flush({})
        logger.debug(f"Cleared raw store file {self.path}")

    def list_keys(self) -> List[str]:
        return list(self._data.keys())

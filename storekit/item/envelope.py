"""
Storage item envelope and codec for storekit.

Every stored value is wrapped in a ``StorageItem`` carrying its creation
timestamp and optional time-to-live. This module serializes items to the
persisted text form ``{"value": ..., "timestamp": <ms>, "expires": <ms>}``
and parses them back, either strictly or leniently.
"""

import json
import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Dict, Optional, Sequence

from ..common.utils import now_ms
from ..errors import DecodeError
from ..util.encoding import obfuscate, deobfuscate


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageItem:
    """
    Immutable envelope around a stored value.

    ``ttl`` is a duration in milliseconds; ``None`` or ``0`` means the item
    never expires.
    """

    value: Any
    created_at: int
    ttl: Optional[int] = None

    def is_expired(self, now: Optional[int] = None) -> bool:
        """Check if the item is expired at ``now`` (defaults to the current time)."""
        return is_expired(self, now_ms() if now is None else now)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the item to its persisted field layout.

        ``expires`` is left out when no TTL was given.
        """
        data = {"value": self.value, "timestamp": self.created_at}
        if self.ttl is not None:
            data["expires"] = self.ttl
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StorageItem':
        """
        Create a StorageItem from its persisted field layout.

        Raises:
            DecodeError: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise DecodeError("Envelope must be a JSON object")
        if "value" not in data or "timestamp" not in data:
            raise DecodeError("Envelope requires 'value' and 'timestamp' fields")

        timestamp = data["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, Real):
            raise DecodeError("Envelope 'timestamp' must be a number")

        expires = data.get("expires")
        if expires is not None and (isinstance(expires, bool) or not isinstance(expires, Real)):
            raise DecodeError("Envelope 'expires' must be a number")

        return cls(value=data["value"], created_at=timestamp, ttl=expires)


def is_expired(item: StorageItem, now: int) -> bool:
    """True iff the item has a positive TTL and more than TTL ms passed since creation."""
    if not item.ttl or item.ttl <= 0:
        return False
    return now - item.created_at > item.ttl


def serialize_item(item: StorageItem, obfuscated: bool = False) -> str:
    """
    Serialize an item to its canonical text form.

    Args:
        item: Item to serialize
        obfuscated: Whether to pass the canonical text through ``obfuscate``

    Returns:
        Persistable text

    Raises:
        TypeError: If the value cannot be encoded as JSON
        ValueError: If the value contains circular references
    """
    text = json.dumps(item.to_dict(), separators=(',', ':'), ensure_ascii=False)
    return obfuscate(text) if obfuscated else text


def parse_strict(text: str, was_obfuscated: bool = False) -> StorageItem:
    """
    Parse text produced by ``serialize_item``.

    Raises:
        DecodeError: If the text is not a valid envelope
    """
    data = deobfuscate(text) if was_obfuscated else text
    try:
        decoded = json.loads(data)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise DecodeError("Invalid storage item format", cause=e)
    return StorageItem.from_dict(decoded)


# A decoder turns raw text into an item, or returns None to let the next one try.
Decoder = Callable[[str, bool, int], Optional[StorageItem]]


def _decode_envelope(text: str, was_obfuscated: bool, now: int) -> Optional[StorageItem]:
    try:
        return parse_strict(text, was_obfuscated)
    except DecodeError:
        return None


def _decode_envelope_flipped(text: str, was_obfuscated: bool, now: int) -> Optional[StorageItem]:
    # Written with a per-call obfuscation override, or under an older setting
    return _decode_envelope(text, not was_obfuscated, now)


def _decode_bare_json(text: str, was_obfuscated: bool, now: int) -> Optional[StorageItem]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    logger.debug("Item not in envelope format, read as bare JSON")
    return StorageItem(value=value, created_at=now, ttl=None)


def _wrap_raw_text(text: str, was_obfuscated: bool, now: int) -> StorageItem:
    logger.debug("Item not in envelope format, read as raw string")
    return StorageItem(value=text, created_at=now, ttl=None)


LENIENT_DECODERS: Sequence[Decoder] = (
    _decode_envelope,
    _decode_envelope_flipped,
    _decode_bare_json,
    _wrap_raw_text,
)


def parse_lenient(text: str, was_obfuscated: bool = False,
                  now: Optional[int] = None) -> StorageItem:
    """
    Parse stored text, accepting data that is not in envelope format.

    Decoders in ``LENIENT_DECODERS`` are tried in order; the last one wraps
    the raw text itself and always succeeds. Items recovered from non-envelope
    data are stamped with ``now`` and never expire.
    """
    if now is None:
        now = now_ms()

    for decoder in LENIENT_DECODERS:
        item = decoder(text, was_obfuscated, now)
        if item is not None:
            return item

    # _wrap_raw_text never returns None
    raise AssertionError("lenient decoder chain exhausted")

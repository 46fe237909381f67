"""
Item envelope package for storekit.

Provides the ``StorageItem`` envelope persisted for every stored value and
the codec functions turning items into text and back.
"""

from .envelope import (
    StorageItem,
    is_expired,
    serialize_item,
    parse_strict,
    parse_lenient,
    LENIENT_DECODERS,
)

__all__ = [
    "StorageItem",
    "is_expired",
    "serialize_item",
    "parse_strict",
    "parse_lenient",
    "LENIENT_DECODERS",
]

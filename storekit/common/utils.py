"""
Common utilities and helper functions for storekit.
"""

import time
from typing import List, Optional


NAMESPACE_SEPARATOR = ":"


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def namespace_key(key: str, namespace: Optional[str] = None) -> str:
    """Prefix a key with ``"<namespace>:"``; an empty namespace leaves it as is."""
    return f"{namespace}{NAMESPACE_SEPARATOR}{key}" if namespace else key


def strip_namespace(keys: List[str], namespace: Optional[str] = None) -> List[str]:
    """
    Keep only the keys belonging to a namespace and remove its prefix.

    Without a namespace every key is returned unchanged.
    """
    if not namespace:
        return list(keys)

    prefix = f"{namespace}{NAMESPACE_SEPARATOR}"
    return [key[len(prefix):] for key in keys if key.startswith(prefix)]

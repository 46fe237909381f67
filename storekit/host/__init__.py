"""
Host primitives package for storekit.

Raw stores and the cookie jar that adapters borrow, plus ``StorageHost``,
the bundle describing which of them an environment provides.
"""

from .raw import (
    RawStore,
    DictRawStore,
    FileRawStore,
    QuotaExceededError,
)

from .cookies import (
    Cookie,
    CookieJar,
    CookieRejectedError,
)

from .environment import StorageHost

__all__ = [
    "RawStore",
    "DictRawStore",
    "FileRawStore",
    "QuotaExceededError",
    "Cookie",
    "CookieJar",
    "CookieRejectedError",
    "StorageHost",
]

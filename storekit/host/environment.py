"""
Host environment description for storekit.

A ``StorageHost`` bundles the raw primitives the running environment can
offer to adapters. Missing primitives are ``None``; the corresponding
adapters then report themselves unavailable and the manager falls back to
memory.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..util.config import DEFAULT_ENV_PREFIX, get_config_value
from .cookies import CookieJar
from .raw import DictRawStore, FileRawStore, RawStore


logger = logging.getLogger(__name__)


@dataclass
class StorageHost:
    """Raw store primitives provided by the environment."""

    local: Optional[RawStore] = None
    session: Optional[RawStore] = None
    cookies: Optional[CookieJar] = None

    @property
    def has_persistent_storage(self) -> bool:
        """True when the host offers a local store that outlives the process."""
        return self.local is not None

    @classmethod
    def in_memory(cls, host: str = "localhost", path: str = "/",
                  clock: Optional[Callable[[], int]] = None) -> "StorageHost":
        """
        Create a host whose every primitive lives in process memory.

        Local storage is still reported as present, which makes this the host
        to use in tests and in embedded setups that want every adapter.
        """
        return cls(
            local=DictRawStore(),
            session=DictRawStore(),
            cookies=CookieJar(host=host, path=path, clock=clock),
        )

    @classmethod
    def detect(cls, env_prefix: str = DEFAULT_ENV_PREFIX) -> "StorageHost":
        """
        Build the host from environment configuration.

        ``<prefix>LOCAL_PATH`` enables a file-backed local store (with an
        optional ``<prefix>LOCAL_MAX_BYTES`` quota). Session and cookie
        primitives are in-process and always present.
        """
        local: Optional[RawStore] = None
        local_path = get_config_value("local_path", env_prefix=env_prefix)

        if local_path:
            max_bytes = get_config_value("local_max_bytes", cast_type=int, env_prefix=env_prefix)
            try:
                local = FileRawStore(local_path, max_bytes=max_bytes)
            except (OSError, ValueError) as e:
                logger.warning(f"Local storage file {local_path} unusable: {e}")

        cookie_host = get_config_value("cookie_host", "localhost", env_prefix=env_prefix)
        cookie_path = get_config_value("cookie_path", "/", env_prefix=env_prefix)

        return cls(
            local=local,
            session=DictRawStore(),
            cookies=CookieJar(host=cookie_host, path=cookie_path),
        )

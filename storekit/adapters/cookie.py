"""
Cookie storage adapter for storekit.

Each entry becomes one cookie named by the URI-encoded key, holding the
URI-encoded envelope text. Expiry is expressed through the cookie's
``expires`` attribute, in whole days, and is enforced by the cookie jar.

Scoping limitation: ``wipe()`` only expires cookies visible under this
adapter's path and domain. Cookies written with a different path or domain
are not guaranteed to be removed.
"""

import logging
import math
from dataclasses import dataclass
from email.utils import formatdate
from typing import Callable, List, Optional

from ..errors import BackendUnavailableError, StorageWriteError
from ..host.cookies import CookieJar, CookieRejectedError
from ..item.envelope import StorageItem
from ..util.encoding import uri_component_decode, uri_component_encode
from .base import PROBE_KEY, StorageAdapter


logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
EPOCH_HTTP_DATE = "Thu, 01 Jan 1970 00:00:00 GMT"
SAME_SITE_VALUES = ("strict", "lax", "none")


@dataclass
class CookieOptions:
    """Cookie attributes applied to every cookie the adapter writes."""

    default_days: int = 7
    path: str = "/"
    domain: Optional[str] = None
    secure: bool = False
    same_site: str = "lax"

    def validate(self) -> bool:
        """Validate the cookie options"""
        if self.default_days <= 0:
            raise ValueError("default_days must be positive")
        if not self.path.startswith("/"):
            raise ValueError("path must start with '/'")
        if self.same_site not in SAME_SITE_VALUES:
            raise ValueError(f"same_site must be one of: {SAME_SITE_VALUES}")
        return True


class CookieStorageAdapter(StorageAdapter):
    """Adapter storing envelopes as cookies in a borrowed ``CookieJar``."""

    name = "cookie"
    aliases = ("cookies",)

    def __init__(self,
                 jar: Optional[CookieJar],
                 options: Optional[CookieOptions] = None,
                 obfuscate: bool = False,
                 clock: Optional[Callable[[], int]] = None):
        """
        Initialize cookie adapter.

        Args:
            jar: Host cookie jar; None when the host has no cookies
            options: Cookie attributes (path, domain, secure, same_site, default_days)
            obfuscate: Whether values are obfuscated before being persisted
            clock: Millisecond clock used for cookie expiry dates
        """
        self.jar = jar
        self.options = options or CookieOptions()
        self.options.validate()
        super().__init__(obfuscate=obfuscate, clock=clock)

    def _attributes(self, expires: str, with_domain: bool = True) -> str:
        attributes = f"; expires={expires}; path={self.options.path}"
        if with_domain and self.options.domain:
            attributes += f"; domain={self.options.domain}"
        if self.options.secure:
            attributes += "; secure"
        return attributes + f"; samesite={self.options.same_site}"

    def _expire(self, encoded_name: str) -> None:
        self.jar.set_cookie(f"{encoded_name}=; expires={EPOCH_HTTP_DATE}; path={self.options.path}")
        if self.options.domain:
            self.jar.set_cookie(
                f"{encoded_name}=; expires={EPOCH_HTTP_DATE}; path={self.options.path}"
                f"; domain={self.options.domain}"
            )

    def _probe(self) -> None:
        if self.jar is None:
            raise BackendUnavailableError("Host provides no cookie jar", adapter=self.name)
        expires = formatdate((self._clock() + DAY_MS) / 1000, usegmt=True)
        self.jar.set_cookie(f"{PROBE_KEY}=1" + self._attributes(expires))
        self._expire(PROBE_KEY)

    def _visible_pairs(self) -> List[List[str]]:
        pairs = []
        for chunk in self.jar.get_cookie_string().split(";"):
            if chunk.strip():
                name, _, value = chunk.strip().partition("=")
                pairs.append([name.strip(), value])
        return pairs

    async def put(self, key: str, item: StorageItem, obfuscate: Optional[bool] = None) -> None:
        self.ensure_available()
        text = self._serialize(key, item, obfuscate)

        days = math.ceil(item.ttl / DAY_MS) if item.ttl else self.options.default_days
        expires = formatdate((self._clock() + days * DAY_MS) / 1000, usegmt=True)
        cookie_string = (
            f"{uri_component_encode(key)}={uri_component_encode(text)}" + self._attributes(expires)
        )

        try:
            self.jar.set_cookie(cookie_string)
        except CookieRejectedError as e:
            logger.error(f"Failed to set cookie '{key}': {e}")
            raise StorageWriteError(f"Failed to set cookie '{key}'", adapter=self.name, cause=e)
        logger.debug(f"Stored cookie '{key}' for {days} day(s)")

    async def fetch(self, key: str) -> Optional[StorageItem]:
        self.ensure_available()
        encoded_key = uri_component_encode(key)

        for name, value in self._visible_pairs():
            if name == encoded_key and value:
                try:
                    text = uri_component_decode(value)
                except ValueError:
                    text = value
                return self._decode(text)

        return None

    async def delete(self, key: str) -> None:
        self.ensure_available()
        self._expire(uri_component_encode(key))

    async def wipe(self) -> None:
        self.ensure_available()
        pairs = self._visible_pairs()
        for name, _ in pairs:
            self._expire(name)
        logger.info(f"Expired {len(pairs)} cookie(s) under path {self.options.path}")

    async def list_keys(self) -> List[str]:
        self.ensure_available()
        keys = []
        for name, _ in self._visible_pairs():
            try:
                keys.append(uri_component_decode(name))
            except ValueError:
                keys.append(name)
        return keys

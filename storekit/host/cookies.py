"""
In-process cookie jar for storekit.

``CookieJar`` plays the role of a browser's ``document.cookie``: writing
assigns one cookie string (``name=value; expires=...; path=...``), reading
returns ``name=value`` pairs for every live cookie visible from the jar's
host and path. Cookies are scoped by (name, domain, path), so two cookies
with the same name but different paths coexist, and deleting one of them
leaves the other in place.
"""

import logging
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Callable, Dict, List, Optional, Tuple

from ..common.utils import now_ms


logger = logging.getLogger(__name__)

MAX_COOKIE_BYTES = 4096


class CookieRejectedError(ValueError):
    """Raised when the jar refuses a cookie (too large, foreign domain, insecure context)."""
    pass


@dataclass
class Cookie:
    """A single stored cookie."""

    name: str
    value: str
    domain: str
    path: str = "/"
    host_only: bool = True
    expires_at: Optional[int] = None  # ms epoch; None = session cookie
    secure: bool = False
    same_site: Optional[str] = None

    def is_expired(self, now: int) -> bool:
        return self.expires_at is not None and self.expires_at <= now


def _default_path(request_path: str) -> str:
    if not request_path.startswith("/") or request_path.count("/") <= 1:
        return "/"
    return request_path[:request_path.rindex("/")]


def path_matches(request_path: str, cookie_path: str) -> bool:
    """RFC 6265 path-match."""
    if request_path == cookie_path:
        return True
    if request_path.startswith(cookie_path):
        return cookie_path.endswith("/") or request_path[len(cookie_path)] == "/"
    return False


def domain_matches(host: str, domain: str) -> bool:
    """RFC 6265 domain-match for a host name."""
    host = host.lower()
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


class CookieJar:
    """
    Cookie jar with ``document.cookie`` semantics.

    The jar is bound to one host and one document path; only cookies whose
    domain and path match are visible when reading.
    """

    def __init__(self,
                 host: str = "localhost",
                 path: str = "/",
                 secure_context: bool = True,
                 clock: Optional[Callable[[], int]] = None):
        """
        Initialize cookie jar.

        Args:
            host: Host name the jar belongs to
            path: Document path used for visibility and default cookie paths
            secure_context: Whether ``secure`` cookies may be set
            clock: Millisecond clock, defaults to wall-clock time
        """
        self.host = host.lower()
        self.path = path or "/"
        self.secure_context = secure_context
        self._clock = clock or now_ms
        self._cookies: Dict[Tuple[str, str, str], Cookie] = {}

    @property
    def cookie(self) -> str:
        """Read visible cookies as ``name=value; name2=value2``."""
        return self.get_cookie_string()

    @cookie.setter
    def cookie(self, cookie_string: str) -> None:
        self.set_cookie(cookie_string)

    def _parse(self, cookie_string: str) -> Cookie:
        parts = cookie_string.split(";")
        name, sep, value = parts[0].partition("=")
        name = name.strip()
        if not sep or not name:
            raise CookieRejectedError(f"Malformed cookie string: {cookie_string!r}")

        cookie = Cookie(name=name, value=value.strip(), domain=self.host,
                        path=_default_path(self.path))
        max_age: Optional[int] = None

        for attribute in parts[1:]:
            attr_name, _, attr_value = attribute.strip().partition("=")
            attr_name = attr_name.strip().lower()
            attr_value = attr_value.strip()

            if attr_name == "expires":
                try:
                    cookie.expires_at = int(parsedate_to_datetime(attr_value).timestamp() * 1000)
                except (TypeError, ValueError):
                    logger.debug(f"Ignoring unparseable cookie expiry: {attr_value!r}")
            elif attr_name == "max-age":
                try:
                    max_age = int(attr_value)
                except ValueError:
                    logger.debug(f"Ignoring unparseable cookie max-age: {attr_value!r}")
            elif attr_name == "path" and attr_value.startswith("/"):
                cookie.path = attr_value
            elif attr_name == "domain" and attr_value:
                domain = attr_value.lstrip(".").lower()
                if not domain_matches(self.host, domain):
                    raise CookieRejectedError(
                        f"Cookie domain '{domain}' does not match host '{self.host}'"
                    )
                cookie.domain = domain
                cookie.host_only = False
            elif attr_name == "secure":
                cookie.secure = True
            elif attr_name == "samesite":
                cookie.same_site = attr_value.lower()

        # Max-Age takes precedence over Expires
        if max_age is not None:
            cookie.expires_at = self._clock() + max_age * 1000

        return cookie

    def set_cookie(self, cookie_string: str) -> None:
        """
        Assign one cookie string, like writing to ``document.cookie``.

        A cookie whose expiry is in the past deletes the stored cookie with
        the same name, domain and path.

        Raises:
            CookieRejectedError: If the cookie is malformed, too large,
                scoped to a foreign domain or secure in an insecure context
        """
        cookie = self._parse(cookie_string)

        if len(cookie.name) + len(cookie.value) > MAX_COOKIE_BYTES:
            raise CookieRejectedError(
                f"Cookie '{cookie.name}' exceeds {MAX_COOKIE_BYTES} bytes"
            )
        if cookie.secure and not self.secure_context:
            raise CookieRejectedError(
                f"Secure cookie '{cookie.name}' rejected in insecure context"
            )

        scope = (cookie.name, cookie.domain, cookie.path)
        if cookie.is_expired(self._clock()):
            self._cookies.pop(scope, None)
            return

        self._cookies[scope] = cookie

    def _purge_expired(self) -> None:
        now = self._clock()
        for scope in [s for s, c in self._cookies.items() if c.is_expired(now)]:
            del self._cookies[scope]

    def visible_cookies(self) -> List[Cookie]:
        """Live cookies visible from the jar's host and path, longest path first."""
        self._purge_expired()
        visible = []
        for cookie in self._cookies.values():
            if cookie.host_only:
                if cookie.domain != self.host:
                    continue
            elif not domain_matches(self.host, cookie.domain):
                continue
            if not path_matches(self.path, cookie.path):
                continue
            if cookie.secure and not self.secure_context:
                continue
            visible.append(cookie)
        return sorted(visible, key=lambda c: len(c.path), reverse=True)

    def get_cookie_string(self) -> str:
        return "; ".join(f"{c.name}={c.value}" for c in self.visible_cookies())

    def all_cookies(self) -> List[Cookie]:
        """Every live cookie in the jar, visible or not."""
        self._purge_expired()
        return list(self._cookies.values())

    def __len__(self) -> int:
        return len(self.all_cookies())

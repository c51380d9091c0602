"""
Immutable cookie value shared by the cache, the persistors and the jar.
"""

__all__ = ["Cookie", "CookieKey"]

from dataclasses import dataclass
from typing import Any

from cookiekit.libs.matching import (
    SECURE_SCHEMES,
    domain_match,
    path_match,
    split_url,
)

# (name, domain, path, secure, host_only)
CookieKey = tuple[str, str, str, bool, bool]


@dataclass(frozen=True)
class Cookie:
    """A single HTTP cookie.

    Two cookies with the same :attr:`key` are the same cookie for replace and
    remove purposes; the value and expiry do not take part in identity.

    Attributes:
        name: Cookie name.
        value: Cookie value.
        domain: Lower-cased domain without a leading dot. An empty domain
            marks a shared cookie that matches every host.
        path: Path scope of the cookie.
        expires_at: Absolute expiry in POSIX seconds, or None for a session
            cookie.
        secure: Only send over secure schemes.
        http_only: Hidden from scripts; carried for round-tripping only.
        host_only: Only send to exactly ``domain``, not its sub-domains.
    """

    name: str
    value: str
    domain: str
    path: str = "/"
    expires_at: float | None = None
    secure: bool = False
    http_only: bool = False
    host_only: bool = False

    @property
    def key(self) -> CookieKey:
        """Identity tuple used to deduplicate cookies."""
        return (self.name, self.domain, self.path, self.secure, self.host_only)

    @property
    def persistent(self) -> bool:
        """True if the cookie carries an explicit expiry."""
        return self.expires_at is not None

    def is_expired(self, now: float) -> bool:
        """Return True once the expiry time is no longer in the future.

        Args:
            now: Current time in POSIX seconds.
        """
        return self.expires_at is not None and self.expires_at <= now

    def matches(self, url: Any) -> bool:
        """Check whether this cookie should be sent with a request to ``url``.

        Args:
            url: Target request URL (``str``, ``httpx.URL`` or ``yarl.URL``).

        Returns:
            True if the domain, path and scheme rules all accept the URL.
        """
        scheme, host, path = split_url(url)

        if self.domain:
            if self.host_only:
                if host != self.domain:
                    return False
            elif not domain_match(host, self.domain):
                return False

        if not path_match(path, self.path):
            return False

        return not self.secure or scheme in SECURE_SCHEMES

    def header_value(self) -> str:
        """Render as a ``name=value`` pair for a ``Cookie`` request header."""
        return f"{self.name}={self.value}"

"""
Host and path matching rules used to scope cookies to request URLs.
"""

__all__ = [
    "is_ip_address",
    "domain_match",
    "path_match",
    "default_path",
    "split_url",
    "SECURE_SCHEMES",
]

import ipaddress
from typing import Any
from urllib.parse import urlsplit

SECURE_SCHEMES = frozenset({"https", "wss"})


def is_ip_address(host: str) -> bool:
    """Return True if ``host`` is a literal IPv4 or IPv6 address."""
    if not host:
        return False
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def domain_match(host: str, domain: str) -> bool:
    """Check whether a request host falls inside a cookie domain.

    The host matches when it equals the domain, or when it is a sub-domain
    of it. IP addresses only ever match themselves.

    Args:
        host: Lower-cased request host.
        domain: Lower-cased cookie domain without a leading dot.

    Returns:
        True if the host is covered by the domain.
    """
    if host == domain:
        return True
    if not host.endswith(domain):
        return False
    prefix = host[: -len(domain)]
    return prefix.endswith(".") and not is_ip_address(host)


def path_match(request_path: str, cookie_path: str) -> bool:
    """Check whether a request path is covered by a cookie path.

    Args:
        request_path: Path component of the request URL.
        cookie_path: The cookie's ``Path`` attribute.

    Returns:
        True if the cookie should be sent for this path.
    """
    if request_path == cookie_path:
        return True
    if not request_path.startswith(cookie_path):
        return False
    if cookie_path.endswith("/"):
        return True
    return request_path[len(cookie_path)] == "/"


def default_path(request_path: str) -> str:
    """Compute the default cookie path for a response URL path.

    This is the "directory" of the request path: everything up to, but not
    including, the right-most ``/``. Falls back to ``/``.
    """
    if not request_path.startswith("/"):
        return "/"
    idx = request_path.rfind("/")
    if idx == 0:
        return "/"
    return request_path[:idx]


def split_url(url: Any) -> tuple[str, str, str]:
    """Split a URL into its scheme, host and path.

    Accepts anything whose ``str()`` is an absolute URL, so plain strings,
    ``httpx.URL`` and ``yarl.URL`` all work.

    Returns:
        A tuple ``(scheme, host, path)``; scheme and host are lower-cased and
        the path defaults to ``/``.
    """
    parts = urlsplit(str(url))
    host = (parts.hostname or "").rstrip(".")
    return parts.scheme.lower(), host, parts.path or "/"

"""
Conversion of ``Set-Cookie`` headers and ``Morsel`` objects into cookies.
"""

from __future__ import annotations

__all__ = [
    "parse_set_cookie",
    "parse_set_cookie_headers",
    "cookie_from_morsel",
]

import logging
import time
from collections.abc import Iterable
from http.cookiejar import http2time
from http.cookies import CookieError, Morsel, SimpleCookie
from typing import Any

from cookiekit.libs.matching import (
    default_path,
    domain_match,
    is_ip_address,
    split_url,
)
from cookiekit.schemas.cookie import Cookie

logger = logging.getLogger(__name__)

# Expiry assigned to cookies deleted via ``Max-Age <= 0``.
EXPIRED_AT = 0.0


def _resolve_expiry(morsel: Morsel[str], now: float) -> float | None:
    """Compute the absolute expiry of a morsel.

    ``Max-Age`` takes precedence over ``Expires``. Unparsable values are
    ignored as if the attribute were absent.
    """
    max_age = morsel["max-age"]
    if max_age:
        try:
            delta = int(max_age)
        except ValueError:
            logger.debug("Ignoring invalid Max-Age %r", max_age)
        else:
            return EXPIRED_AT if delta <= 0 else now + delta

    expires = morsel["expires"]
    if expires:
        parsed = http2time(expires)
        if parsed is None:
            logger.debug("Ignoring invalid Expires %r", expires)
        else:
            return float(parsed)
    return None


def _drop_unknown_attributes(header: str) -> str:
    """Remove attributes ``SimpleCookie`` would reject the whole header for.

    Older interpreters do not know newer attributes such as ``Partitioned``
    and fail to load any cookie carrying them.
    """
    pair, sep, rest = header.partition(";")
    if not sep:
        return header

    kept = [pair]
    for attr in rest.split(";"):
        name = attr.split("=", 1)[0].strip().lower()
        if name in Morsel._reserved:
            kept.append(attr)
        elif name:
            logger.debug("Ignoring unknown cookie attribute %r", name)
    return ";".join(kept)


def cookie_from_morsel(
    morsel: Morsel[str],
    url: Any,
    *,
    now: float | None = None,
) -> Cookie | None:
    """Build a :class:`Cookie` from a morsel received from ``url``.

    Args:
        morsel: A parsed cookie from :mod:`http.cookies`.
        url: The response URL the cookie was received from. May be empty, in
            which case cookies without a ``Domain`` become shared cookies.
        now: Reference time in POSIX seconds. Defaults to ``time.time()``.

    Returns:
        The cookie, or None if its ``Domain`` does not cover the URL host.
    """
    now = time.time() if now is None else now
    _, host, request_path = split_url(url) if url else ("", "", "/")

    domain = (morsel["domain"] or "").strip().lstrip(".").lower()
    host_only = False
    if not domain:
        domain = host
        host_only = bool(host)
    elif host:
        if is_ip_address(host):
            if domain != host:
                logger.debug(
                    "Rejected cookie %r: domain %r != IP host", morsel.key, domain
                )
                return None
            host_only = True
        elif not domain_match(host, domain):
            logger.debug(
                "Rejected cookie %r: domain %r does not match host %r",
                morsel.key,
                domain,
                host,
            )
            return None

    path = morsel["path"]
    if not path or not path.startswith("/"):
        path = default_path(request_path)

    return Cookie(
        name=morsel.key,
        value=morsel.value,
        domain=domain,
        path=path,
        expires_at=_resolve_expiry(morsel, now),
        secure=bool(morsel["secure"]),
        http_only=bool(morsel["httponly"]),
        host_only=host_only,
    )


def parse_set_cookie(
    header: str,
    url: Any,
    *,
    now: float | None = None,
) -> Cookie | None:
    """Parse a single ``Set-Cookie`` header value.

    Args:
        header: Raw header value, e.g. ``"sid=1; Path=/; Max-Age=60"``.
        url: The response URL the header was received from.
        now: Reference time in POSIX seconds.

    Returns:
        The parsed cookie, or None if the header is malformed or rejected.
    """
    parsed: SimpleCookie = SimpleCookie()
    try:
        parsed.load(_drop_unknown_attributes(header))
    except CookieError as exc:
        logger.debug("Dropping malformed Set-Cookie %r: %s", header, exc)
        return None

    morsel = next(iter(parsed.values()), None)
    if morsel is None:
        logger.debug("Dropping empty Set-Cookie %r", header)
        return None
    return cookie_from_morsel(morsel, url, now=now)


def parse_set_cookie_headers(
    headers: Iterable[str],
    url: Any,
    *,
    now: float | None = None,
) -> list[Cookie]:
    """Parse every ``Set-Cookie`` header of a response.

    Malformed or rejected headers are skipped.
    """
    now = time.time() if now is None else now
    cookies = []
    for header in headers:
        cookie = parse_set_cookie(header, url, now=now)
        if cookie is not None:
            cookies.append(cookie)
    return cookies

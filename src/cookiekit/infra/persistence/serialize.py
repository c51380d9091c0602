"""
JSON-friendly record format shared by the file-based persistors.
"""

from __future__ import annotations

__all__ = ["CookieRecord", "cookie_to_dict", "cookie_from_dict"]

from typing import Any, TypedDict

from cookiekit.schemas import Cookie


class CookieRecord(TypedDict):
    name: str
    value: str
    domain: str
    path: str
    expires_at: float | None
    secure: bool
    http_only: bool
    host_only: bool


def cookie_to_dict(cookie: Cookie) -> CookieRecord:
    """Convert a cookie into a plain record."""
    return CookieRecord(
        name=cookie.name,
        value=cookie.value,
        domain=cookie.domain,
        path=cookie.path,
        expires_at=cookie.expires_at,
        secure=cookie.secure,
        http_only=cookie.http_only,
        host_only=cookie.host_only,
    )


def cookie_from_dict(data: Any) -> Cookie | None:
    """Rebuild a cookie from a stored record.

    Args:
        data: A decoded record, usually read back from JSON.

    Returns:
        The cookie, or None if the record is not a valid cookie.
    """
    if not isinstance(data, dict):
        return None

    name = data.get("name")
    value = data.get("value")
    domain = data.get("domain", "")
    path = data.get("path", "/")
    expires_at = data.get("expires_at")

    if not isinstance(name, str) or not name:
        return None
    if not isinstance(value, str) or not isinstance(domain, str):
        return None
    if not isinstance(path, str) or not path.startswith("/"):
        return None
    if expires_at is not None:
        if isinstance(expires_at, bool) or not isinstance(expires_at, int | float):
            return None
        expires_at = float(expires_at)

    flags = [data.get(k, False) for k in ("secure", "http_only", "host_only")]
    if not all(isinstance(flag, bool) for flag in flags):
        return None
    secure, http_only, host_only = flags

    return Cookie(
        name=name,
        value=value,
        domain=domain,
        path=path,
        expires_at=expires_at,
        secure=secure,
        http_only=http_only,
        host_only=host_only,
    )

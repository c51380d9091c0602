"""
HTTP client integrations for the persistent cookie jar.

This module provides a unified entry point for plugging a
:class:`~cookiekit.infra.jar.PersistentCookieJar` into the supported HTTP
client libraries.
"""

__all__ = ["create_cookie_binding"]

from typing import Any

from cookiekit.infra.jar import PersistentCookieJar


def create_cookie_binding(backend: str, jar: PersistentCookieJar) -> Any:
    """Creates the client-specific adapter for a jar.

    Supported backends:
        * "aiohttp": returns an ``AiohttpCookieJar`` to pass as
          ``aiohttp.ClientSession(cookie_jar=...)``.
        * "httpx": returns an ``HttpxCookieHooks``; use its
          ``client_kwargs()`` / ``async_client_kwargs()``.

    Args:
        backend: Name of the HTTP client library.
        jar: The jar the adapter should read from and write to.

    Returns:
        The adapter instance for the selected backend.

    Raises:
        ValueError: If the specified backend name is not supported.
    """
    match backend:
        case "aiohttp":
            from ._aiohttp import AiohttpCookieJar

            return AiohttpCookieJar(jar)
        case "httpx":
            from ._httpx import HttpxCookieHooks

            return HttpxCookieHooks(jar)
        case _:
            raise ValueError(f"Unsupported backend: {backend!r}")

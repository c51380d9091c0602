"""
Durable storage backends for persistent cookies.

This module provides a unified factory for creating cookie persistors and
exposes the abstract interface every backend implements.
"""

__all__ = [
    "create_persistor",
    "CookiePersistor",
    "CorruptStoreError",
    "PersistenceError",
]

from pathlib import Path

from .base import CookiePersistor
from .errors import CorruptStoreError, PersistenceError


def create_persistor(
    backend: str,
    path: str | Path | None = None,
) -> CookiePersistor:
    """Creates and returns a cookie persistor instance.

    Supported backends:
        * "json"
        * "sqlite"
        * "memory"

    Args:
        backend: Name of the backend to use.
        path: Location of the backing store. If omitted, file-based backends
            use their default location under the user data directory.

    Returns:
        CookiePersistor: A persistor for the selected backend.

    Raises:
        ValueError: If the specified backend name is not supported.
    """
    match backend:
        case "json":
            from cookiekit.infra.paths import JSON_COOKIES_PATH

            from .json_file import JsonFileCookiePersistor

            return JsonFileCookiePersistor(path or JSON_COOKIES_PATH)
        case "sqlite":
            from cookiekit.infra.paths import SQLITE_COOKIES_PATH

            from .sqlite import SqliteCookiePersistor

            return SqliteCookiePersistor(path or SQLITE_COOKIES_PATH)
        case "memory":
            from .memory import MemoryCookiePersistor

            return MemoryCookiePersistor()
        case _:
            raise ValueError(f"Unsupported persistence backend: {backend!r}")

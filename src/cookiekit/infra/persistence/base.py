"""
Abstract interface for durable cookie storage.
"""

from __future__ import annotations

__all__ = ["CookiePersistor"]

import abc
from collections.abc import Iterable

from cookiekit.schemas import Cookie


class CookiePersistor(abc.ABC):
    """Durable store for persistent cookies, keyed by cookie identity.

    All operations are synchronous. Backends raise
    :class:`~cookiekit.infra.persistence.errors.PersistenceError` (or a
    subclass) when the underlying medium fails; callers are not expected to
    retry.
    """

    @abc.abstractmethod
    def load_all(self) -> list[Cookie]:
        """Return every cookie currently stored.

        Returns:
            list[Cookie]: The stored cookies, in no particular order.
        """
        ...

    @abc.abstractmethod
    def save_all(self, cookies: Iterable[Cookie]) -> None:
        """Insert or replace cookies by identity.

        Args:
            cookies: Persistent cookies to store.
        """
        ...

    @abc.abstractmethod
    def remove_all(self, cookies: Iterable[Cookie]) -> None:
        """Delete cookies by identity. Unknown identities are ignored.

        Args:
            cookies: Cookies whose identities should be removed.
        """
        ...

    @abc.abstractmethod
    def clear(self) -> None:
        """Delete every stored cookie."""
        ...

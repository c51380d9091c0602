"""
In-memory cookie collections used as the jar's fast lookup layer.
"""

from __future__ import annotations

__all__ = ["CookieCache", "SetCookieCache"]

import abc
from collections.abc import Iterable, Iterator

from cookiekit.schemas import Cookie, CookieKey


class CookieCache(abc.ABC):
    """A collection holding at most one cookie per identity.

    Implementations are not thread-safe; the owning jar serializes access.
    """

    @abc.abstractmethod
    def add_all(self, cookies: Iterable[Cookie]) -> None:
        """Insert each cookie, replacing any cached cookie with the same key.

        Args:
            cookies: Cookies to add, applied in order.
        """
        ...

    @abc.abstractmethod
    def remove(self, cookie: Cookie) -> None:
        """Drop the cached cookie sharing ``cookie``'s identity, if any."""
        ...

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove all cookies from the cache."""
        ...

    @abc.abstractmethod
    def __iter__(self) -> Iterator[Cookie]:
        """Iterate over the cached cookies.

        Calling :meth:`remove` on the cookie being visited must not disturb
        the iteration.
        """
        ...

    @abc.abstractmethod
    def __len__(self) -> int: ...


class SetCookieCache(CookieCache):
    """Dict-backed cache keyed by :attr:`Cookie.key`."""

    def __init__(self) -> None:
        self._cookies: dict[CookieKey, Cookie] = {}

    def add_all(self, cookies: Iterable[Cookie]) -> None:
        for cookie in cookies:
            # pop first so a replaced cookie moves to the end
            self._cookies.pop(cookie.key, None)
            self._cookies[cookie.key] = cookie

    def remove(self, cookie: Cookie) -> None:
        self._cookies.pop(cookie.key, None)

    def clear(self) -> None:
        self._cookies.clear()

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, cookie: object) -> bool:
        return isinstance(cookie, Cookie) and cookie.key in self._cookies

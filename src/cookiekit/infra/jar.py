"""
Thread-safe cookie jar combining an in-memory cache with durable storage.
"""

from __future__ import annotations

__all__ = ["ClearableCookieJar", "PersistentCookieJar", "create_cookie_jar"]

import abc
import logging
import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from cookiekit.infra.cache import CookieCache, SetCookieCache
from cookiekit.infra.persistence import CookiePersistor, create_persistor
from cookiekit.schemas import Cookie, JarConfig

logger = logging.getLogger(__name__)


class ClearableCookieJar(abc.ABC):
    """Cookie jar contract used by HTTP client adapters."""

    @abc.abstractmethod
    def save_from_response(self, url: Any, cookies: Iterable[Cookie]) -> None:
        """Store cookies received in a response from ``url``.

        Args:
            url: The response URL.
            cookies: Cookies parsed from the response.
        """
        ...

    @abc.abstractmethod
    def load_for_request(self, url: Any) -> list[Cookie]:
        """Return the cookies to attach to a request to ``url``.

        Args:
            url: The request URL.

        Returns:
            list[Cookie]: A new list of matching, unexpired cookies.
        """
        ...

    @abc.abstractmethod
    def clear_session(self) -> None:
        """Drop session cookies, keeping the persistent ones."""
        ...

    @abc.abstractmethod
    def clear(self) -> None:
        """Drop every cookie, including the persisted ones."""
        ...


class PersistentCookieJar(ClearableCookieJar):
    """Cookie jar that mirrors persistent cookies into a :class:`CookiePersistor`.

    The jar owns its cache and persistor. One lock guards every public
    operation for its whole body, persistor calls included, so no caller can
    observe the cache updated without the persistor or the other way round.

    Expired cookies are evicted lazily from both layers by
    :meth:`load_for_request`. A cookie counts as expired once its expiry is
    not in the future (``expires_at <= now``).

    Persistor failures propagate to the caller. The cache change made by the
    failing operation is kept.
    """

    def __init__(
        self,
        cache: CookieCache,
        persistor: CookiePersistor,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the jar and load the persisted cookies into the cache.

        Args:
            cache: An empty cache instance, owned by the jar from now on.
            persistor: The durable store, owned by the jar from now on.
            clock: Returns the current time in POSIX seconds.

        Raises:
            TypeError: If ``cache`` or ``persistor`` is None.
        """
        if cache is None or persistor is None:
            raise TypeError("PersistentCookieJar requires a cache and a persistor")

        self._cache = cache
        self._persistor = persistor
        self._clock = clock
        self._lock = threading.Lock()

        self._cache.add_all(self._persistor.load_all())

    def save_from_response(self, url: Any, cookies: Iterable[Cookie]) -> None:
        cookies = list(cookies)
        with self._lock:
            self._cache.add_all(cookies)
            self._persistor.save_all([c for c in cookies if c.persistent])

    def load_for_request(self, url: Any) -> list[Cookie]:
        expired: list[Cookie] = []
        valid: list[Cookie] = []
        with self._lock:
            now = self._clock()
            for cookie in self._cache:
                if cookie.is_expired(now):
                    expired.append(cookie)
                    self._cache.remove(cookie)
                elif cookie.matches(url):
                    valid.append(cookie)

            if expired:
                logger.debug("Evicting %d expired cookies", len(expired))
                self._persistor.remove_all(expired)
        return valid

    def clear_session(self) -> None:
        with self._lock:
            self._cache.clear()
            self._cache.add_all(self._persistor.load_all())

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._persistor.clear()
        logger.info("Cookie jar cleared")

    def cookies(self) -> list[Cookie]:
        """Return a snapshot of every cached cookie.

        Expired cookies are included until a :meth:`load_for_request` call
        evicts them.
        """
        with self._lock:
            return list(self._cache)

    def remove_if(self, predicate: Callable[[Cookie], bool]) -> list[Cookie]:
        """Remove every cookie matching ``predicate`` from cache and storage.

        The predicate runs without the jar's lock held, so it may call back
        into the jar. A cookie replaced or removed by another caller while
        the predicate runs is left alone.

        Args:
            predicate: Called with each cached cookie.

        Returns:
            list[Cookie]: The removed cookies.
        """
        with self._lock:
            snapshot = list(self._cache)

        matched = [c for c in snapshot if predicate(c)]
        if not matched:
            return []

        with self._lock:
            current = {c.key: c for c in self._cache}
            removed = [c for c in matched if current.get(c.key) == c]
            for cookie in removed:
                self._cache.remove(cookie)
            if removed:
                self._persistor.remove_all(removed)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


def create_cookie_jar(cfg: JarConfig | None = None) -> PersistentCookieJar:
    """Build a jar with a fresh :class:`SetCookieCache` and the configured store.

    Args:
        cfg: Jar configuration. Defaults to a JSON store in the user data
            directory.

    Returns:
        PersistentCookieJar: A jar already populated from storage.
    """
    cfg = cfg or JarConfig()
    path = Path(cfg.path).expanduser() if cfg.path else None
    persistor = create_persistor(cfg.backend, path)
    logger.debug("Creating cookie jar with %s backend", cfg.backend)
    return PersistentCookieJar(SetCookieCache(), persistor)

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from types import MappingProxyType
from email.utils import formatdate
from http.cookies import BaseCookie, CookieError, Morsel, SimpleCookie

from aiohttp.abc import AbstractCookieJar
from aiohttp.typedefs import LooseCookies
from yarl import URL

from cookiekit.infra.cookies import cookie_from_morsel, parse_set_cookie_headers
from cookiekit.infra.jar import PersistentCookieJar
from cookiekit.libs.matching import domain_match
from cookiekit.schemas import Cookie

logger = logging.getLogger(__name__)

_ENCODER: SimpleCookie = SimpleCookie()


def _to_morsel(cookie: Cookie) -> Morsel[str] | None:
    """Convert a cookie into a morsel, or None if the name is not a legal key."""
    morsel: Morsel[str] = Morsel()
    _, coded = _ENCODER.value_encode(cookie.value)
    try:
        morsel.set(cookie.name, cookie.value, coded)
    except CookieError:
        logger.debug("Cookie name %r cannot be represented as a morsel", cookie.name)
        return None

    morsel["domain"] = cookie.domain
    morsel["path"] = cookie.path
    if cookie.expires_at is not None:
        morsel["expires"] = formatdate(cookie.expires_at, usegmt=True)
    if cookie.secure:
        morsel["secure"] = True
    if cookie.http_only:
        morsel["httponly"] = True
    return morsel


class AiohttpCookieJar(AbstractCookieJar):
    """aiohttp cookie jar that delegates storage to a :class:`PersistentCookieJar`.

    Pass an instance as ``aiohttp.ClientSession(cookie_jar=...)``. Must be
    created while an event loop is running.

    The wrapped jar is called synchronously, so persistence I/O runs on the
    event loop thread.
    """

    def __init__(self, jar: PersistentCookieJar, *, quote_cookie: bool = True) -> None:
        super().__init__()
        self._jar = jar
        self._quote_cookie = quote_cookie

    @property
    def jar(self) -> PersistentCookieJar:
        return self._jar

    @property
    def quote_cookie(self) -> bool:
        return self._quote_cookie

    @property
    def unsafe(self) -> bool:
        """Always True: cookies from IP-address hosts are accepted."""
        return True

    @property
    def cookies(self) -> Mapping[tuple[str, str], SimpleCookie]:
        """Read-only view of the cached cookies grouped by ``(domain, path)``."""
        grouped: dict[tuple[str, str], SimpleCookie] = {}
        for cookie in self._jar.cookies():
            morsel = _to_morsel(cookie)
            if morsel is None:
                continue
            bucket = grouped.setdefault((cookie.domain, cookie.path), SimpleCookie())
            bucket[cookie.name] = morsel
        return MappingProxyType(grouped)

    @property
    def host_only_cookies(self) -> frozenset[tuple[str, str, str]]:
        """``(domain, path, name)`` of every host-only cookie."""
        return frozenset(
            (c.domain, c.path, c.name) for c in self._jar.cookies() if c.host_only
        )

    def clear(self, predicate: Callable[[Morsel[str]], bool] | None = None) -> None:
        if predicate is None:
            self._jar.clear()
            return

        def _matches(cookie: Cookie) -> bool:
            morsel = _to_morsel(cookie)
            return morsel is not None and predicate(morsel)

        self._jar.remove_if(_matches)

    def clear_domain(self, domain: str) -> None:
        domain = domain.lstrip(".").lower()
        self._jar.remove_if(lambda c: bool(c.domain) and domain_match(c.domain, domain))

    def update_cookies(self, cookies: LooseCookies, response_url: URL = URL()) -> None:
        items = cookies.items() if isinstance(cookies, Mapping) else cookies
        url = str(response_url)

        received: list[Cookie] = []
        for name, value in items:
            if isinstance(value, Morsel):
                morsels = [value]
            elif isinstance(value, BaseCookie):
                morsels = list(value.values())
            else:
                tmp: SimpleCookie = SimpleCookie()
                try:
                    tmp[name] = value
                except CookieError:
                    logger.debug("Dropping cookie with illegal name %r", name)
                    continue
                morsels = [tmp[name]]

            for morsel in morsels:
                if not morsel.key:
                    continue
                cookie = cookie_from_morsel(morsel, url)
                if cookie is not None:
                    received.append(cookie)

        if received:
            self._jar.save_from_response(url, received)

    def update_cookies_from_headers(
        self, headers: Sequence[str], response_url: URL
    ) -> None:
        url = str(response_url)
        received = parse_set_cookie_headers(headers, url)
        if received:
            self._jar.save_from_response(url, received)

    def filter_cookies(self, request_url: URL) -> BaseCookie[str]:
        filtered: BaseCookie[str] = (
            SimpleCookie() if self._quote_cookie else BaseCookie()
        )
        cookies = self._jar.load_for_request(str(request_url))
        # the most specific path is applied last and wins on duplicate names
        for cookie in sorted(cookies, key=lambda c: len(c.path)):
            try:
                filtered[cookie.name] = cookie.value
            except CookieError:
                logger.debug("Cannot send cookie with illegal name %r", cookie.name)
        return filtered

    def __iter__(self) -> Iterator[Morsel[str]]:
        for cookie in self._jar.cookies():
            morsel = _to_morsel(cookie)
            if morsel is not None:
                yield morsel

    def __len__(self) -> int:
        return len(self._jar)

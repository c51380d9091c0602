from collections.abc import Callable
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from cookiekit.infra.cookies import parse_set_cookie_headers
from cookiekit.infra.jar import PersistentCookieJar


class HttpxCookieHooks:
    """httpx event hooks that route cookies through a :class:`PersistentCookieJar`.

    Request hooks run for every hop of a redirect chain, so each hop gets the
    cookies scoped to its own URL.

    Example::

        hooks = HttpxCookieHooks(jar)
        with httpx.Client(**hooks.client_kwargs()) as client:
            client.get("https://example.com/")
    """

    def __init__(self, jar: PersistentCookieJar) -> None:
        self._jar = jar

    @property
    def jar(self) -> PersistentCookieJar:
        return self._jar

    def on_request(self, request: httpx.Request) -> None:
        """Attach matching cookies as a ``Cookie`` header."""
        cookies = self._jar.load_for_request(request.url)
        if not cookies:
            return

        cookies.sort(key=lambda c: len(c.path), reverse=True)
        header = "; ".join(c.header_value() for c in cookies)
        existing = request.headers.get("Cookie")
        request.headers["Cookie"] = f"{existing}; {header}" if existing else header

    def on_response(self, response: httpx.Response) -> None:
        """Store cookies from the response's ``Set-Cookie`` headers."""
        headers = response.headers.get_list("set-cookie")
        if not headers:
            return

        url = response.request.url
        received = parse_set_cookie_headers(headers, url)
        if received:
            self._jar.save_from_response(url, received)

    async def aon_request(self, request: httpx.Request) -> None:
        self.on_request(request)

    async def aon_response(self, response: httpx.Response) -> None:
        self.on_response(response)

    def event_hooks(self) -> dict[str, list[Callable[..., Any]]]:
        """Return hooks for ``httpx.Client(event_hooks=...)``."""
        return {"request": [self.on_request], "response": [self.on_response]}

    def async_event_hooks(self) -> dict[str, list[Callable[..., Any]]]:
        """Return hooks for ``httpx.AsyncClient(event_hooks=...)``."""
        return {"request": [self.aon_request], "response": [self.aon_response]}

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.Client``.

        Besides the hooks this installs a client cookie store that refuses
        server cookies, so httpx does not send a second copy of them.
        """
        return {"event_hooks": self.event_hooks(), "cookies": _refusing_jar()}

    def async_client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient``."""
        return {"event_hooks": self.async_event_hooks(), "cookies": _refusing_jar()}


def _refusing_jar() -> CookieJar:
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))

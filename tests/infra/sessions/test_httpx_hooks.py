import httpx
import pytest

from cookiekit.infra.cache import SetCookieCache
from cookiekit.infra.jar import PersistentCookieJar
from cookiekit.infra.persistence.memory import MemoryCookiePersistor
from cookiekit.infra.sessions._httpx import HttpxCookieHooks

BASE = "https://example.com"


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/login":
        return httpx.Response(
            200,
            headers=[
                ("set-cookie", "sid=abc; Path=/"),
                ("set-cookie", "remember=yes; Max-Age=3600; Path=/"),
            ],
        )
    if request.url.path == "/hop":
        return httpx.Response(
            302,
            headers=[("location", "/echo"), ("set-cookie", "hop=1; Path=/")],
        )
    return httpx.Response(200, json={"cookie": request.headers.get("cookie")})


def _cookie_pairs(header: str | None) -> set[str]:
    if not header:
        return set()
    return {part.strip() for part in header.split(";")}


def _jar(persistor) -> PersistentCookieJar:
    return PersistentCookieJar(SetCookieCache(), persistor)


def test_sync_client_round_trip_and_restart():
    persistor = MemoryCookiePersistor()
    hooks = HttpxCookieHooks(_jar(persistor))

    transport = httpx.MockTransport(_handler)
    with httpx.Client(transport=transport, **hooks.client_kwargs()) as client:
        client.get(f"{BASE}/login")
        data = client.get(f"{BASE}/echo").json()

    assert _cookie_pairs(data["cookie"]) == {"sid=abc", "remember=yes"}

    restarted = HttpxCookieHooks(_jar(persistor))
    with httpx.Client(transport=transport, **restarted.client_kwargs()) as client:
        data = client.get(f"{BASE}/echo").json()

    assert _cookie_pairs(data["cookie"]) == {"remember=yes"}


def test_cookies_are_scoped_to_host():
    hooks = HttpxCookieHooks(_jar(MemoryCookiePersistor()))
    transport = httpx.MockTransport(_handler)
    with httpx.Client(transport=transport, **hooks.client_kwargs()) as client:
        client.get(f"{BASE}/login")
        data = client.get("https://other.example.org/echo").json()

    assert data["cookie"] is None


def test_redirect_hop_cookies_are_applied():
    hooks = HttpxCookieHooks(_jar(MemoryCookiePersistor()))
    transport = httpx.MockTransport(_handler)
    with httpx.Client(
        transport=transport, follow_redirects=True, **hooks.client_kwargs()
    ) as client:
        data = client.get(f"{BASE}/hop").json()

    assert _cookie_pairs(data["cookie"]) == {"hop=1"}


def test_existing_cookie_header_is_kept():
    hooks = HttpxCookieHooks(_jar(MemoryCookiePersistor()))
    transport = httpx.MockTransport(_handler)
    with httpx.Client(transport=transport, **hooks.client_kwargs()) as client:
        client.get(f"{BASE}/login")
        data = client.get(f"{BASE}/echo", headers={"Cookie": "manual=1"}).json()

    assert _cookie_pairs(data["cookie"]) == {"manual=1", "sid=abc", "remember=yes"}


@pytest.mark.asyncio
async def test_async_client_round_trip():
    persistor = MemoryCookiePersistor()
    hooks = HttpxCookieHooks(_jar(persistor))

    transport = httpx.MockTransport(_handler)
    async with httpx.AsyncClient(
        transport=transport, **hooks.async_client_kwargs()
    ) as client:
        await client.get(f"{BASE}/login")
        resp = await client.get(f"{BASE}/echo")

    assert _cookie_pairs(resp.json()["cookie"]) == {"sid=abc", "remember=yes"}
    assert [c.name for c in persistor.load_all()] == ["remember"]

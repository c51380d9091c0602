import pytest

from cookiekit.infra.cache import SetCookieCache
from cookiekit.infra.jar import PersistentCookieJar
from cookiekit.infra.persistence.memory import MemoryCookiePersistor
from cookiekit.infra.sessions import create_cookie_binding


@pytest.fixture
def jar():
    return PersistentCookieJar(SetCookieCache(), MemoryCookiePersistor())


def test_httpx_binding(jar):
    from cookiekit.infra.sessions._httpx import HttpxCookieHooks

    binding = create_cookie_binding("httpx", jar)
    assert isinstance(binding, HttpxCookieHooks)
    assert binding.jar is jar


@pytest.mark.asyncio
async def test_aiohttp_binding(jar):
    from cookiekit.infra.sessions._aiohttp import AiohttpCookieJar

    binding = create_cookie_binding("aiohttp", jar)
    assert isinstance(binding, AiohttpCookieJar)
    assert binding.jar is jar


def test_unknown_backend(jar):
    with pytest.raises(ValueError):
        create_cookie_binding("requests", jar)

from __future__ import annotations

import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_set_cookie(request):
        resp = aiohttp.web.Response(text="cookie!")
        resp.set_cookie("token", "abc123")
        resp.set_cookie("remember", "yes", max_age=3600)
        return resp

    async def handler_expire_cookie(request):
        resp = aiohttp.web.Response(text="bye")
        resp.del_cookie("remember")
        return resp

    async def handler_echo_cookies(request):
        return aiohttp.web.json_response({"cookies": dict(request.cookies)})

    app = aiohttp.web.Application()
    app.router.add_get("/set-cookie", handler_set_cookie)
    app.router.add_get("/expire-cookie", handler_expire_cookie)
    app.router.add_get("/echo-cookies", handler_echo_cookies)

    server = await aiohttp_server(app)
    return server

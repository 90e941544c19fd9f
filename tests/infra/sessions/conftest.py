from __future__ import annotations

import asyncio
import base64

import aiohttp
import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_ok(request):
        return aiohttp.web.Response(text="hello", status=200)

    async def handler_redirect(request):
        raise aiohttp.web.HTTPFound("/ok")

    async def handler_loop(request):
        raise aiohttp.web.HTTPFound("/loop")

    async def handler_hop(request):
        n = int(request.match_info["n"])
        raise aiohttp.web.HTTPFound(f"/hop/{n - 1}" if n > 1 else "/ok")

    async def handler_slow(request):
        await asyncio.sleep(2)
        return aiohttp.web.Response(text="late")

    async def handler_missing(request):
        return aiohttp.web.Response(text="gone", status=404)

    async def handler_echo_headers(request):
        return aiohttp.web.json_response({"headers": dict(request.headers)})

    async def handler_gbk(request):
        return aiohttp.web.Response(
            body="优书网".encode("gbk"),
            headers={"Content-Type": "text/html; charset=gbk"},
        )

    app = aiohttp.web.Application()
    app.router.add_get("/ok", handler_ok)
    app.router.add_get("/redirect", handler_redirect)
    app.router.add_get("/loop", handler_loop)
    app.router.add_get("/hop/{n}", handler_hop)
    app.router.add_get("/slow", handler_slow)
    app.router.add_get("/missing", handler_missing)
    app.router.add_get("/echo-headers", handler_echo_headers)
    app.router.add_get("/gbk", handler_gbk)

    server = await aiohttp_server(app)
    return server


@pytest_asyncio.fixture
async def proxy_noauth_server(aiohttp_server):
    """Proxy that always returns 200 'proxied'."""
    seen = {"count": 0, "paths": [], "referers": []}

    async def handler(request):
        seen["count"] += 1
        seen["paths"].append(request.raw_path)
        seen["referers"].append(request.headers.get("Referer"))
        return aiohttp.web.Response(text="proxied", status=200)

    app = aiohttp.web.Application()
    app.router.add_route("*", "/{tail:.*}", handler)
    server = await aiohttp_server(app)
    server.seen = seen
    return server


@pytest_asyncio.fixture
async def proxy_auth_server(aiohttp_server):
    """Proxy enforcing Basic authentication."""
    required_user = "user1"
    required_pass = "pass1"
    token = base64.b64encode(f"{required_user}:{required_pass}".encode()).decode()
    required_header = f"Basic {token}"

    seen = {"count": 0, "auth_headers": [], "authed_count": 0}

    async def handler(request):
        seen["count"] += 1
        auth = request.headers.get("Proxy-Authorization")
        if auth:
            seen["auth_headers"].append(auth)

        if auth != required_header:
            return aiohttp.web.Response(
                text="proxy auth required",
                status=407,
                headers={"Proxy-Authenticate": "Basic"},
            )

        seen["authed_count"] += 1
        return aiohttp.web.Response(text="proxied", status=200)

    app = aiohttp.web.Application()
    app.router.add_route("*", "/{tail:.*}", handler)

    server = await aiohttp_server(app)
    server.required_user = required_user
    server.required_pass = required_pass
    server.required_header = required_header
    server.seen = seen
    return server

import pytest

from novelmeta.schemas import SessionConfig

from .utils import SUPPORTED_BACKENDS, safe_create

REFERER = "https://youshu.me"


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_search_request_goes_through_proxy(
    backend, test_server, proxy_noauth_server
):
    cfg = SessionConfig(
        proxy=str(proxy_noauth_server.make_url("/")),
        trust_env=False,
    )
    gbk_url = str(test_server.make_url("/gbk"))

    async with safe_create(backend, cfg) as s:
        r = await s.get(gbk_url, timeout=5, headers={"Referer": REFERER})

    assert r.content == b"proxied"
    seen = proxy_noauth_server.seen
    assert any(path.endswith("/gbk") for path in seen["paths"])
    assert REFERER in seen["referers"]


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_proxy_credentials_are_sent(backend, test_server, proxy_auth_server):
    cfg = SessionConfig(
        proxy=str(proxy_auth_server.make_url("/")),
        proxy_user=proxy_auth_server.required_user,
        proxy_pass=proxy_auth_server.required_pass,
        trust_env=False,
    )

    async with safe_create(backend, cfg) as s:
        r = await s.get(str(test_server.make_url("/ok")))

    assert r.ok
    assert r.content == b"proxied"
    assert proxy_auth_server.seen["authed_count"] >= 1
    assert proxy_auth_server.required_header in proxy_auth_server.seen["auth_headers"]


@pytest.mark.parametrize("backend", sorted(SUPPORTED_BACKENDS))
@pytest.mark.asyncio
async def test_missing_proxy_credentials_surface_as_status(
    backend, test_server, proxy_auth_server
):
    cfg = SessionConfig(proxy=str(proxy_auth_server.make_url("/")), trust_env=False)

    async with safe_create(backend, cfg) as s:
        r = await s.get(str(test_server.make_url("/ok")))

    assert r.status == 407
    assert not r.ok
    assert proxy_auth_server.seen["authed_count"] == 0

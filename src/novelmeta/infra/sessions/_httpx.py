from typing import Any, Unpack

import httpx

from .base import BaseSession, GetRequestKwargs, NetworkError, RequestError
from .response import BaseResponse


class HttpxSession(BaseSession):
    """Session backend based on httpx providing async HTTP/1.1 and HTTP/2 support."""

    _session: httpx.AsyncClient | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.is_closed:
            return
        limits = httpx.Limits(
            max_keepalive_connections=self._max_connections,
            max_connections=self._max_connections,
        )
        proxy = self._build_proxy_config(
            self._proxy,
            self._proxy_user,
            self._proxy_pass,
        )

        self._session = httpx.AsyncClient(
            http2=self._http2,
            timeout=self._timeout,
            verify=self._verify_ssl,
            headers=self._headers,
            cookies=self._cookies,
            limits=limits,
            proxy=proxy,
            trust_env=self._trust_env,
            max_redirects=self._max_redirects,
        )

    async def close(self) -> None:
        """
        Shutdown and clean up any resources.
        """
        if self._session is None:
            return
        if not self._session.is_closed:
            await self._session.aclose()
        self._session = None

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        allow_redirects: bool = True,
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        request_timeout = self._timeout if timeout is None else timeout
        try:
            r = await self.session.get(
                url,
                follow_redirects=allow_redirects,
                timeout=request_timeout,
                **kwargs,
            )
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise NetworkError(f"GET {url} failed: {e!r}") from e
        except httpx.HTTPError as e:
            raise RequestError(f"GET {url} failed: {e!r}") from e

        return BaseResponse(
            content=r.content,
            headers=r.headers.multi_items(),
            status=r.status_code,
            url=str(r.url),
        )

    @property
    def session(self) -> httpx.AsyncClient:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session

    @staticmethod
    def _build_proxy_config(
        proxy: str | None = None,
        proxy_user: str | None = None,
        proxy_pass: str | None = None,
    ) -> str | httpx.Proxy | None:
        """Builds proxy configuration."""
        if not proxy:
            return None

        if "@" in proxy:
            return proxy

        if proxy_user and proxy_pass:
            return httpx.Proxy(proxy, auth=(proxy_user, proxy_pass))

        return proxy

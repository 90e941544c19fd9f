from typing import Any, Unpack

import aiohttp

from .base import BaseSession, GetRequestKwargs, NetworkError, RequestError
from .response import BaseResponse


class AiohttpSession(BaseSession):
    """Session backend implemented with aiohttp for asynchronous HTTP requests."""

    _session: aiohttp.ClientSession | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.closed:
            return

        proxy_auth: aiohttp.BasicAuth | None = None
        if self._proxy_user and self._proxy_pass:
            proxy_auth = aiohttp.BasicAuth(self._proxy_user, self._proxy_pass)

        timeout = aiohttp.ClientTimeout(total=self._timeout)
        connector = aiohttp.TCPConnector(
            ssl=self._verify_ssl,
            limit_per_host=self._max_connections,
        )

        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers=self._headers,
            cookies=self._cookies,
            trust_env=self._trust_env,
            proxy=self._proxy,
            proxy_auth=proxy_auth,
        )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        allow_redirects: bool = True,
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            async with self.session.get(
                url,
                allow_redirects=allow_redirects,
                max_redirects=self._max_redirects,
                **kwargs,
                **extra,
            ) as r:
                content = await r.read()
                return BaseResponse(
                    content=content,
                    headers=list(r.headers.items()),
                    status=r.status,
                    url=str(r.url),
                )
        except (
            TimeoutError,
            aiohttp.ClientConnectionError,
            aiohttp.ClientPayloadError,
        ) as e:
            raise NetworkError(f"GET {url} failed: {e!r}") from e
        except aiohttp.ClientError as e:
            raise RequestError(f"GET {url} failed: {e!r}") from e

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session

# mypy: disable-error-code=unused-ignore

from typing import Any, Unpack

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import ConnectionError as CurlConnectionError
from curl_cffi.requests.exceptions import RequestException, Timeout

from .base import BaseSession, GetRequestKwargs, NetworkError, RequestError
from .response import BaseResponse


class CurlCffiSession(BaseSession):
    """Session backend using curl_cffi for browser-like HTTP requests."""

    _session: AsyncSession[Any] | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session:
            return

        proxy_auth = None
        if self._proxy_user and self._proxy_pass:
            proxy_auth = (self._proxy_user, self._proxy_pass)

        self._session = AsyncSession(
            headers=self._headers,
            cookies=self._cookies,
            timeout=self._timeout,
            impersonate=self._impersonate,  # type: ignore[arg-type]
            verify=self._verify_ssl,
            proxy=self._proxy,
            proxy_auth=proxy_auth,
            trust_env=self._trust_env,
            max_redirects=self._max_redirects,
        )

    async def close(self) -> None:
        """
        Shutdown and clean up any resources.
        """
        if self._session is not None:
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
        request_timeout = self._timeout if timeout is None else timeout
        try:
            r = await self.session.get(
                url,
                timeout=request_timeout,
                allow_redirects=allow_redirects,
                **kwargs,  # type: ignore[arg-type]
            )
        except (Timeout, CurlConnectionError) as e:
            raise NetworkError(f"GET {url} failed: {e!r}") from e
        except RequestException as e:
            raise RequestError(f"GET {url} failed: {e!r}") from e

        return BaseResponse(
            content=r.content,
            headers=list(r.headers.items()),
            status=r.status_code,
            url=str(r.url),
        )

    @property
    def session(self) -> AsyncSession[Any]:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session

from __future__ import annotations

import abc
import types
from collections.abc import Mapping, Sequence
from typing import Any, Self, TypedDict, Unpack

from novelmeta.infra.http_defaults import DEFAULT_USER_HEADERS
from novelmeta.schemas import SessionConfig

from .response import BaseResponse


class RequestError(Exception):
    """A request could not be completed by the session backend."""


class NetworkError(RequestError):
    """Connection-level failure (reset, DNS, connect or read timeout)."""


class GetRequestKwargs(TypedDict, total=False):
    headers: Mapping[str, str] | Sequence[tuple[str, str]]
    params: dict[str, Any] | list[tuple[str, Any]] | None


class BaseSession(abc.ABC):
    def __init__(self, cfg: SessionConfig | None = None, **kwargs: Any) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        cfg = cfg or SessionConfig()

        self._timeout = cfg.timeout
        self._max_connections = cfg.max_connections
        self._max_redirects = cfg.max_redirects
        self._verify_ssl = cfg.verify_ssl
        self._impersonate = cfg.impersonate
        self._http2 = cfg.http2
        self._proxy = cfg.proxy
        self._proxy_user = cfg.proxy_user
        self._proxy_pass = cfg.proxy_pass
        self._trust_env = cfg.trust_env
        self._cookies = cfg.cookies or {}
        self._session: Any = None

        self._headers = (
            cfg.headers.copy()
            if cfg.headers is not None
            else DEFAULT_USER_HEADERS.copy()
        )
        if cfg.user_agent:
            self._headers["User-Agent"] = cfg.user_agent

    @abc.abstractmethod
    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        """Initializes backend-specific resources.

        Args:
            **kwargs: Additional parameters required by backend implementations.
        """
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Releases and cleans up any allocated resources."""
        ...

    @abc.abstractmethod
    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        allow_redirects: bool = True,
        **kwargs: Unpack[GetRequestKwargs],
    ) -> BaseResponse:
        """Performs an HTTP GET request.

        Redirects are followed up to the configured ``max_redirects`` and the
        returned response carries the final URL.

        Args:
            url: Target URL.
            timeout: Total timeout for this request in seconds; falls back to
                the session default.
            allow_redirects: Whether redirects should be followed.
            **kwargs: Additional request parameters forwarded to the backend.

        Returns:
            BaseResponse: A response wrapper for the GET request.

        Raises:
            RuntimeError: If the session has not been initialized.
            NetworkError: On connection-level failures and timeouts.
            RequestError: On any other failure to complete the request.
        """
        ...

    @property
    def headers(self) -> dict[str, str]:
        """Returns a copy of the current session headers.

        Returns:
            dict[str, str]: Header names mapped to their values.
        """
        return self._headers.copy()

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()

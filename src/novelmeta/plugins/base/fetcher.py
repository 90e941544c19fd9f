"""
Base fetcher implementation for site plugins.

This module defines :class:`BaseFetcher`, which owns the HTTP session,
walks the timeout ladder on network failures and hands decoded pages to
the parser layer.
"""

from __future__ import annotations

import abc
import asyncio
import logging
import types
from collections.abc import Awaitable, Callable
from typing import Any, Self
from urllib.parse import quote

from novelmeta.infra.sessions import (
    BaseResponse,
    BaseSession,
    NetworkError,
    RequestError,
    create_session,
)
from novelmeta.libs.fields import normalize_url
from novelmeta.libs.html import decode_html
from novelmeta.plugins.base.errors import TransportError
from novelmeta.schemas import FetcherConfig, RawPage

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class BaseFetcher(abc.ABC):
    """Base class for site-specific fetchers.

    ``BaseFetcher`` manages the underlying HTTP session, the retry ladder and
    charset decoding. Every request carries the session headers plus a
    ``Referer`` pointing at :attr:`BASE_URL`.

    Retries happen only for :class:`NetworkError`. Attempt ``n`` uses the
    ``n``-th timeout of the ladder and is preceded by a pause of
    ``retry_delay * (n - 1)`` seconds.
    """

    site_name: str
    site_key: str

    BASE_URL: str

    def __init__(
        self,
        config: FetcherConfig | None = None,
        *,
        session: BaseSession | None = None,
        sleep: SleepFunc | None = None,
        **kwargs: Any,
    ) -> None:
        """Initializes a new fetcher instance.

        Args:
            config: Optional fetcher configuration. If omitted, a default
                :class:`FetcherConfig` instance is created.
            session: Optional preconfigured HTTP session. If omitted, a new
                session is created via :func:`create_session`.
            sleep: Coroutine used for backoff pauses; defaults to
                :func:`asyncio.sleep`.
            **kwargs: Additional keyword arguments forwarded to
                :func:`create_session` when ``session`` is not provided.

        Raises:
            ValueError: If the timeout ladder is empty.
        """
        config = config or FetcherConfig()
        if not config.request_timeouts:
            raise ValueError(f"{self.site_key}: request_timeouts must not be empty")

        self._timeouts = tuple(config.request_timeouts)
        self._retry_delay = config.retry_delay
        self._default_encoding = config.default_encoding
        self._sleep = sleep or asyncio.sleep

        self.session = session or create_session(
            backend=config.backend,
            cfg=config.session_cfg,
            **kwargs,
        )

    async def init(self) -> None:
        """Initializes the underlying session."""
        await self.session.init()

    async def close(self) -> None:
        """Closes the underlying session and releases associated resources."""
        await self.session.close()

    @abc.abstractmethod
    async def fetch_search_page(self, keyword: str) -> RawPage:
        """Fetches the search result page for a keyword.

        The remote side may redirect straight to a single work's page; the
        returned :class:`RawPage` carries the final URL either way.

        Args:
            keyword: Trimmed, non-empty search keyword.

        Returns:
            The decoded page.

        Raises:
            TransportError: If the page cannot be retrieved.
        """
        ...

    async def fetch_detail_page(self, url: str) -> RawPage:
        """Fetches a work's detail page.

        Args:
            url: Absolute URL or a path relative to :attr:`BASE_URL`.

        Returns:
            The decoded page.

        Raises:
            TransportError: If the page cannot be retrieved.
        """
        return await self.fetch_page(url)

    async def fetch_page(self, url: str) -> RawPage:
        """Requests a page and decodes its body.

        Args:
            url: Absolute URL or a path relative to :attr:`BASE_URL`.

        Returns:
            The decoded page, tagged with its final URL.

        Raises:
            TransportError: If the page cannot be retrieved.
        """
        target = self._abs_url(url)
        resp = await self.request(target)
        text = decode_html(resp.content, resp.headers, default=self._default_encoding)
        return RawPage(url=resp.url or target, html=text)

    async def request(self, url: str) -> BaseResponse:
        """Performs a GET request, walking the timeout ladder on network errors.

        Args:
            url: Absolute target URL.

        Returns:
            A response whose status lies in 200-399.

        Raises:
            TransportError: If every attempt failed at the network level, the
                request failed for a non-retryable reason, or the final
                status is outside 200-399.
        """
        headers = self._request_headers()
        attempts = len(self._timeouts)
        last_error: NetworkError | None = None

        for attempt, timeout in enumerate(self._timeouts, start=1):
            if last_error is not None:
                delay = self._retry_delay * (attempt - 1)
                logger.info(
                    "Retrying %s (attempt=%d/%d, timeout=%.1fs) after %.2fs: %s",
                    url,
                    attempt,
                    attempts,
                    timeout,
                    delay,
                    last_error,
                )
                await self._sleep(delay)

            try:
                resp = await self.session.get(url, timeout=timeout, headers=headers)
            except NetworkError as e:
                last_error = e
                continue
            except RequestError as e:
                raise TransportError(f"Request to {url} failed: {e}", url=url) from e

            if not resp.ok:
                raise TransportError(
                    f"Request to {url} failed with status {resp.status}",
                    url=url,
                    status=resp.status,
                )
            return resp

        raise TransportError(
            f"Request to {url} failed after {attempts} attempts: {last_error}",
            url=url,
        ) from last_error

    def _request_headers(self) -> dict[str, str]:
        return {**self.session.headers, "Referer": self.BASE_URL}

    @staticmethod
    def _quote(q: str) -> str:
        """Percent-encode a path segment the way browsers encode URI components."""
        return quote(q, safe="!~*'()")

    @classmethod
    def _abs_url(cls, url: str) -> str:
        """Converts a possibly relative URL into an absolute URL."""
        return normalize_url(url, cls.BASE_URL)

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

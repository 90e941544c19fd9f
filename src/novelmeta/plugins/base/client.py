from __future__ import annotations

import asyncio
import logging
import types
from collections.abc import Iterable
from typing import Any, Self

from novelmeta.infra.sessions import BaseSession
from novelmeta.plugins.base.errors import (
    ExtractionAmbiguity,
    TransportError,
    ValidationError,
)
from novelmeta.plugins.base.fetcher import SleepFunc
from novelmeta.plugins.registry import hub
from novelmeta.schemas import (
    BatchSearchItem,
    ClientConfig,
    DetailMeta,
    RawPage,
    SearchRecord,
)

logger = logging.getLogger(__name__)

NO_RESULTS = "no results"


class BaseClient:
    """Public entry point for one catalogue site.

    A client wires the site's fetcher and parser together. Every call builds
    its own request, decoded page and markup tree, so concurrent calls on one
    client share nothing but the HTTP connection pool.
    """

    site_key: str

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: BaseSession | None = None,
        sleep: SleepFunc | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the client for a specific site.

        Args:
            config: Client configuration settings. If not provided, a default
                `ClientConfig` instance is created.
            session: Optional session instance to use for network requests.
            sleep: Coroutine used for retry backoff and batch pauses; defaults
                to :func:`asyncio.sleep`.
            **kwargs: Additional keyword arguments for subclasses.
        """
        cfg = config or ClientConfig()

        self._batch_interval = cfg.batch_interval
        self._sleep = sleep or asyncio.sleep

        self.fetcher = hub.build_fetcher(
            self.site_key, cfg.fetcher_cfg, session=session, sleep=self._sleep
        )
        self.parser = hub.build_parser(self.site_key, cfg.parser_cfg)

    async def init(self) -> None:
        """Initialize underlying resources."""
        await self.fetcher.init()

    async def close(self) -> None:
        """Close underlying resources."""
        await self.fetcher.close()

    async def search(
        self,
        keyword: str,
        *,
        limit: int | None = None,
    ) -> list[SearchRecord]:
        """Search the catalogue for works matching the keyword.

        Args:
            keyword: Title or author query; surrounding whitespace is ignored.
            limit: Optional cap below the parser's ``max_results``.

        Returns:
            Records in document order; empty when nothing matched.

        Raises:
            ValidationError: If the keyword is blank or ``limit`` is negative.
            TransportError: If the search page cannot be retrieved.
        """
        trimmed = (keyword or "").strip()
        if not trimmed:
            raise ValidationError("Search keyword must not be empty")
        if limit is not None and limit < 0:
            raise ValidationError(f"Result limit must not be negative: {limit}")

        page = await self.fetcher.fetch_search_page(trimmed)
        return self._extract_records(page, limit)

    async def fetch_detail(self, source_url: str) -> DetailMeta:
        """Look up category, platform and synopsis of a single work.

        Args:
            source_url: Detail page URL, absolute or relative to the site.

        Returns:
            The fields that were found; missing fields are simply absent.

        Raises:
            ValidationError: If the URL is blank.
            TransportError: If the page cannot be retrieved.
        """
        url = (source_url or "").strip()
        if not url:
            raise ValidationError("Source URL must not be empty")

        page = await self.fetcher.fetch_detail_page(url)
        return self.parser.parse_detail_meta(page)

    async def batch_search(self, keywords: Iterable[str]) -> list[BatchSearchItem]:
        """Search several keywords one after another.

        Keywords are never searched in parallel; a pause of ``batch_interval``
        seconds separates consecutive requests. A failing keyword is recorded
        in its item and does not stop the batch.

        Args:
            keywords: Keywords in the order they should be searched.

        Returns:
            One item per keyword, holding the first record found.
        """
        items: list[BatchSearchItem] = []
        for idx, keyword in enumerate(keywords):
            if idx and self._batch_interval > 0:
                await self._sleep(self._batch_interval)

            try:
                records = await self.search(keyword)
            except (ValidationError, TransportError) as e:
                logger.warning("Batch search failed for %r: %s", keyword, e)
                items.append(_batch_item(keyword, error=str(e)))
                continue

            if records:
                items.append(_batch_item(keyword, record=records[0]))
            else:
                items.append(_batch_item(keyword, error=NO_RESULTS))
        return items

    def _extract_records(
        self,
        page: RawPage,
        limit: int | None,
    ) -> list[SearchRecord]:
        if self.parser.is_detail_page(page):
            record = self.parser.parse_book_detail(page)
            return [record] if record else []

        try:
            return self.parser.parse_search_result(page, limit=limit)
        except ExtractionAmbiguity as e:
            logger.debug("Re-dispatching %s as a detail page: %s", page.url, e)
            record = self.parser.parse_book_detail(page)
            if record:
                return [record]
            return e.records

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


def _batch_item(
    keyword: str,
    *,
    record: SearchRecord | None = None,
    error: str | None = None,
) -> BatchSearchItem:
    return {
        "keyword": keyword,
        "success": record is not None,
        "data": record,
        "error": error,
    }

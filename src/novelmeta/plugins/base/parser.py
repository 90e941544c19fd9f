"""
Abstract base class providing common behavior for site-specific parsers.
"""

from __future__ import annotations

import abc
import re
from typing import Any

from novelmeta.libs.fields import normalize_url, to_proxy_image_url
from novelmeta.schemas import (
    DetailMeta,
    ParserConfig,
    RawPage,
    SearchRecord,
)


class BaseParser(abc.ABC):
    """Base class defining the interface for turning catalogue pages into
    records. Subclasses provide site-specific extraction logic.

    Parsers never raise for missing fields: anything that cannot be found
    degrades to the record defaults.
    """

    site_name: str
    site_key: str
    BASE_URL: str

    _SPACE_RE = re.compile(r"\s+")
    _ZERO_WIDTH_RE = re.compile(r"[\u200B-\u200D\uFEFF]")

    def __init__(self, config: ParserConfig | None = None, **kwargs: Any) -> None:
        """Initialize the parser with a configuration object.

        Args:
            config: ParserConfig controlling result limits and thresholds.
        """
        config = config or ParserConfig()

        self._max_results = config.max_results
        self._min_synopsis_length = config.min_synopsis_length

    @abc.abstractmethod
    def is_detail_page(self, page: RawPage) -> bool:
        """Decide whether a fetched page describes a single work.

        Args:
            page: Page returned by the fetcher, including its final URL.

        Returns:
            True for a detail page, False for a listing page.
        """
        ...

    @abc.abstractmethod
    def parse_search_result(
        self,
        page: RawPage,
        limit: int | None = None,
    ) -> list[SearchRecord]:
        """Extract records from a listing page, in document order.

        Args:
            page: Listing page.
            limit: Optional cap below the configured ``max_results``.

        Returns:
            Extracted records; empty when the page holds no usable rows.

        Raises:
            ExtractionAmbiguity: A row looks like a misrouted detail fragment.
        """
        ...

    @abc.abstractmethod
    def parse_book_detail(self, page: RawPage) -> SearchRecord | None:
        """Extract a single record from a detail page.

        Returns:
            The record, or None when no title can be resolved.
        """
        ...

    @abc.abstractmethod
    def parse_detail_meta(self, page: RawPage) -> DetailMeta:
        """Extract the partial metadata of a detail page.

        Returns:
            A mapping holding only the fields that were found.
        """
        ...

    @classmethod
    def _norm_space(cls, s: str, c: str = " ") -> str:
        """Collapse runs of whitespace (including full-width and newlines).

        Args:
            s: Input string to normalize.
            c: Replacement character for collapsed whitespace.

        Returns:
            Normalized string.
        """
        return cls._SPACE_RE.sub(c, cls._ZERO_WIDTH_RE.sub("", s)).strip()

    @classmethod
    def _abs_url(cls, url: str) -> str:
        """Convert a possibly relative URL into an absolute URL."""
        return normalize_url(url, cls.BASE_URL)

    @classmethod
    def _cover_url(cls, src: str) -> str:
        """Absolutize an image source and route it through the image proxy."""
        return to_proxy_image_url(cls._abs_url(src))

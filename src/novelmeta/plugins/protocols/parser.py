"""
Protocol definition for turning catalogue pages into records.
"""

from __future__ import annotations

from typing import Any, Protocol

from novelmeta.schemas import DetailMeta, ParserConfig, RawPage, SearchRecord


class ParserProtocol(Protocol):
    """Protocol for a site-specific parser implementation.

    A parser classifies pages and extracts records from them. It performs no
    I/O and never raises for missing fields.
    """

    def __init__(self, config: ParserConfig | None = None, **kwargs: Any) -> None: ...

    def is_detail_page(self, page: RawPage) -> bool: ...

    def parse_search_result(
        self,
        page: RawPage,
        limit: int | None = None,
    ) -> list[SearchRecord]: ...

    def parse_book_detail(self, page: RawPage) -> SearchRecord | None: ...

    def parse_detail_meta(self, page: RawPage) -> DetailMeta: ...

"""
Protocol definition for retrieving catalogue pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from novelmeta.schemas import FetcherConfig, RawPage

if TYPE_CHECKING:
    from novelmeta.infra.sessions import BaseSession


class FetcherProtocol(Protocol):
    """Protocol for a site-specific fetcher.

    A fetcher performs network requests and returns decoded pages tagged with
    the URL they were finally served from.
    """

    def __init__(
        self,
        config: FetcherConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> None: ...

    async def init(self) -> None: ...

    async def close(self) -> None: ...

    async def fetch_search_page(self, keyword: str) -> RawPage:
        """Fetch the search result page for a keyword."""
        ...

    async def fetch_detail_page(self, url: str) -> RawPage:
        """Fetch a single work's detail page."""
        ...

"""
Protocol definition for the public per-site client.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

from novelmeta.schemas import BatchSearchItem, ClientConfig, DetailMeta, SearchRecord

if TYPE_CHECKING:
    from novelmeta.infra.sessions import BaseSession


class ClientProtocol(Protocol):
    """Protocol for a site client exposing the search operations."""

    site_key: str

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> None: ...

    async def init(self) -> None: ...

    async def close(self) -> None: ...

    async def search(
        self,
        keyword: str,
        *,
        limit: int | None = None,
    ) -> list[SearchRecord]: ...

    async def fetch_detail(self, source_url: str) -> DetailMeta: ...

    async def batch_search(self, keywords: Iterable[str]) -> list[BatchSearchItem]: ...

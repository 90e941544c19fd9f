"""
Data contracts and type definitions.
"""

__all__ = [
    "ClientConfig",
    "FetcherConfig",
    "ParserConfig",
    "SessionConfig",
    "BatchSearchItem",
    "DetailMeta",
    "SearchRecord",
    "RawPage",
    "DEFAULT_AUTHOR",
    "DEFAULT_DESCRIPTION",
]

from .config import (
    ClientConfig,
    FetcherConfig,
    ParserConfig,
    SessionConfig,
)
from .page import RawPage
from .record import (
    DEFAULT_AUTHOR,
    DEFAULT_DESCRIPTION,
    BatchSearchItem,
    DetailMeta,
    SearchRecord,
)

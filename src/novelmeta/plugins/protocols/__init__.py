"""
Protocol exports for plugin components.

This module aggregates the protocol interfaces used by the plugin registry
for client, fetcher and parser classes.
"""

__all__ = [
    "ClientProtocol",
    "FetcherProtocol",
    "ParserProtocol",
]

from .client import ClientProtocol
from .fetcher import FetcherProtocol
from .parser import ParserProtocol

"""
HTML helpers shared by site parsers: charset-aware decoding and a small
structural query layer over lxml trees.
"""

__all__ = [
    "decode_html",
    "extract_charset",
    "normalize_encoding",
    "sniff_meta_charset",
    "Node",
    "xclass",
]

from .charset import (
    decode_html,
    extract_charset,
    normalize_encoding,
    sniff_meta_charset,
)
from .markup import Node, xclass

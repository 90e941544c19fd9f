"""
Resolve raw response bodies to text.

The charset is taken from the ``Content-Type`` header, then from a
``charset=`` declaration near the top of the document, then from a fixed
default for the catalogue's legacy Chinese encodings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

logger = logging.getLogger(__name__)

SNIFF_BYTES = 2048
FALLBACK_ENCODING = "utf-8"

_HEADER_CHARSET_RE = re.compile(r"charset=([\w-]+)", re.IGNORECASE)
_META_CHARSET_RE = re.compile(rb"charset=[\"']?([\w-]+)", re.IGNORECASE)

# gb18030 decodes everything gbk and gb2312 can.
_ENCODING_ALIASES = {
    "gb2312": "gb18030",
    "gbk": "gb18030",
    "gb18030": "gb18030",
    "utf8": "utf-8",
}


def extract_charset(content_type: str | None) -> str | None:
    """Return the charset parameter of a ``Content-Type`` value, if any."""
    if not content_type:
        return None
    m = _HEADER_CHARSET_RE.search(content_type)
    return m.group(1) if m else None


def sniff_meta_charset(content: bytes, limit: int = SNIFF_BYTES) -> str | None:
    """Look for a ``charset=`` declaration in the first ``limit`` bytes."""
    m = _META_CHARSET_RE.search(content[:limit])
    return m.group(1).decode("ascii") if m else None


def normalize_encoding(name: str) -> str:
    """Lower-case an encoding name and collapse known aliases."""
    lower = name.strip().lower()
    return _ENCODING_ALIASES.get(lower, lower)


def decode_html(
    content: bytes,
    headers: Mapping[str, str] | None = None,
    default: str = "gbk",
) -> str:
    """Decode an HTML body using the best available charset hint.

    Undecodable byte sequences are replaced rather than raised; an unknown
    charset name falls back to UTF-8. This function never raises for any
    ``bytes`` input.

    Args:
        content: Raw response body.
        headers: Response headers; the lookup of ``Content-Type`` is
            case-insensitive.
        default: Charset used when neither headers nor markup declare one.

    Returns:
        The decoded document text.
    """
    declared = extract_charset(_content_type(headers))
    sniffed = None if declared else sniff_meta_charset(content)
    candidate = normalize_encoding(declared or sniffed or default)

    try:
        return content.decode(candidate, errors="replace")
    except (LookupError, ValueError) as e:
        logger.warning(
            "Decoding with %r failed, falling back to %s: %s",
            candidate,
            FALLBACK_ENCODING,
            e,
        )
        return content.decode(FALLBACK_ENCODING, errors="replace")


def _content_type(headers: Mapping[str, str] | None) -> str | None:
    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value
    return None

import re

IMAGE_PROXY_PREFIX = "https://images.weserv.nl/?url="

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_HTTPS_RE = re.compile(r"^https://", re.IGNORECASE)


def normalize_url(value: str | None, base_url: str) -> str:
    """Turn a possibly relative link into an absolute URL.

    Args:
        value: Link as found in the markup.
        base_url: Origin to resolve against, without a trailing slash.

    Returns:
        The absolute URL, or ``""`` for empty input.
    """
    value = (value or "").strip()
    if not value:
        return ""
    if value.startswith("http"):
        return value
    if value.startswith("//"):
        return f"https:{value}"
    if value.startswith("/"):
        return f"{base_url}{value}"
    return f"{base_url}/{value}"


def to_proxy_image_url(value: str | None) -> str:
    """Rewrite an absolute image URL to go through the image proxy.

    The scheme is stripped and an ``ssl:`` marker records whether the
    original was served over HTTPS. Already proxied URLs are returned as is.
    """
    value = (value or "").strip()
    if not value:
        return ""
    if value.startswith(IMAGE_PROXY_PREFIX):
        return value
    marker = "ssl:" if _HTTPS_RE.match(value) else ""
    return f"{IMAGE_PROXY_PREFIX}{marker}{_SCHEME_RE.sub('', value)}"

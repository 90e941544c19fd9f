"""
Backend-agnostic response objects for the NovelMeta session layer.

Responses carry the raw body bytes; turning them into text is left to
:func:`novelmeta.libs.html.decode_html`, which needs both the body and the
headers to pick a charset.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping, Sequence

HeaderInput = Mapping[str, str] | Sequence[tuple[str, str]]


class Headers(MutableMapping[str, str]):
    """Case-insensitive HTTP header container keeping repeated fields.

    Item access returns the first value of a field. Assignment replaces all
    values, while :meth:`add` appends one.
    """

    __slots__ = ("_store",)

    def __init__(self, headers: HeaderInput | None = None) -> None:
        self._store: dict[str, list[str]] = {}
        pairs = headers.items() if isinstance(headers, Mapping) else headers or ()
        for key, value in pairs:
            self.add(key, value)

    def add(self, key: str, value: str | None) -> None:
        self._store.setdefault(key.lower(), []).append(value or "")

    def get_all(self, key: str) -> list[str]:
        return list(self._store.get(key.lower(), []))

    def __getitem__(self, key: str) -> str:
        values = self._store.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: str) -> None:
        self._store[key.lower()] = [value]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __repr__(self) -> str:
        return f"<Headers {sorted(self._store)}>"


class BaseResponse:
    """A lightweight HTTP response produced by every session backend.

    Args:
        content: Raw response body.
        headers: Response headers.
        status: HTTP status code.
        url: Final URL after following redirects.
    """

    __slots__ = ("content", "headers", "status", "url")

    def __init__(
        self,
        *,
        content: bytes,
        headers: HeaderInput | None = None,
        status: int = 200,
        url: str = "",
    ) -> None:
        self.content = content
        self.headers = Headers(headers)
        self.status = status
        self.url = url

    @property
    def ok(self) -> bool:
        """Whether the status lies in the accepted 200-399 range."""
        return 200 <= self.status < 400

    def __repr__(self) -> str:
        return (
            f"<BaseResponse status={self.status} url={self.url!r} "
            f"len={len(self.content)}>"
        )

from dataclasses import asdict, dataclass
from typing import Any, TypedDict

DEFAULT_AUTHOR = "未知作者"
DEFAULT_DESCRIPTION = "暂无简介"


@dataclass(frozen=True, slots=True)
class SearchRecord:
    """Normalized representation of a single catalogue work.

    Attributes:
        title: Work title. Never empty.
        author: Author name, ``DEFAULT_AUTHOR`` when unresolved.
        cover: Cover image URL expressed through the image proxy, or ``""``.
        platform: Original publishing platform, if known.
        category: Genre / category label, possibly empty.
        word_count: Number of characters; ``0`` means unknown.
        description: Synopsis, ``DEFAULT_DESCRIPTION`` when unresolved.
        source_url: Absolute URL of the work's detail page, or ``""``.
    """

    title: str
    author: str = DEFAULT_AUTHOR
    cover: str = ""
    platform: str | None = None
    category: str = ""
    word_count: int = 0
    description: str = DEFAULT_DESCRIPTION
    source_url: str = ""

    @property
    def has_author(self) -> bool:
        return bool(self.author) and self.author != DEFAULT_AUTHOR

    @property
    def has_description(self) -> bool:
        return bool(self.description) and self.description != DEFAULT_DESCRIPTION

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class DetailMeta(TypedDict, total=False):
    """Partial metadata returned by a standalone detail lookup.

    Every key is optional; a missing key means the field was not found.
    """

    category: str
    platform: str
    description: str


class BatchSearchItem(TypedDict):
    """Outcome of one keyword within a batch search.

    Attributes:
        keyword: The keyword as supplied by the caller.
        success: Whether a record was found.
        data: First record of the search, or None.
        error: Failure message, or None on success.
    """

    keyword: str
    success: bool
    data: SearchRecord | None
    error: str | None

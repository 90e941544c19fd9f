from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawPage:
    """A fetched and decoded page.

    Attributes:
        url: Final URL after redirects; an input to page classification.
        html: Decoded document text.
    """

    url: str
    html: str

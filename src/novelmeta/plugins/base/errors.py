from novelmeta.schemas import SearchRecord


class ValidationError(ValueError):
    """Caller input is empty or blank."""


class TransportError(ConnectionError):
    """A page could not be retrieved.

    Raised after the retry ladder is exhausted, for a status outside
    200-399, or for a request failure that is not worth retrying.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ExtractionAmbiguity(Exception):
    """A listing page carries what looks like a single work's detail fragment.

    Internal signal from parser to client; never surfaced to callers.
    """

    def __init__(
        self,
        message: str,
        *,
        records: list[SearchRecord] | None = None,
    ) -> None:
        super().__init__(message)
        self.records = records or []

"""
HTTP session backends.

All catalogue traffic goes through a :class:`BaseSession`. Three backends
implement it; the third-party library behind each one is imported only when
that backend is created, so only the default backend (aiohttp) has to be
installed.
"""

__all__ = [
    "BACKENDS",
    "create_session",
    "BaseResponse",
    "BaseSession",
    "NetworkError",
    "RequestError",
]

from typing import Any

from novelmeta.schemas import SessionConfig

from .base import BaseSession, NetworkError, RequestError
from .response import BaseResponse

BACKENDS = ("aiohttp", "httpx", "curl_cffi")


def create_session(
    backend: str,
    cfg: SessionConfig | None = None,
    **kwargs: Any,
) -> BaseSession:
    """Create an uninitialized session for the named backend.

    Args:
        backend: One of :data:`BACKENDS`.
        cfg: Session configuration; defaults to ``SessionConfig()``.
        **kwargs: Forwarded to the backend constructor.

    Raises:
        ValueError: If ``backend`` is not one of :data:`BACKENDS`.
        ImportError: If the backend's library is not installed.
    """
    match backend:
        case "aiohttp":
            from ._aiohttp import AiohttpSession as session_cls
        case "httpx":
            from ._httpx import HttpxSession as session_cls
        case "curl_cffi":
            from ._curl_cffi import CurlCffiSession as session_cls
        case _:
            raise ValueError(
                f"Unsupported backend: {backend!r} "
                f"(expected one of: {', '.join(BACKENDS)})"
            )
    return session_cls(cfg, **kwargs)

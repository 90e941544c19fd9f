"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass, field


@dataclass
class SessionConfig:
    """Configuration for HTTP session behavior.

    Attributes:
        timeout: Default request timeout in seconds.
        max_connections: Maximum number of concurrent connections.
        max_redirects: Maximum number of redirect hops followed per request.
        user_agent: Custom User-Agent string.
        headers: Replacement for the default request headers.
        cookies: Default cookies for the session.
        impersonate: Browser impersonation mode. (`curl_cffi`)
        verify_ssl: Whether to verify SSL certificates.
        http2: Whether HTTP/2 should be used. (`httpx`)
        trust_env: Whether environment variables are used for proxies.
        proxy: Proxy server URL.
        proxy_user: Proxy authentication username.
        proxy_pass: Proxy authentication password.
    """

    timeout: float = 10.0
    max_connections: int = 10
    max_redirects: int = 10
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    cookies: dict[str, str] | None = None
    impersonate: str | None = "chrome"
    verify_ssl: bool = True
    http2: bool = True
    trust_env: bool = False
    proxy: str | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None


@dataclass
class FetcherConfig:
    """Configuration for fetching catalogue pages from the remote source.

    Attributes:
        backend: HTTP backend name (aiohttp, httpx, curl_cffi).
        request_timeouts: Timeout ladder in seconds; attempt ``n`` uses the
            ``n``-th value, and its length is the attempt budget.
        retry_delay: Base backoff in seconds, multiplied by the attempt number.
        default_encoding: Charset used when neither headers nor markup
            declare one.
        session_cfg: HTTP session configuration.
    """

    backend: str = "aiohttp"
    request_timeouts: tuple[float, ...] = (10.0, 15.0, 20.0)
    retry_delay: float = 0.5
    default_encoding: str = "gbk"
    session_cfg: SessionConfig = field(default_factory=SessionConfig)


@dataclass
class ParserConfig:
    """Configuration for extracting records from catalogue markup.

    Attributes:
        max_results: Maximum number of records returned per listing page.
        min_synopsis_length: Minimum text length for a tab-panel block to be
            accepted as a synopsis.
    """

    max_results: int = 20
    min_synopsis_length: int = 20


@dataclass
class ClientConfig:
    """Top-level configuration for a site client.

    Attributes:
        batch_interval: Pause in seconds between keywords of a batch search.
        fetcher_cfg: Configuration for the fetcher.
        parser_cfg: Configuration for the parser.
    """

    batch_interval: float = 0.5
    fetcher_cfg: FetcherConfig = field(default_factory=FetcherConfig)
    parser_cfg: ParserConfig = field(default_factory=ParserConfig)

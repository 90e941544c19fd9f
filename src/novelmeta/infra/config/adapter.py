from __future__ import annotations

from typing import Any

from novelmeta.schemas import (
    ClientConfig,
    FetcherConfig,
    ParserConfig,
    SessionConfig,
)


class ConfigAdapter:
    """High-level accessor for general and site-specific configuration.

    All configuration resolution follows the order:

    **general -> site-specific -> built-in defaults**

    Args:
        config (dict[str, Any]): Fully loaded configuration mapping containing
            a ``general`` block and optionally a ``sites`` block.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_session_config(self, site: str) -> SessionConfig:
        """Build a SessionConfig by merging general and site overrides.

        Args:
            site (str): Target site key.

        Returns:
            SessionConfig: Resolved session configuration.
        """
        cfg = self._merged(site)
        defaults = SessionConfig()

        return SessionConfig(
            timeout=float(cfg.get("timeout", defaults.timeout)),
            max_connections=int(cfg.get("max_connections", defaults.max_connections)),
            max_redirects=int(cfg.get("max_redirects", defaults.max_redirects)),
            user_agent=cfg.get("user_agent"),
            headers=cfg.get("headers"),
            cookies=cfg.get("cookies"),
            impersonate=cfg.get("impersonate", defaults.impersonate),
            verify_ssl=bool(cfg.get("verify_ssl", True)),
            http2=bool(cfg.get("http2", True)),
            trust_env=bool(cfg.get("trust_env", False)),
            proxy=cfg.get("proxy"),
            proxy_user=cfg.get("proxy_user"),
            proxy_pass=cfg.get("proxy_pass"),
        )

    def get_fetcher_config(self, site: str) -> FetcherConfig:
        """Build a FetcherConfig by merging general and site overrides.

        Args:
            site (str): Target site key.

        Returns:
            FetcherConfig: Resolved fetcher configuration.

        Raises:
            ValueError: If ``request_timeouts`` is empty or not a list.
        """
        cfg = self._merged(site)
        defaults = FetcherConfig()

        timeouts = cfg.get("request_timeouts", defaults.request_timeouts)
        if not isinstance(timeouts, (list, tuple)) or not timeouts:
            raise ValueError(
                f"request_timeouts must be a non-empty list, got {timeouts!r}"
            )

        return FetcherConfig(
            backend=cfg.get("backend", defaults.backend),
            request_timeouts=tuple(float(t) for t in timeouts),
            retry_delay=float(cfg.get("retry_delay", defaults.retry_delay)),
            default_encoding=cfg.get("default_encoding", defaults.default_encoding),
            session_cfg=self.get_session_config(site),
        )

    def get_parser_config(self, site: str) -> ParserConfig:
        """Build a ParserConfig by merging general and site overrides.

        Parser options live in a nested ``parser`` table.

        Args:
            site (str): Target site key.

        Returns:
            ParserConfig: Resolved parser configuration.
        """
        general_parser = self._gen_cfg().get("parser") or {}
        site_parser = self._site_cfg(site).get("parser") or {}
        cfg: dict[str, Any] = {**general_parser, **site_parser}
        defaults = ParserConfig()

        return ParserConfig(
            max_results=int(cfg.get("max_results", defaults.max_results)),
            min_synopsis_length=int(
                cfg.get("min_synopsis_length", defaults.min_synopsis_length)
            ),
        )

    def get_client_config(self, site: str) -> ClientConfig:
        """Build a ClientConfig by merging general and site overrides.

        Args:
            site (str): Target site key.

        Returns:
            ClientConfig: Resolved client configuration.
        """
        cfg = self._merged(site)

        return ClientConfig(
            batch_interval=float(
                cfg.get("batch_interval", ClientConfig().batch_interval)
            ),
            fetcher_cfg=self.get_fetcher_config(site),
            parser_cfg=self.get_parser_config(site),
        )

    def get_log_level(self) -> str:
        """Return the configured logging level, ``"WARNING"`` if missing."""
        debug_cfg = self._gen_cfg().get("debug") or {}
        return debug_cfg.get("log_level") or "WARNING"

    def _merged(self, site: str) -> dict[str, Any]:
        return {**self._gen_cfg(), **self._site_cfg(site)}

    def _gen_cfg(self) -> dict[str, Any]:
        """Return the ``general`` block or an empty dict."""
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

    def _site_cfg(self, site: str) -> dict[str, Any]:
        """Return the configuration block for the given site.

        Args:
            site (str): Site key.

        Returns:
            dict[str, Any]: Site configuration or empty dict.
        """
        sites_cfg = self._config.get("sites") or {}
        value = sites_cfg.get(site)
        return value if isinstance(value, dict) else {}

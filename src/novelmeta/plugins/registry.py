"""
Registration and lookup of site plugins.

Each catalogue site lives in ``novelmeta.plugins.sites.<site_key>`` and
contributes a ``fetcher``, a ``parser`` and a ``client`` module. Classes in
those modules register themselves with :data:`hub` through decorators; the
hub imports a site's module on first use, so only requested sites are
loaded.
"""

from __future__ import annotations

import pkgutil
from collections.abc import Callable, Mapping
from importlib import import_module
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Literal, TypeVar

if TYPE_CHECKING:
    from novelmeta.infra.sessions import BaseSession
    from novelmeta.plugins.protocols import (
        ClientProtocol,
        FetcherProtocol,
        ParserProtocol,
    )
    from novelmeta.schemas import (
        ClientConfig,
        FetcherConfig,
        ParserConfig,
    )

T = TypeVar("T", bound=type)

Kind = Literal["client", "fetcher", "parser"]

SITES_PKG = "novelmeta.plugins.sites"


class PluginHub:
    """Central registry for site fetchers, parsers and clients.

    Registered classes are kept per kind, keyed by normalized site key. A
    class registered without an explicit key takes the name of the site
    package it is defined in.
    """

    def __init__(self, sites_pkg: str = SITES_PKG) -> None:
        self._sites_pkg = sites_pkg
        self._tables: dict[Kind, dict[str, type]] = {
            "client": {},
            "fetcher": {},
            "parser": {},
        }

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
        self,
        kind: Kind,
        site_key: str | None = None,
    ) -> Callable[[T], T]:
        """Decorator registering a class as the ``kind`` plugin of a site."""

        def deco(cls: T) -> T:
            key = self._normalize_key(site_key or cls.__module__.split(".")[-2])
            self._tables[kind][key] = cls
            return cls

        return deco

    def register_fetcher(self, site_key: str | None = None) -> Callable[[T], T]:
        return self.register("fetcher", site_key)

    def register_parser(self, site_key: str | None = None) -> Callable[[T], T]:
        return self.register("parser", site_key)

    def register_client(self, site_key: str | None = None) -> Callable[[T], T]:
        return self.register("client", site_key)

    def registered(self, kind: Kind) -> Mapping[str, type]:
        """Read-only view of the classes registered so far for ``kind``."""
        return MappingProxyType(self._tables[kind])

    def available_sites(self) -> list[str]:
        """Site keys with a plugin package, whether imported yet or not."""
        pkg = import_module(self._sites_pkg)
        return sorted(
            info.name
            for info in pkgutil.iter_modules(pkg.__path__)
            if info.ispkg and not info.name.startswith("_")
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def build_fetcher(
        self,
        site: str,
        config: FetcherConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> FetcherProtocol:
        cls = self._lookup("fetcher", site)
        return cls(config=config, session=session, **kwargs)

    def build_parser(
        self,
        site: str,
        config: ParserConfig | None = None,
        **kwargs: Any,
    ) -> ParserProtocol:
        cls = self._lookup("parser", site)
        return cls(config=config, **kwargs)

    def build_client(
        self,
        site: str,
        config: ClientConfig | None = None,
        *,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> ClientProtocol:
        cls = self._lookup("client", site)
        return cls(config=config, session=session, **kwargs)

    def _lookup(self, kind: Kind, site: str) -> Any:
        key = self._normalize_key(site)
        table = self._tables[kind]
        if key not in table:
            self._try_import_site(key, kind)

        try:
            return table[key]
        except KeyError:
            known = ", ".join(self.available_sites()) or "none"
            raise ValueError(
                f"Unsupported site: {site!r} (available: {known})"
            ) from None

    @staticmethod
    def _normalize_key(site_key: str) -> str:
        """Lower-case the key; package names cannot start with a digit."""
        key = site_key.strip().lower()
        if not key:
            raise ValueError("Site key cannot be empty")
        if key[0].isdigit():
            return f"n{key}"
        return key

    def _try_import_site(self, site_key: str, kind: Kind) -> None:
        modname = f"{self._sites_pkg}.{site_key}.{kind}"
        try:
            import_module(modname)
        except ModuleNotFoundError as e:
            # a missing site is reported by _lookup; broken imports propagate
            if not (e.name and modname.startswith(e.name)):
                raise


hub = PluginHub()

import importlib
import inspect
from pathlib import Path

import pytest

from novelmeta.plugins import registry
from novelmeta.plugins.base.client import BaseClient
from novelmeta.plugins.base.fetcher import BaseFetcher
from novelmeta.plugins.base.parser import BaseParser

SITES_DIR = Path(__file__).parents[2] / "src" / "novelmeta" / "plugins" / "sites"

SITE_DIRS = [p for p in SITES_DIR.iterdir() if p.is_dir() and not p.name.startswith("_")]

KIND_BASES = {
    "fetcher": BaseFetcher,
    "parser": BaseParser,
    "client": BaseClient,
}


@pytest.mark.parametrize("site_path", SITE_DIRS, ids=lambda p: p.name)
@pytest.mark.parametrize("kind", sorted(KIND_BASES))
def test_site_module_registers_its_class(site_path: Path, kind: str):
    site_key = site_path.name
    module_path = f"novelmeta.plugins.sites.{site_key}.{kind}"
    module = importlib.import_module(module_path)

    registered = registry.hub.registered(kind).get(
        registry.hub._normalize_key(site_key)
    )

    assert registered is not None, f"{module_path} did not register a {kind}"
    assert registered.__module__ == module_path
    assert issubclass(registered, KIND_BASES[kind])
    assert getattr(registered, "site_key", None) == site_key
    assert registered in dict(inspect.getmembers(module, inspect.isclass)).values()


def test_available_sites_match_site_packages():
    assert registry.hub.available_sites() == sorted(p.name for p in SITE_DIRS)


def test_registered_view_is_read_only():
    view = registry.hub.registered("parser")
    with pytest.raises(TypeError):
        view["other"] = BaseParser  # type: ignore[index]


@pytest.mark.parametrize(
    "build, base",
    [
        (registry.hub.build_fetcher, BaseFetcher),
        (registry.hub.build_parser, BaseParser),
        (registry.hub.build_client, BaseClient),
    ],
)
def test_build_components_by_site_key(build, base):
    assert isinstance(build(" YouShu "), base)


def test_unknown_site_lists_available_sites():
    with pytest.raises(ValueError, match=r"Unsupported site.*available: .*youshu"):
        registry.hub.build_parser("nowhere")


def test_empty_site_key_is_rejected():
    with pytest.raises(ValueError, match="cannot be empty"):
        registry.hub.build_parser("   ")


def test_site_key_starting_with_digit_is_prefixed():
    assert registry.PluginHub._normalize_key("69shu") == "n69shu"


def test_explicit_key_registration_on_private_hub():
    hub = registry.PluginHub()

    @hub.register_parser("Demo")
    class DemoParser(BaseParser):
        pass

    assert hub.registered("parser") == {"demo": DemoParser}
    assert hub.registered("client") == {}

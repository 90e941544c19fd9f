"""
Command line entry point.

Usage:
  novelmeta search 诡秘之主
  novelmeta detail https://youshu.me/book/12345
  novelmeta --log-level INFO batch 诡秘之主 深空彼岸
  novelmeta init-config ~/.config/novelmeta
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from novelmeta import __version__
from novelmeta.infra.config import ConfigAdapter, copy_default_config, load_config
from novelmeta.infra.paths import USER_CONFIG_DIR
from novelmeta.plugins.base.errors import TransportError, ValidationError
from novelmeta.plugins.protocols import ClientProtocol
from novelmeta.plugins.registry import hub
from novelmeta.schemas import BatchSearchItem, ClientConfig

logger = logging.getLogger(__name__)

DEFAULT_SITE = "youshu"


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="novelmeta",
        description="Look up web novel metadata from online catalogues.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", type=Path, help="settings file (TOML/JSON)")
    parser.add_argument("--site", default=DEFAULT_SITE, help="catalogue site key")
    parser.add_argument("--backend", help="HTTP backend: aiohttp, httpx, curl_cffi")
    parser.add_argument("--log-level", help="logging level, e.g. INFO or DEBUG")

    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="search works by title or author")
    p_search.add_argument("keyword")
    p_search.add_argument(
        "--limit", type=_non_negative_int, help="maximum number of results"
    )

    p_detail = sub.add_parser("detail", help="look up a work's detail page")
    p_detail.add_argument("url")

    p_batch = sub.add_parser("batch", help="search several keywords in sequence")
    p_batch.add_argument("keywords", nargs="+")

    p_init = sub.add_parser("init-config", help="write the sample settings file")
    p_init.add_argument("target", nargs="?", type=Path, default=USER_CONFIG_DIR)

    return parser


def _load_adapter(config_path: Path | None) -> ConfigAdapter:
    try:
        return ConfigAdapter(load_config(config_path))
    except FileNotFoundError:
        logger.debug("No config file found, using built-in defaults")
        return ConfigAdapter({})


def _client_config(adapter: ConfigAdapter, args: argparse.Namespace) -> ClientConfig:
    cfg = adapter.get_client_config(args.site)
    if args.backend:
        cfg.fetcher_cfg.backend = args.backend
    return cfg


def _dump_batch_item(item: BatchSearchItem) -> dict[str, Any]:
    record = item["data"]
    return {**item, "data": record.to_dict() if record else None}


async def _run(client: ClientProtocol, args: argparse.Namespace) -> Any:
    await client.init()
    try:
        match args.command:
            case "search":
                records = await client.search(args.keyword, limit=args.limit)
                return [r.to_dict() for r in records]
            case "detail":
                return dict(await client.fetch_detail(args.url))
            case "batch":
                items = await client.batch_search(args.keywords)
                return [_dump_batch_item(item) for item in items]
            case _:
                raise ValueError(f"Unknown command: {args.command}")
    finally:
        await client.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "init-config":
        logging.basicConfig(level=(args.log_level or "WARNING").upper())
        dest = copy_default_config(args.target)
        print(dest)
        return 0

    try:
        adapter = _load_adapter(args.config)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=(args.log_level or adapter.get_log_level()).upper())

    try:
        client = hub.build_client(args.site, _client_config(adapter, args))
        result = asyncio.run(_run(client, args))
    except (ValidationError, TransportError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # unknown site / backend or malformed settings
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

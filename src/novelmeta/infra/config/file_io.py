from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from novelmeta.infra.paths import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_CONFIG_FILENAME,
    SETTING_PATH,
)

logger = logging.getLogger(__name__)


def _resolve_file_path(
    user_path: str | Path | None,
    local_filename: list[str],
    fallback_path: Path,
) -> Path | None:
    """
    Resolve the file path to use based on a prioritized lookup order.

    Lookup order:
        1. User-specified path (if provided and exists)
        2. A file in the current working directory matching any of `local_filename`
        3. The per-user fallback path

    Args:
        user_path: Optional file path explicitly provided by the user.
        local_filename: File names to check in the current working directory.
        fallback_path: Fallback path to use if no other match is found.

    Returns:
        A resolved `Path` instance if found, otherwise None.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified file not found: %s", path)

    for name in local_filename:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local file: %s", local_path)
            return local_path

    if fallback_path.is_file():
        return fallback_path.resolve()

    return None


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Load a configuration file by its file extension.

    Args:
        path: Path to a `.toml` or `.json` file.

    Returns:
        Parsed configuration data as a dictionary.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            root element is not a table.
    """
    ext = path.suffix.lower()

    if ext == ".json":
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    elif ext == ".toml":
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

    else:
        raise ValueError(f"Unsupported config file extension: {ext}")

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration data from a TOML or JSON file.

    Resolution order:
        - Explicit `config_path` (if provided)
        - `settings.toml` or `settings.json` in the working directory
        - `SETTING_PATH` in the per-user config directory

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If no configuration file is found.
        ValueError: If the file cannot be parsed or has an invalid structure.
    """
    path = _resolve_file_path(
        user_path=config_path,
        local_filename=["settings.toml", "settings.json"],
        fallback_path=SETTING_PATH,
    )

    if not path:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)


def copy_default_config(target: str | Path) -> Path:
    """
    Copy the bundled sample config into ``target``.

    A directory target receives a ``settings.toml`` file.

    Args:
        target: Destination file or directory.

    Returns:
        The path that was written.
    """
    dest = Path(target).expanduser()
    if dest.is_dir():
        dest = dest / DEFAULT_CONFIG_FILENAME

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Default configuration written to: %s", dest)
    return dest

"""
Settings files for novelmeta.

``load_config`` finds and reads a TOML/JSON settings file,
``ConfigAdapter`` turns its ``general`` and ``sites.<key>`` tables into the
dataclasses in :mod:`novelmeta.schemas.config`, and ``copy_default_config``
writes the bundled sample for users to edit.
"""

__all__ = [
    "ConfigAdapter",
    "copy_default_config",
    "load_config",
]

from .adapter import ConfigAdapter
from .file_io import copy_default_config, load_config

"""
Filesystem locations: the per-user settings file and the bundled sample.
"""

from importlib.resources import files

from platformdirs import user_config_path

# e.g. ~/.config/novelmeta on Linux, %LOCALAPPDATA%\novelmeta on Windows
USER_CONFIG_DIR = user_config_path("novelmeta", appauthor=False)

DEFAULT_CONFIG_FILENAME = "settings.toml"

SETTING_PATH = USER_CONFIG_DIR / DEFAULT_CONFIG_FILENAME

DEFAULT_CONFIG_FILE = files("novelmeta.resources").joinpath(
    "config", "settings.sample.toml"
)

"""Locations of tidyfs's per-user files.

Follows the XDG base directory convention: ``$XDG_CONFIG_HOME/tidyfs``,
or ``~/.config/tidyfs`` when the variable is unset or empty.
"""

import os
from pathlib import Path

APP_NAME = "tidyfs"


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


def get_config_path() -> Path:
    """Path of the user configuration file."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Path of the optional user color overrides."""
    return get_config_dir() / "theme.toml"

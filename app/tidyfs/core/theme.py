"""Output colors for the tidyfs CLI.

Colors come from the bundled ``data/theme.toml``. A ``theme.toml`` in the
user's config directory may override any subset of them; an unreadable or
invalid override is logged and ignored.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from rich.theme import Theme

from tidyfs.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex color per semantic role in CLI output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    old: str = "#f5b332"
    duplicate: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: ValidationInfo) -> str:
        """Accept #RGB or #RRGGBB strings only."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {value!r}"
            raise ValueError(msg)
        return value.strip()

    def to_rich_theme(self) -> Theme:
        """Build the Rich theme, including the derived styles used in markup."""
        return Theme(
            {
                "muted": self.muted,
                "dim": self.muted,
                "header": self.header,
                "bold_header": f"bold {self.header}",
                "border": self.border,
                "success": self.success,
                "warning": self.warning,
                "error": f"bold {self.error}",
                "info": self.info,
                "old": self.old,
                "duplicate": f"bold {self.duplicate}",
            }
        )


def read_theme_file(path: Path) -> dict[str, str]:
    """Return the string entries of a theme file's [colors] table.

    A missing file gives an empty mapping; a malformed one is logged and
    also gives an empty mapping.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors")
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: no [colors] table", path)
        return {}
    return {str(key): value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Args:
        user_path: Override file. Defaults to theme.toml in the config dir.

    Returns:
        Validated colors, or the built-in defaults if the merge is invalid.
    """
    bundled = resources.files("tidyfs.data").joinpath("theme.toml")
    with resources.as_file(bundled) as bundled_path:
        colors = read_theme_file(bundled_path)
    colors.update(read_theme_file(user_path or get_user_theme_path()))

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return load_theme().to_rich_theme()

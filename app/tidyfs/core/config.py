"""User configuration for tidyfs.

Configuration is stored in ~/.config/tidyfs/config.toml and provides
defaults for the CLI. Every section and key is optional; a missing file
yields the built-in defaults.

Example:
    [scan]
    pattern = "*"
    include_hidden = false
    max_depth = -1

    [hashing]
    algorithm = "sha256"
    chunk_size = 65536
    workers = 4

    [cleanup]
    threshold_days = 30
    protected_patterns = ["~/.ssh/*"]
"""

import hashlib
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tidyfs.core.paths import get_config_path
from tidyfs.filesystem.protected import DEFAULT_PROTECTED_PATTERNS


class ScanSettings(BaseModel):
    """Defaults for directory traversal."""

    model_config = ConfigDict(extra="forbid")

    pattern: Annotated[str, Field(min_length=1, description="File name glob")] = "*"
    include_hidden: Annotated[bool, Field(description="Visit hidden entries")] = False
    max_depth: Annotated[int, Field(ge=-1, description="Max depth (-1 = unlimited)")] = -1


class HashSettings(BaseModel):
    """Defaults for content hashing during duplicate detection."""

    model_config = ConfigDict(extra="forbid")

    algorithm: Annotated[str, Field(description="hashlib algorithm name")] = "sha256"
    chunk_size: Annotated[int, Field(gt=0, description="Bytes read per chunk")] = 65536
    workers: Annotated[int, Field(ge=1, le=64, description="Hashing threads")] = 1
    size_prefilter: Annotated[bool, Field(description="Skip files with a unique size")] = True

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Validate that the algorithm is provided by hashlib."""
        name = v.strip().lower()
        if name not in hashlib.algorithms_available or name.startswith("shake_"):
            msg = f"Unknown hash algorithm: {v}"
            raise ValueError(msg)
        return name


class CleanupSettings(BaseModel):
    """Defaults for age-based cleanup."""

    model_config = ConfigDict(extra="forbid")

    threshold_days: Annotated[int, Field(ge=0, description="Age in days before deletion")] = 30
    recursive: Annotated[bool, Field(description="Include subdirectories")] = False
    protected_patterns: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_PROTECTED_PATTERNS),
            description="Glob patterns that are never deleted",
        ),
    ]


class TidyConfig(BaseModel):
    """Root configuration model.

    Attributes:
        scan: Traversal defaults.
        hashing: Hashing defaults.
        cleanup: Cleanup defaults.
    """

    model_config = ConfigDict(extra="forbid")

    scan: ScanSettings = Field(default_factory=ScanSettings)
    hashing: HashSettings = Field(default_factory=HashSettings)
    cleanup: CleanupSettings = Field(default_factory=CleanupSettings)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""


def load_config(path: Path | None = None) -> TidyConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated TidyConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return TidyConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TidyConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: TidyConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The configuration to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path

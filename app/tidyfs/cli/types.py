"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import json
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

import typer
from rich.json import JSON

from tidyfs.core.config import ConfigError, TidyConfig, load_config
from tidyfs.filesystem.models import OperationResult
from tidyfs.utils.formatting import console, print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def require_config() -> TidyConfig:
    """Load the user configuration or exit with an error.

    Returns:
        The validated configuration, or defaults if no file exists.

    Raises:
        typer.Exit: If the config file is invalid.
    """
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_ok(result: OperationResult[object]) -> None:
    """Exit with an error if an operation failed as a whole.

    Raises:
        typer.Exit: If the result carries an error.
    """
    if not result.ok:
        print_error(result.error or "Operation failed")
        raise typer.Exit(code=1)


def describe_file(path: Path) -> dict[str, object]:
    """Build a JSON-friendly description of a file.

    Size and mtime are None when the file can no longer be read.
    """
    try:
        st = path.stat()
    except OSError:
        return {"path": str(path), "size_bytes": None, "mtime": None}
    mtime = datetime.fromtimestamp(st.st_mtime, tz=UTC).isoformat()
    return {"path": str(path), "size_bytes": st.st_size, "mtime": mtime}


def print_json(data: object) -> None:
    """Print data as JSON on stdout without wrapping long values."""
    console.print(JSON(json.dumps(data)), soft_wrap=True)

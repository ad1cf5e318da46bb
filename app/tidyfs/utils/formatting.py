"""Shared Rich consoles and small output helpers for the CLI."""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tidyfs.core.theme import get_theme

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")


def _make_console(*, stderr: bool) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Interactive terminals get full hex colors; anything else is auto-detected
    color_system = "truecolor" if stream.isatty() else "auto"
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console(stderr=False)
err_console = _make_console(stderr=True)


def format_bytes(size_bytes: int, decimal_places: int = 2) -> str:
    """Format a byte count as a human-readable string.

    Args:
        size_bytes: Number of bytes.
        decimal_places: Rounding applied to the scaled value.

    Returns:
        String such as "0 B", "512 B", "1.5 KB" or "3.2 GB".
    """
    if size_bytes == 0:
        return "0 B"

    size = float(size_bytes)
    order = 0
    while abs(size) >= 1024 and order < len(_SIZE_UNITS) - 1:
        size /= 1024
        order += 1

    rounded = round(size, decimal_places)
    if rounded == int(rounded):
        rounded = int(rounded)
    return f"{rounded} {_SIZE_UNITS[order]}"


def create_path_table(title: str, *, extra_columns: tuple[str, ...] = ()) -> Table:
    """Create a table whose first column holds file paths.

    Long paths fold onto extra lines instead of being truncated.

    Args:
        title: Table title.
        extra_columns: Right-aligned columns after the path.
    """
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Path", overflow="fold")
    for column in extra_columns:
        table.add_column(column, style="muted", justify="right")
    return table


# Messages are plain text; paths and error strings may contain brackets
def print_info(message: str) -> None:
    console.print(escape(message), style="info")


def print_success(message: str) -> None:
    console.print(escape(message), style="success")


def print_warning(message: str) -> None:
    err_console.print("Warning:", escape(message), style="warning")


def print_error(message: str) -> None:
    err_console.print("Error:", escape(message), style="error")

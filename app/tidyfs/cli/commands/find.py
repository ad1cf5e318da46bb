"""Find command implementation.

Lists files under a directory filtered by name pattern, depth and
hidden status.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tidyfs.api import find_files
from tidyfs.cli.types import OutputFormat, describe_file, print_json, require_config, require_ok
from tidyfs.utils.formatting import console, create_path_table, format_bytes, print_info


def find_command(
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to search."),
    ],
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Glob matched against file names (default from config: '*').",
        ),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", help="Descend into subdirectories."),
    ] = True,
    hidden: Annotated[
        bool | None,
        typer.Option("--hidden/--no-hidden", help="Include hidden files and directories."),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            "-d",
            min=-1,
            help="Deepest directory level to visit (root is 0, -1 for unlimited).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Limit number of results."),
    ] = None,
) -> None:
    """Find files under a directory.

    Examples:
        tidyfs find ~/Downloads -p "*.iso"
        tidyfs find . --no-recursive --hidden
        tidyfs find /var/log -d 1 --format json
    """
    scan = require_config().scan

    result = find_files(
        directory,
        pattern=pattern or scan.pattern,
        recursive=recursive,
        include_hidden=scan.include_hidden if hidden is None else hidden,
        max_depth=scan.max_depth if max_depth is None else max_depth,
    )
    require_ok(result)

    files = result.value
    shown = files[:limit] if limit else files

    if output_format == OutputFormat.JSON:
        print_json([describe_file(path) for path in shown])
        return

    if not files:
        print_info("No matching files found.")
        return

    table = create_path_table("Matching Files", extra_columns=("Size", "Modified"))
    for path in shown:
        info = describe_file(path)
        size = info["size_bytes"]
        size_str = format_bytes(size) if isinstance(size, int) else "-"
        mtime = str(info["mtime"] or "-")[:19].replace("T", " ")
        table.add_row(escape(str(path)), size_str, mtime)
    console.print(table)

    console.print(f"\n[dim]Found {len(files)} file(s)[/dim]")
    if limit and len(shown) < len(files):
        console.print(f"[dim](showing {len(shown)} of {len(files)}, limited to {limit})[/dim]")

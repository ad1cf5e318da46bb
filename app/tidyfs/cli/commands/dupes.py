"""Duplicate detection command.

Groups files under a directory by content digest and prints every
group with more than one member.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from tidyfs.api import find_duplicate_files
from tidyfs.cli.types import OutputFormat, print_json, require_config, require_ok
from tidyfs.filesystem.hasher import ContentHasher
from tidyfs.filesystem.models import DuplicateGroups
from tidyfs.utils.formatting import console, err_console, format_bytes, print_success


def dupes_command(
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to scan for duplicates."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", help="Scan subdirectories."),
    ] = True,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, max=64, help="Hashing threads."),
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
) -> None:
    """Find files with identical content.

    Hidden files and directories are never scanned.

    Examples:
        tidyfs dupes ~/Pictures
        tidyfs dupes ~/Music --workers 8 --format json
    """
    settings = require_config().hashing
    hasher = ContentHasher(settings.algorithm, settings.chunk_size)

    with Progress(
        TextColumn("[info]Hashing files[/]"),
        BarColumn(),
        MofNCompleteColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("hash", total=None)

        def on_progress(processed: int, total: int) -> None:
            progress.update(task, completed=processed, total=total)

        result = find_duplicate_files(
            directory,
            recursive=recursive,
            hasher=hasher,
            workers=workers or settings.workers,
            size_prefilter=settings.size_prefilter,
            progress=on_progress,
        )
    require_ok(result)

    groups = result.value

    if output_format == OutputFormat.JSON:
        print_json({digest: [str(p) for p in paths] for digest, paths in groups.items()})
        return

    if not groups:
        print_success("No duplicate files found.")
        return

    _print_groups(groups)


def _print_groups(groups: DuplicateGroups) -> None:
    """Display duplicate groups with the reclaimable space."""
    reclaimable = 0
    for index, (digest, paths) in enumerate(groups.items(), 1):
        try:
            size = paths[0].stat().st_size
        except OSError:
            size = None

        size_str = f" ({format_bytes(size)} each)" if size is not None else ""
        console.print(f"\n[bold_header]Group {index}[/] [muted]{digest[:12]}{size_str}[/]")
        for path in paths:
            console.print(f"  [duplicate]{escape(str(path))}[/]")

        if size is not None:
            reclaimable += size * (len(paths) - 1)

    file_total = sum(len(paths) for paths in groups.values())
    console.print(
        f"\n[dim]Found {len(groups)} duplicate group(s) covering {file_total} files, "
        f"{format_bytes(reclaimable)} reclaimable[/dim]"
    )

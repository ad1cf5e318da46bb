"""Aged file commands.

Provides commands to list files older than a number of days and to
delete them.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tidyfs.api import get_old_files
from tidyfs.cli.types import OutputFormat, describe_file, print_json, require_config, require_ok
from tidyfs.filesystem.cleanup import CleanupOrchestrator
from tidyfs.filesystem.models import CleanupReport, DeletionResult
from tidyfs.utils.formatting import (
    console,
    create_path_table,
    format_bytes,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List and clean up files older than a number of days.",
    invoke_without_command=True,
    no_args_is_help=True,
)

DaysOption = Annotated[
    int | None,
    typer.Option(
        "--days",
        "-n",
        min=0,
        help="Age threshold in days (default from config).",
    ),
]
ExtensionOption = Annotated[
    str | None,
    typer.Option(
        "--ext",
        "-e",
        help="Only files with this extension ('log', '.log' and '*.log' are equivalent).",
    ),
]
RecursiveOption = Annotated[
    bool | None,
    typer.Option("--recursive/--no-recursive", help="Include subdirectories."),
]
HiddenOption = Annotated[
    bool | None,
    typer.Option("--hidden/--no-hidden", help="Include hidden files (default from config)."),
]


@app.command("list")
def list_old(
    directory: Annotated[Path, typer.Argument(help="Directory to search.")],
    days: DaysOption = None,
    extension: ExtensionOption = None,
    recursive: RecursiveOption = None,
    hidden: HiddenOption = None,
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
    """List files not modified within the last N days."""
    config = require_config()
    settings = config.cleanup
    threshold = settings.threshold_days if days is None else days

    result = get_old_files(
        directory,
        threshold,
        extension,
        recursive=settings.recursive if recursive is None else recursive,
        include_hidden=config.scan.include_hidden if hidden is None else hidden,
    )
    require_ok(result)

    if output_format == OutputFormat.JSON:
        print_json([describe_file(path) for path in result.value])
        return

    if not result.value:
        print_success(f"No files older than {threshold} day(s).")
        return

    table = create_path_table(f"Files Older Than {threshold} Day(s)", extra_columns=("Size",))
    total = 0
    for path in result.value:
        size = describe_file(path)["size_bytes"]
        if isinstance(size, int):
            total += size
        size_str = format_bytes(size) if isinstance(size, int) else "-"
        table.add_row(f"[old]{escape(str(path))}[/]", size_str)
    console.print(table)
    console.print(
        f"\n[dim]Found {len(result.value)} old file(s) ({format_bytes(total)} total)[/dim]"
    )


@app.command()
def clean(
    directory: Annotated[Path, typer.Argument(help="Directory to clean.")],
    days: DaysOption = None,
    extension: ExtensionOption = None,
    recursive: RecursiveOption = None,
    hidden: HiddenOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete files not modified within the last N days."""
    config = require_config()
    settings = config.cleanup
    threshold = settings.threshold_days if days is None else days

    preview = get_old_files(
        directory,
        threshold,
        extension,
        recursive=settings.recursive if recursive is None else recursive,
        include_hidden=config.scan.include_hidden if hidden is None else hidden,
    )
    require_ok(preview)

    if not preview.value:
        print_info(f"No files older than {threshold} day(s) in {directory}.")
        return

    if not dry_run and not yes:
        console.print(f"{len(preview.value)} file(s) older than {threshold} day(s) in {directory}")
        confirmed = typer.confirm("Proceed with deleting them?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    orchestrator = CleanupOrchestrator(
        dry_run=dry_run,
        protected_patterns=settings.protected_patterns,
    )
    report = orchestrator.delete_files(directory, preview.value)

    _print_report(report)

    if report.failed:
        raise typer.Exit(code=1)


def _print_report(report: CleanupReport) -> None:
    """Display deletion results."""
    table = create_path_table("Cleanup Results", extra_columns=("Status", "Details"))
    for r in report.results:
        status, detail = _describe_result(r)
        table.add_row(escape(str(r.path)), status, detail)
    console.print(table)

    if any(r.dry_run for r in report.results):
        dry_count = sum(1 for r in report.results if r.dry_run)
        print_info(f"Dry-run: {dry_count} file(s) would be deleted.")
    elif report.failed:
        print_warning(f"{report.deleted_count} deleted, {len(report.failed)} failed")
    else:
        print_success(f"Deleted {report.deleted_count} file(s) from {report.root}.")


def _describe_result(result: DeletionResult) -> tuple[str, str]:
    if result.dry_run:
        return "[info]dry-run[/]", "Would delete"
    if result.success:
        return "[success]deleted[/]", ""
    return "[error]failed[/]", escape(result.error or "Unknown error")

"""tidyfs command line entry point.

Builds the Typer application, wires the global flags to logging and
registers the command modules.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from tidyfs import __version__
from tidyfs.cli.commands import config, dupes, find, old
from tidyfs.utils.formatting import err_console

app = typer.Typer(
    name="tidyfs",
    help="Find files, spot duplicates and clean up aged files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tidyfs version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route tidyfs log records to stderr through Rich.

    Unreadable files and failed deletions are logged as warnings, so they
    show by default. ``verbose`` adds debug detail; ``quiet`` keeps errors only.
    Calling this again replaces the previous handler.
    """
    package_logger = logging.getLogger("tidyfs")
    for existing in [h for h in package_logger.handlers if isinstance(h, RichHandler)]:
        package_logger.removeHandler(existing)

    handler = RichHandler(console=err_console, show_path=False, show_time=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)

    if verbose:
        package_logger.setLevel(logging.DEBUG)
    elif quiet:
        package_logger.setLevel(logging.ERROR)
    else:
        package_logger.setLevel(logging.WARNING)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Hide warnings about unreadable files.")
    ] = False,
) -> None:
    """tidyfs - find files, spot duplicates and clean up aged files.

    Defaults for every command are read from ~/.config/tidyfs/config.toml.
    """
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be combined")
    configure_logging(verbose=verbose, quiet=quiet)


app.command("find")(find.find_command)
app.command("dupes")(dupes.dupes_command)
app.add_typer(old.app, name="old")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()

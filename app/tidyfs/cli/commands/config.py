"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.syntax import Syntax

from tidyfs.cli.types import require_config
from tidyfs.core.config import ConfigError, TidyConfig, save_config
from tidyfs.core.paths import get_config_path
from tidyfs.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the tidyfs configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Print the effective configuration as TOML."""
    config = require_config()
    path = get_config_path()

    source = str(path) if path.exists() else "built-in defaults"
    print_info(f"Configuration from {source}")
    console.print(Syntax(tomli_w.dumps(config.model_dump()), "toml"))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(TidyConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default configuration to {saved}")

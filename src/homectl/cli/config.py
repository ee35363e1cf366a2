from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from homectl.config import (
    DatabaseConfig,
    Settings,
    data_dir_from_settings,
    render_settings_toml,
    write_settings,
)

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True, help="Inspect or create the config file.")


@app.command("show")
def show_config() -> None:
    """Print the effective settings as TOML."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    console = Console()
    console.print(f"Config file: {path if exists else 'defaults'}")
    console.print(f"Data directory: {data_dir_from_settings(settings)}\n")
    typer.echo(render_settings_toml(settings))


@app.command("init")
def init_config(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Store home documents in this directory"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a default config file."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        typer.echo(f"Config already exists at {path}")
        return

    settings = Settings()
    if data_dir is not None:
        settings = Settings(database=DatabaseConfig(path=str(data_dir)))
    write_settings(settings, path)
    typer.echo(f"Wrote default config to {path}")

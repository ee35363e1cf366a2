from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from homectl.storage import sample_home

from .common import build_database, load_settings_or_exit, resolve_config_path_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def init(
        data_dir: Annotated[
            Path | None,
            typer.Option("--data-dir", "--path", help="Custom data directory"),
        ] = None,
        sample: Annotated[
            bool,
            typer.Option("--sample", help="Seed a sample set of rooms and devices"),
        ] = False,
        force: Annotated[
            bool,
            typer.Option("--force", "-f", help="Replace an existing room-set"),
        ] = False,
    ) -> None:
        """Initialize the homectl data directory."""
        console = Console()

        settings = load_settings_or_exit()
        db = build_database(settings, data_dir=data_dir)

        if sample and db.appliances_path.exists() and not force:
            console.print(
                f"[yellow]![/yellow] {db.appliances_path} already exists. "
                "Use --force to replace it with the sample rooms."
            )
            raise typer.Exit(1)

        db.init(sample_home() if sample else None)

        console.print(f"[green]✓[/green] Initialized homectl data dir at: {db.path}")
        console.print(f"  • {db.appliances_path} - Rooms and devices")
        console.print(f"  • {db.fridge_path} - Fridge inventory")

        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)
        if not config_exists:
            console.print(
                "\nConfig not found. Run 'homectl config init' to create one."
            )
        else:
            console.print(f"  • {config_path} - Configuration")

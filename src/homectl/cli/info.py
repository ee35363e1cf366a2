from __future__ import annotations

import typer
from rich.console import Console

from .common import build_database, load_settings_or_exit, resolve_config_path_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def info() -> None:
        """Show data directory info and stats."""
        settings = load_settings_or_exit()
        db = build_database(settings)
        try:
            home = db.load_home()
            inventory = db.load_fridge()
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1) from exc

        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)

        console = Console()

        console.print("[bold]homectl Info[/bold]\n")
        console.print(f"Data directory: {db.path}")
        console.print(f"Config file: {config_path if config_exists else 'defaults'}")

        console.print("\n[bold]Configuration[/bold]")
        console.print(f"Cycle acceleration: {settings.appliances.acceleration:g}x")
        console.print(f"Notification buffer: {settings.notifications.max_entries}")
        console.print(
            f"Server: {settings.server.host}:{settings.server.port}"
        )

        console.print("\n[bold]Statistics[/bold]")
        device_count = sum(len(devices) for devices in home.rooms.values())
        console.print(f"Rooms: {len(home.rooms)}")
        console.print(f"Devices: {device_count}")
        console.print(f"Fridge items: {len(inventory.items)}")

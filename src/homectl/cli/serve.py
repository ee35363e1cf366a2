from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console

from homectl.server import run_server

from .common import load_settings_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def serve(
        host: Annotated[
            str | None, typer.Option("--host", help="Address to bind")
        ] = None,
        port: Annotated[
            int | None, typer.Option("--port", "-p", help="Port to listen on")
        ] = None,
    ) -> None:
        """Run the control server that keeps timers and notifications alive."""
        console = Console()
        settings = load_settings_or_exit()
        bind_host = host or settings.server.host
        bind_port = port or settings.server.port

        console.print(f"Starting control server on {bind_host}:{bind_port}...")
        console.print("Press Ctrl+C to stop.\n")

        try:
            asyncio.run(run_server(settings, host=bind_host, port=bind_port))
        except KeyboardInterrupt:
            console.print("\n[green]Control server stopped.[/green]")

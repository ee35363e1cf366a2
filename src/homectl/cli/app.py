from __future__ import annotations

from typing import Annotated

import typer

from homectl.utils.logging import setup_logging

from . import config as config_cmd
from . import fridge as fridge_cmd
from .chat import register as register_chat
from .devices import register as register_devices
from .info import register as register_info
from .init_cmd import register as register_init
from .serve import register as register_serve

app = typer.Typer(help="homectl - smart home control backend", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")
app.add_typer(fridge_cmd.app, name="fridge")

register_init(app)
register_info(app)
register_devices(app)
register_chat(app)
register_serve(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override LOGLEVEL, e.g. DEBUG"),
    ] = None,
) -> None:
    """homectl CLI."""
    setup_logging(log_level)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"homectl version {get_version('homectl')}")
        raise typer.Exit()

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from .common import open_context


def register(app: typer.Typer) -> None:
    @app.command()
    def chat(
        message: Annotated[str, typer.Argument(help="Message for the assistant")],
    ) -> None:
        """Send a message to the conversational assistant."""
        with open_context() as home:
            reply = home.chat(message)
        Console().print(reply)

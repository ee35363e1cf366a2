from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console

from homectl.config import (
    Settings,
    data_dir_from_settings,
    get_settings,
    resolve_config_path,
)
from homectl.context import HomeContext
from homectl.core.scheduling import ManualScheduler
from homectl.errors import HomeError
from homectl.storage import Database


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_database(settings: Settings, data_dir: Path | None = None) -> Database:
    path = data_dir or data_dir_from_settings(settings)
    return Database(path)


@contextmanager
def open_context() -> Iterator[HomeContext]:
    """Home context for a single CLI invocation.

    Nothing is scheduled on a running loop here, so appliance cycles armed by
    a one-shot command are abandoned when it exits; ``homectl serve`` keeps
    them alive.
    """
    settings = load_settings_or_exit()
    context = HomeContext(
        settings,
        database=build_database(settings),
        scheduler=ManualScheduler(),
    )
    try:
        yield context
    except HomeError as exc:
        console = Console(stderr=True)
        console.print(f"[red]✗[/red] {exc.message}")
        if exc.detail:
            console.print(exc.detail)
        raise typer.Exit(1) from exc
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    finally:
        context.close()

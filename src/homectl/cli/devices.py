from __future__ import annotations

import json
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from homectl.models import HomeState

from .common import open_context

SKIP_COLUMNS = ("name", "status")


def parse_params(values: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into action parameters.

    Values are read as JSON when possible, so ``brightness=60`` is a number
    and ``course=급속`` stays a string.
    """
    params: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def render_rooms(state: HomeState) -> Table:
    table = Table()
    table.add_column("Room", style="cyan")
    table.add_column("Device", style="green")
    table.add_column("Name")
    table.add_column("Status", style="yellow")
    table.add_column("Details")

    for room_name, devices in state.rooms.items():
        for kind, device in devices.items():
            document = device.to_document()
            details = ", ".join(
                f"{key}={value}"
                for key, value in document.items()
                if key not in SKIP_COLUMNS and value is not None
            )
            table.add_row(
                room_name,
                kind,
                document.get("name", ""),
                str(document.get("status", "")),
                details,
            )
    return table


def list_rooms() -> None:
    """Show every room and the state of its devices."""
    console = Console()
    with open_context() as home:
        state = home.get_rooms()

    if not state.rooms:
        console.print("No rooms defined.")
        console.print("Use 'homectl init --sample' or edit the appliances document.")
        return

    console.print(render_rooms(state))


def control_device(
    room: Annotated[str, typer.Argument(help="Room name, e.g. 'living room'")],
    device: Annotated[str, typer.Argument(help="Device kind, e.g. light")],
    action: Annotated[str, typer.Argument(help="Action, e.g. on, off, start")],
    param: Annotated[
        list[str] | None,
        typer.Option("--param", "-p", help="Extra parameter as key=value"),
    ] = None,
) -> None:
    """Apply an action to one device."""
    params = parse_params(param or [])
    console = Console()

    with open_context() as home:
        updated = home.apply_action(room, device, action, params)
        console.print_json(json.dumps(updated.to_document(), ensure_ascii=False))
        if home.timers.pending():
            console.print(
                "[yellow]![/yellow] Cycle completion only runs under 'homectl serve'."
            )


def leave() -> None:
    """Run the leave-home scene."""
    console = Console()
    with open_context() as home:
        state = home.leave_home()
    console.print("[green]✓[/green] Leave-home mode applied")
    console.print(render_rooms(state))


def arrive() -> None:
    """Run the arrive-home scene."""
    console = Console()
    with open_context() as home:
        state = home.arrive_home()
    console.print("[green]✓[/green] Arrive-home mode applied")
    console.print(render_rooms(state))


def register(app: typer.Typer) -> None:
    app.command("rooms")(list_rooms)
    app.command("device")(control_device)
    app.command("leave")(leave)
    app.command("arrive")(arrive)

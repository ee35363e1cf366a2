from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from .common import open_context

app = typer.Typer(no_args_is_help=True, help="Manage the fridge inventory.")


@app.command("list")
def list_items() -> None:
    """List fridge items."""
    console = Console()
    with open_context() as home:
        inventory = home.list_fridge()

    if not inventory.items:
        console.print("The fridge is empty.")
        return

    table = Table()
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Quantity")
    table.add_column("Expiry")
    table.add_column("Category")

    for item in inventory.items:
        table.add_row(
            str(item.id), item.name, item.quantity, item.expiry or "", item.category
        )

    console.print(table)


@app.command("add")
def add_item(
    name: Annotated[str, typer.Argument(help="Item name")],
    quantity: Annotated[str | None, typer.Option("--quantity", "-q")] = None,
    expiry: Annotated[
        str | None, typer.Option("--expiry", help="Expiry date, e.g. 2026-11-01")
    ] = None,
    category: Annotated[str | None, typer.Option("--category", "-c")] = None,
) -> None:
    """Add an item to the fridge."""
    console = Console()
    with open_context() as home:
        item = home.add_fridge_item(
            name, quantity=quantity, expiry=expiry, category=category
        )
    console.print(
        f"[green]✓[/green] Added #{item.id} '{item.name}' ({item.quantity})"
    )


@app.command("remove")
def remove_item(item_id: Annotated[int, typer.Argument(help="Item id")]) -> None:
    """Remove an item from the fridge by id."""
    console = Console()
    with open_context() as home:
        item = home.remove_fridge_item(item_id)
    console.print(f"[green]✓[/green] Removed #{item.id} '{item.name}'")

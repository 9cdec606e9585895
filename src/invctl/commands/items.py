"""Commands: add, inspect, adjust, and remove stock items."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from invctl.commands._base import KIND_CHOICE, InvCommand, InvGroup

if TYPE_CHECKING:
    from invctl.commands._context import AppContext


# ── add ───────────────────────────────────────────────────────────────


@click.group(
    cls=InvGroup,
    examples="""\
  invctl add electronic 1 Laptop 10 --brand Dell --warranty-months 24
  invctl add grocery 101 Milk 50 --expires 2026-10-26""",
)
def add() -> None:
    """Add a new item to the warehouse."""


@add.command(
    examples="""\
  invctl add electronic 1 Laptop 10 --brand Dell --warranty-months 24
  invctl --json add electronic 2 Smartphone 25 --brand Samsung --warranty-months 12""",
)
@click.argument("item_id", type=int)
@click.argument("name")
@click.argument("quantity", type=int)
@click.option("--brand", required=True, help="Manufacturer brand.")
@click.option("--warranty-months", type=int, default=0, show_default=True, help="Warranty.")
@click.pass_obj
def electronic(
    app: AppContext,
    item_id: int,
    name: str,
    quantity: int,
    brand: str,
    warranty_months: int,
) -> None:
    """Add an electronic item."""
    from invctl.services.inventory import InventoryService

    fields = {
        "id": item_id,
        "name": name,
        "quantity": quantity,
        "brand": brand,
        "warranty_months": warranty_months,
    }
    app.emit(InventoryService(app.warehouse).add_item("electronic", fields))


@add.command(
    examples="""\
  invctl add grocery 101 Milk 50 --expires 2026-10-26
  invctl add grocery 102 Rice 100 --expires 2027-04-19""",
)
@click.argument("item_id", type=int)
@click.argument("name")
@click.argument("quantity", type=int)
@click.option(
    "--expires",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    required=True,
    help="Expiry date (YYYY-MM-DD).",
)
@click.pass_obj
def grocery(
    app: AppContext,
    item_id: int,
    name: str,
    quantity: int,
    expires: datetime,
) -> None:
    """Add a grocery item."""
    from invctl.services.inventory import InventoryService

    fields = {
        "id": item_id,
        "name": name,
        "quantity": quantity,
        "expiry_date": expires.date(),
    }
    app.emit(InventoryService(app.warehouse).add_item("grocery", fields))


# ── lookup and enumeration ────────────────────────────────────────────


@click.command(
    cls=InvCommand,
    examples="""\
  invctl get electronic 1
  invctl --json get grocery 101""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("item_id", type=int)
@click.pass_obj
def get(app: AppContext, kind: str, item_id: int) -> None:
    """Show a single item by ID."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).get_item(kind, item_id))


@click.command(
    "list",
    cls=InvCommand,
    examples="""\
  invctl list electronic
  invctl -q list grocery
  invctl --json list grocery""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.pass_obj
def list_cmd(app: AppContext, kind: str) -> None:
    """List all items of a kind in insertion order."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).list_items(kind))


# ── mutation ──────────────────────────────────────────────────────────


@click.command(
    cls=InvCommand,
    examples="""\
  invctl remove grocery 101""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("item_id", type=int)
@click.pass_obj
def remove(app: AppContext, kind: str, item_id: int) -> None:
    """Remove an item by ID."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).remove_item(kind, item_id))


@click.command(
    "set-quantity",
    cls=InvCommand,
    examples="""\
  invctl set-quantity electronic 1 15
  invctl set-quantity grocery 101 0""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("item_id", type=int)
@click.argument("quantity", type=int)
@click.pass_obj
def set_quantity(app: AppContext, kind: str, item_id: int, quantity: int) -> None:
    """Overwrite an item's quantity (must be >= 0)."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).set_quantity(kind, item_id, quantity))


@click.command(
    cls=InvCommand,
    examples="""\
  invctl restock electronic 1 5
  invctl restock grocery 101 -- -10""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("item_id", type=int)
@click.argument("delta", type=int)
@click.pass_obj
def restock(app: AppContext, kind: str, item_id: int, delta: int) -> None:
    """Increase an item's stock by DELTA (negative to draw down)."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).increase_stock(kind, item_id, delta))

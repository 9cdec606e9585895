"""Commands: bulk import and export of store files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from invctl.commands._base import KIND_CHOICE, InvCommand

if TYPE_CHECKING:
    from invctl.commands._context import AppContext


@click.command(
    "import",
    cls=InvCommand,
    examples="""\
  invctl import electronic backup/electronic.json
  invctl --json import grocery incoming.json""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("source", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_obj
def import_cmd(app: AppContext, kind: str, source: Path) -> None:
    """Bulk-load items from SOURCE. Duplicate IDs are skipped and reported."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).import_items(kind, source))


@click.command(
    "export",
    cls=InvCommand,
    examples="""\
  invctl export electronic backup/electronic.json""",
)
@click.argument("kind", type=KIND_CHOICE)
@click.argument("destination", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_obj
def export_cmd(app: AppContext, kind: str, destination: Path) -> None:
    """Write all items of KIND to DESTINATION."""
    from invctl.services.inventory import InventoryService

    app.emit(InventoryService(app.warehouse).export_items(kind, destination))

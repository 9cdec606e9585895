"""Subcommand modules for invctl.

Provides register_commands() which uses deferred imports to keep
``invctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``add`` group and the standalone commands on the root group."""
    from invctl.commands.items import add, get, list_cmd, remove, restock, set_quantity
    from invctl.commands.transfer import export_cmd, import_cmd

    cli.add_command(add)

    cli.add_command(get)
    cli.add_command(list_cmd)
    cli.add_command(remove)
    cli.add_command(set_quantity)
    cli.add_command(restock)
    cli.add_command(import_cmd)
    cli.add_command(export_cmd)

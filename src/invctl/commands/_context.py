"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Warehouse initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from invctl.config.logging import configure_logging
from invctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from invctl.config.settings import InvSettings
    from invctl.infrastructure.warehouse import Warehouse
    from invctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The warehouse is created on first use so ``--help`` and ``--version``
    never read store files.
    """

    def __init__(self, settings: InvSettings) -> None:
        self.settings = settings
        self._warehouse: Warehouse | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def warehouse(self) -> Warehouse:
        """The warehouse instance (created lazily on first access)."""
        if self._warehouse is None:
            from invctl.infrastructure.warehouse import Warehouse

            self._warehouse = Warehouse(self.settings)
        return self._warehouse

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy store/service construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from proftree.config.logging import configure_logging
from proftree.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from proftree.config.settings import ProftreeSettings
    from proftree.infrastructure.store import SnapshotStore
    from proftree.services.result import ServiceResult
    from proftree.services.tree import TreeService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The snapshot store is created on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: ProftreeSettings) -> None:
        self.settings = settings
        self._store: SnapshotStore | None = None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            tree_path=settings.resolved_tree_path,
        )

    @property
    def store(self) -> SnapshotStore:
        if self._store is None:
            from proftree.infrastructure.store import SnapshotStore

            self._store = SnapshotStore(
                self.settings.resolved_tree_path,
                indent=self.settings.snapshot.indent,
                fmt=self.settings.snapshot.format,
            )
        return self._store

    @property
    def service(self) -> TreeService:
        from proftree.services.tree import TreeService

        return TreeService(self.store)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
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

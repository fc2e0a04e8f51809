"""Command: snapshot validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from proftree.commands._base import ProftreeCommand

if TYPE_CHECKING:
    from proftree.commands._context import AppContext


@click.command(
    cls=ProftreeCommand,
    examples="""\
  proftree check
  proftree --tree imported.yaml check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Validate the tree snapshot without changing it."""
    app.emit(app.service.check())

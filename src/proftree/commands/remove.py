"""Command: remove a node and its subtree."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from proftree.commands._base import ProftreeCommand

if TYPE_CHECKING:
    from proftree.commands._context import AppContext


@click.command(
    cls=ProftreeCommand,
    examples="""\
  proftree remove <field-id>
  proftree -q remove <task-id>""",
)
@click.argument("node_id")
@click.pass_obj
def remove(app: AppContext, node_id: str) -> None:
    """Remove a node. Everything beneath it is discarded."""
    app.emit(app.service.remove_node(node_id))

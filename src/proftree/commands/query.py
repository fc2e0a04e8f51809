"""Commands: read-only views of the tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from proftree.commands._base import ProftreeCommand
from proftree.domain.types import SchemaVersion

if TYPE_CHECKING:
    from proftree.commands._context import AppContext


@click.command(
    cls=ProftreeCommand,
    show_layers=True,
    examples="""\
  proftree show <node-id>
  proftree -v show <domain-id>
  proftree --json show <role-id>""",
)
@click.argument("node_id")
@click.pass_obj
def show(app: AppContext, node_id: str) -> None:
    """Show a node and the subtree it owns."""
    app.emit(app.service.get_node(node_id))


@click.command(
    cls=ProftreeCommand,
    show_layers=True,
    examples="""\
  proftree leaves
  proftree leaves <domain-id>
  proftree -q leaves <field-id>""",
)
@click.argument("node_id", required=False, default=None)
@click.pass_obj
def leaves(app: AppContext, node_id: str | None) -> None:
    """List the leaf nodes (tasks or responsibilities) under a node, in order.

    Without NODE_ID, lists every leaf in the tree.
    """
    app.emit(app.service.leaves(node_id))


@click.command(
    cls=ProftreeCommand,
    examples="""\
  proftree stats
  proftree --json stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Count nodes per layer."""
    app.emit(app.service.stats())


@click.command(
    cls=ProftreeCommand,
    examples="""\
  proftree layers
  proftree layers v1""",
)
@click.argument(
    "version",
    required=False,
    default=None,
    type=click.Choice([v.value for v in SchemaVersion]),
)
@click.pass_obj
def layers(app: AppContext, version: str | None) -> None:
    """Print a schema's layer labels, top to bottom."""
    from proftree.services.tree import TreeService

    version = version or str(app.settings.tree.default_version)
    app.emit(TreeService.layers(version))

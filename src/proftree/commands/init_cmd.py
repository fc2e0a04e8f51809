"""Command: tree initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from proftree.commands._base import ProftreeCommand
from proftree.domain.types import SchemaVersion

if TYPE_CHECKING:
    from proftree.commands._context import AppContext

_INIT_EXAMPLES = """\
  proftree init
  proftree init --schema v1
  proftree --tree careers.yaml init --schema v2
  proftree init --force"""


@click.command("init", cls=ProftreeCommand, show_layers=True, examples=_INIT_EXAMPLES)
@click.option(
    "--schema",
    "version",
    type=click.Choice([v.value for v in SchemaVersion]),
    default=None,
    help="Tree shape: v1 (4 layers) or v2 (6 layers). Defaults to [tree] default_version.",
)
@click.option("--force", is_flag=True, help="Replace an existing tree.")
@click.pass_obj
def init_cmd(app: AppContext, version: str | None, force: bool) -> None:
    """Create an empty tree snapshot."""
    version = version or str(app.settings.tree.default_version)
    app.emit(app.service.init_tree(version, force=force))

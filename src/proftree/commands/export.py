"""Command: write the tree snapshot to another file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from proftree.commands._base import ProftreeCommand

if TYPE_CHECKING:
    from proftree.commands._context import AppContext


@click.command(
    cls=ProftreeCommand,
    examples="""\
  proftree export --output taxonomy.yaml
  proftree export --output backup.json --format json""",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination file.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["auto", "json", "yaml"]),
    default="auto",
    help="Snapshot format (auto picks from the file suffix).",
)
@click.pass_obj
def export(app: AppContext, output: Path, fmt: str) -> None:
    """Export the tree as a JSON or YAML snapshot."""
    app.emit(app.service.export(output, fmt=fmt))

"""Subcommand modules for proftree.

Provides register_commands() which uses deferred imports to keep
``proftree --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    # --- Mutations ---
    from proftree.commands.add import add
    from proftree.commands.init_cmd import init_cmd
    from proftree.commands.remove import remove
    from proftree.commands.update import update

    cli.add_command(init_cmd)
    cli.add_command(add)
    cli.add_command(remove)
    cli.add_command(update)

    # --- Queries ---
    from proftree.commands.check import check
    from proftree.commands.export import export
    from proftree.commands.query import layers, leaves, show, stats

    cli.add_command(show)
    cli.add_command(leaves)
    cli.add_command(stats)
    cli.add_command(layers)
    cli.add_command(check)
    cli.add_command(export)

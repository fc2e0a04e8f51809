"""Root CLI group for proftree with global flags and command registration."""

from __future__ import annotations

import click

from proftree import __version__
from proftree.commands import register_commands
from proftree.commands._base import ProftreeGroup
from proftree.commands._context import AppContext
from proftree.config.settings import ProftreeSettings


@click.group(
    cls=ProftreeGroup,
    invoke_without_command=True,
    examples="""\
  proftree init --schema v2
  proftree add "STEM"
  proftree -q leaves
  proftree --json stats
  proftree --tree careers.yaml show <node-id>""",
)
@click.version_option(version=__version__, prog_name="proftree")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-t", "--tree", "tree_path", default=None, help="Override the tree snapshot path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    tree_path: str | None,
) -> None:
    """proftree — build and query professional taxonomy trees."""
    settings = ProftreeSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        tree_path=tree_path,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

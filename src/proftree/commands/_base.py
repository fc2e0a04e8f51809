"""Click base classes shared by every proftree command.

``ProftreeCommand`` and ``ProftreeGroup`` take two extra keywords:

- ``examples``: text printed by an eager ``--examples`` flag, so ``--help``
  stays short.
- ``show_layers``: append a "Layers" section to ``--help`` listing the layer
  chain of each schema version. Commands that create or address nodes by
  position use it, since the layer of a new node is implied by its parent.
"""

from __future__ import annotations

from typing import Any

import click

from proftree.domain.schema import SCHEMAS


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


class _ProftreeMixin:
    """Adds the ``examples`` and ``show_layers`` keywords to a Click class."""

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        show_layers: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.show_layers = show_layers
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples.",
                )
            )

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if not self.show_layers:
            return
        rows = [(str(version), " → ".join(schema.layers)) for version, schema in SCHEMAS.items()]
        with formatter.section("Layers"):
            formatter.write_dl(rows)


class ProftreeCommand(_ProftreeMixin, click.Command):
    """Click Command with ``--examples`` and an optional layer listing."""


class ProftreeGroup(_ProftreeMixin, click.Group):
    """Click Group whose subcommands are ``ProftreeCommand`` by default."""

    command_class = ProftreeCommand

"""Command: update a node's fields and attributes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from proftree.commands._base import ProftreeCommand
from proftree.domain.types import AttributeType, Seniority

if TYPE_CHECKING:
    from proftree.commands._context import AppContext


@click.command(
    cls=ProftreeCommand,
    show_layers=True,
    examples="""\
  proftree update <node-id> --label "Software Engineering"
  proftree update <role-id> --description "Owns the API layer"
  proftree update <role-id> --seniority Senior
  proftree update <responsibility-id> --outcome "Zero P1 incidents"
  proftree update <role-id> --add-skill Python --remove-attribute Perl""",
)
@click.argument("node_id")
@click.option("--label", default=None, help="New name (or title on roles and responsibilities).")
@click.option("--description", default=None, help="New description (summary on roles).")
@click.option("--focus", default=None, help="New focus of a v1 Specialization.")
@click.option("--outcome", default=None, help="New outcome of a v1 Responsibility.")
@click.option(
    "--seniority",
    type=click.Choice([s.value for s in Seniority]),
    default=None,
    help="New seniority of a v1 Role.",
)
@click.option("--add-skill", "skills", multiple=True, help="Attach a Skill attribute (repeatable).")
@click.option("--add-tool", "tools", multiple=True, help="Attach a Tool attribute (repeatable).")
@click.option("--add-trait", "traits", multiple=True, help="Attach a Trait attribute (repeatable).")
@click.option(
    "--remove-attribute",
    "removed",
    multiple=True,
    metavar="NAME",
    help="Drop the attribute with this name (repeatable).",
)
@click.pass_obj
def update(
    app: AppContext,
    node_id: str,
    label: str | None,
    description: str | None,
    focus: str | None,
    outcome: str | None,
    seniority: str | None,
    skills: tuple[str, ...],
    tools: tuple[str, ...],
    traits: tuple[str, ...],
    removed: tuple[str, ...],
) -> None:
    """Update a node's fields. Only the given options change.

    Attribute edits apply to the v1 layers above Responsibility.
    """
    changes: dict[str, Any] = {}
    if description is not None:
        changes["description"] = description
    if focus is not None:
        changes["focus"] = focus
    if outcome is not None:
        changes["outcome"] = outcome
    if seniority is not None:
        changes["seniority"] = seniority

    added = [
        {"name": name, "type": kind.value}
        for kind, names in (
            (AttributeType.SKILL, skills),
            (AttributeType.TOOL, tools),
            (AttributeType.TRAIT, traits),
        )
        for name in names
    ]

    if not changes and label is None and not added and not removed:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    app.emit(
        app.service.update_node(
            node_id,
            changes,
            label=label,
            add_attributes=added,
            remove_attributes=list(removed),
        )
    )

"""Command: add a node under a parent (or at the top level)."""

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
  proftree add "STEM"
  proftree add "Technology" --parent <domain-id>
  proftree add "Backend Engineer" --parent <field-id> --description "Builds services"
  proftree add "Write unit tests" --parent <role-id>
  proftree add "Platform" --parent <specialization-id> --focus "Internal tooling"
  proftree add "Staff Engineer" --parent <specialization-id> --seniority Lead --skill Python""",
)
@click.argument("label")
@click.option("--parent", "parent_id", default=None, help="Owner node ID (omit for a Domain).")
@click.option("--description", default=None, help="Description (summary on roles).")
@click.option("--focus", default=None, help="Focus of a v1 Specialization.")
@click.option("--outcome", default=None, help="Outcome of a v1 Responsibility.")
@click.option(
    "--seniority",
    type=click.Choice([s.value for s in Seniority]),
    default=None,
    help="Seniority of a v1 Role.",
)
@click.option("--skill", "skills", multiple=True, help="Attach a Skill attribute (repeatable).")
@click.option("--tool", "tools", multiple=True, help="Attach a Tool attribute (repeatable).")
@click.option("--trait", "traits", multiple=True, help="Attach a Trait attribute (repeatable).")
@click.pass_obj
def add(
    app: AppContext,
    label: str,
    parent_id: str | None,
    description: str | None,
    focus: str | None,
    outcome: str | None,
    seniority: str | None,
    skills: tuple[str, ...],
    tools: tuple[str, ...],
    traits: tuple[str, ...],
) -> None:
    """Add a node; its layer is the one below --parent."""
    attrs: dict[str, Any] = {}
    if description is not None:
        attrs["description"] = description
    if focus is not None:
        attrs["focus"] = focus
    if outcome is not None:
        attrs["outcome"] = outcome
    if seniority is not None:
        attrs["seniority"] = seniority

    attributes = [
        {"name": name, "type": kind.value}
        for kind, names in (
            (AttributeType.SKILL, skills),
            (AttributeType.TOOL, tools),
            (AttributeType.TRAIT, traits),
        )
        for name in names
    ]
    if attributes:
        attrs["attributes"] = attributes

    app.emit(app.service.add_node(attrs, parent_id=parent_id, label=label))

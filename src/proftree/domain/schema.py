"""Schema descriptors for the two supported tree shapes.

A schema pairs a version with its root class. The positional layer-label
list is derived from the root's child-type chain, so it always matches
the classes actually wired together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from proftree.domain.errors import ValidationError
from proftree.domain.four_layer import Organization
from proftree.domain.nodes import Node, RootAggregate
from proftree.domain.six_layer import Enterprise
from proftree.domain.types import SchemaVersion


@dataclass(frozen=True)
class Schema:
    """One tree shape: its version, root class, and layer chain."""

    version: SchemaVersion
    root: type[RootAggregate[Any]]
    description: str

    @property
    def layer_types(self) -> tuple[type[Node], ...]:
        chain: list[type[Node]] = []
        current: type[Node] | None = self.root.child_type
        while current is not None:
            chain.append(current)
            current = getattr(current, "child_type", None)
        return tuple(chain)

    @property
    def layers(self) -> list[str]:
        """Ordered layer labels, top level first."""
        return [layer_type.layer for layer_type in self.layer_types]

    @property
    def depth(self) -> int:
        return len(self.layer_types)

    @property
    def leaf_layer(self) -> str:
        return self.layer_types[-1].layer

    def new_root(self) -> RootAggregate[Any]:
        return self.root()


SCHEMAS: dict[SchemaVersion, Schema] = {
    SchemaVersion.V1: Schema(
        version=SchemaVersion.V1,
        root=Organization,
        description="4-layer hierarchy with Skill/Tool/Trait attributes",
    ),
    SchemaVersion.V2: Schema(
        version=SchemaVersion.V2,
        root=Enterprise,
        description="6-layer hierarchy from Domain down to Task",
    ),
}


def get_schema(version: str) -> Schema:
    """Return the schema for *version* (``"v1"`` or ``"v2"``)."""
    try:
        key = SchemaVersion(version)
    except ValueError as exc:
        allowed = ", ".join(str(v) for v in SchemaVersion)
        msg = f"Unknown schema version {version!r}. Allowed: {allowed}"
        raise ValidationError(msg) from exc
    return SCHEMAS[key]


def layer_labels(version: str) -> list[str]:
    """Positional layer labels for *version*, e.g. ``["Domain", "Industry", ...]``."""
    return get_schema(version).layers


def schema_for(root: RootAggregate[Any]) -> Schema:
    """Return the schema a root instance belongs to."""
    return get_schema(root.schema_version)

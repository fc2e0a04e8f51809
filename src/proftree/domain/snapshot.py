"""Snapshot codec — plain nested records for interchange.

Node records look like ``{id, <scalar fields>, children: [...]}``; leaves
have no ``children`` key, optional fields that are unset are omitted, and
v1 nodes add ``attributes: [{name, type, description}, ...]``. A whole
tree is ``{version, children: [...]}``.

INVARIANT: ``export_tree(import_tree(s)) == s`` for any snapshot that was
previously produced by ``export_tree`` (ids included).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from proftree.domain.errors import ValidationError
from proftree.domain.nodes import Node, RootAggregate
from proftree.domain.schema import get_schema


def export_tree(root: RootAggregate[Any]) -> dict[str, Any]:
    return root.to_snapshot()


def export_node(node: Node) -> dict[str, Any]:
    return node.to_snapshot()


def import_tree(data: Any) -> RootAggregate[Any]:
    """Rebuild a tree from a snapshot, choosing the root by its ``version``.

    Records without ids receive fresh ones.
    """
    if not isinstance(data, Mapping):
        msg = f"Snapshot must be a mapping, got {type(data).__name__}"
        raise ValidationError(msg)
    version = data.get("version")
    if version is None:
        msg = "Snapshot is missing 'version'"
        raise ValidationError(msg)
    schema = get_schema(str(version))
    return schema.root.create(data)

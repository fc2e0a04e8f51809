"""TreeService — mutation and aggregate queries over a stored tree.

Pipeline for mutations: LOAD → LOCATE → APPLY → SAVE → RESPOND.
The snapshot is only written when APPLY succeeds, so a failed command
never changes the file.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any

from proftree.domain.errors import InvariantViolation, ValidationError
from proftree.domain.four_layer import AttributeCarrier
from proftree.domain.nodes import Node, Owner
from proftree.domain.schema import get_schema, schema_for
from proftree.domain.snapshot import export_tree, import_tree
from proftree.infrastructure.store import SnapshotStore
from proftree.services.base import HANDLED_ERRORS, BaseService
from proftree.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _summary(node: Node) -> dict[str, Any]:
    return {"id": node.id, "layer": node.layer, "label": node.label}


def _for_layer(layer_type: type[Node], attrs: dict[str, Any], label: str | None) -> dict[str, Any]:
    """Map layer-agnostic input onto *layer_type*'s own field names.

    *label* becomes ``name`` or ``title``; ``description`` becomes
    ``summary`` on layers that only carry a summary.
    """
    fields = dict(attrs)
    if label is not None:
        fields[layer_type.label_field] = label
    known = layer_type.fields_model.model_fields
    if "description" in fields and "description" not in known and "summary" in known:
        fields["summary"] = fields.pop("description")
    return fields


class TreeService(BaseService):
    """Build, edit, and inspect the tree held in one snapshot file."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_tree(self, version: str, *, force: bool = False) -> ServiceResult:
        """Write an empty tree of the given schema version."""
        op = "init_tree"
        if self._store.exists() and not force:
            return ServiceResult.failure(
                op,
                "TREE_EXISTS",
                f"A tree already exists at {self._store.path} (use --force to replace it)",
            )
        try:
            schema = get_schema(version)
            self._store.save(schema.new_root())
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        logger.debug("Initialized %s tree at %s", schema.version, self._store.path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(self._store.path),
                "version": str(schema.version),
                "layers": schema.layers,
            },
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_node(
        self,
        attrs: dict[str, Any],
        *,
        parent_id: str | None = None,
        label: str | None = None,
    ) -> ServiceResult:
        """Append a node under *parent_id*, or at the top level when None.

        *label* is stored in the child layer's ``name`` or ``title`` field.
        """
        op = "add_node"
        try:
            with self._store.transaction() as root:
                owner: Any = root if parent_id is None else self._require(root, parent_id)
                if not isinstance(owner, Owner):
                    msg = f"{owner.layer} {owner.id} is a leaf and cannot own children"
                    raise InvariantViolation(msg)
                child = owner.add_child(_for_layer(owner.child_type, attrs, label))
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        data = {**_summary(child), "parent_id": parent_id}
        return ServiceResult(ok=True, op=op, data=data)

    def remove_node(self, node_id: str) -> ServiceResult:
        """Remove a node and discard its whole subtree."""
        op = "remove_node"
        try:
            with self._store.transaction() as root:
                node = self._require(root, node_id)
                leaves_removed = len(node.all_leaves())
                nodes_removed = sum(1 for _ in node.walk())
                node.remove()
                remaining = len(root.all_leaves())
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                **_summary(node),
                "nodes_removed": nodes_removed,
                "leaves_removed": leaves_removed,
                "remaining_leaves": remaining,
            },
        )

    def update_node(
        self,
        node_id: str,
        changes: dict[str, Any],
        *,
        label: str | None = None,
        add_attributes: list[dict[str, Any]] | None = None,
        remove_attributes: list[str] | None = None,
    ) -> ServiceResult:
        """Merge *changes* (and an optional new *label*) into a node's scalar fields.

        *remove_attributes* names are dropped before *add_attributes* are
        appended; both need a layer that carries attributes.
        """
        op = "update_node"
        warnings: list[str] = []
        try:
            with self._store.transaction() as root:
                node = self._require(root, node_id)
                changes = _for_layer(type(node), changes, label)
                editing_attributes = bool(add_attributes or remove_attributes)
                if editing_attributes and not isinstance(node, AttributeCarrier):
                    msg = f"{node.layer} {node.id} does not carry attributes"
                    raise InvariantViolation(msg)
                before = node.scalars()
                node.update(changes)
                for name in remove_attributes or []:
                    node.remove_attribute(name)
                for entry in add_attributes or []:
                    node.add_attribute(entry)
                after = node.scalars()
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        fields_changed = [key for key in changes if before.get(key) != after.get(key)]
        unchanged = [key for key in changes if key not in fields_changed]
        if editing_attributes and "attributes" not in changes:
            fields_changed.append("attributes")
        if unchanged:
            warnings.append(f"Already up to date: {', '.join(unchanged)}")
        return ServiceResult(
            ok=True,
            op=op,
            data={**_summary(node), "fields_changed": fields_changed},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_node(self, node_id: str) -> ServiceResult:
        op = "get_node"
        try:
            root = self._store.load()
            node = self._require(root, node_id)
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        layers = schema_for(root).layers
        parent = node.parent
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **_summary(node),
                "parent_id": parent.id if isinstance(parent, Node) else None,
                "leaf_count": len(node.all_leaves()),
                "depth": layers.index(node.layer) + 1,
                "layers": layers[layers.index(node.layer) :],
                "node": node.to_snapshot(),
            },
        )

    def leaves(self, node_id: str | None = None) -> ServiceResult:
        """List every leaf under *node_id* (or the whole forest), in order."""
        op = "leaves"
        try:
            root = self._store.load()
            scope: Any = root if node_id is None else self._require(root, node_id)
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        items = [_summary(leaf) for leaf in scope.all_leaves()]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    def stats(self) -> ServiceResult:
        """Count nodes per layer and total leaves."""
        op = "stats"
        try:
            root = self._store.load()
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        schema = schema_for(root)
        counts = Counter(node.layer for node in root.walk())
        layers = {label: counts.get(label, 0) for label in schema.layers}
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": str(schema.version),
                "layers": layers,
                "total_nodes": sum(layers.values()),
                "total_leaves": len(root.all_leaves()),
            },
        )

    def check(self) -> ServiceResult:
        """Validate the snapshot and report whether it is in canonical form."""
        op = "check"
        warnings: list[str] = []
        try:
            raw = self._store.read()
            root = import_tree(raw)
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        canonical = export_tree(root) == raw
        if not canonical:
            warnings.append(
                "Snapshot is valid but not canonical (missing ids or extra defaults); "
                "the next mutation will rewrite it"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": str(root.schema_version),
                "nodes": sum(1 for _ in root.walk()),
                "leaves": len(root.all_leaves()),
                "canonical": canonical,
            },
            warnings=warnings,
        )

    def export(self, output: Path, *, fmt: str = "auto") -> ServiceResult:
        """Write the tree's snapshot to *output* as JSON or YAML."""
        op = "export_tree"
        target = SnapshotStore(output, indent=self._store.indent, fmt=fmt)
        try:
            root = self._store.load()
            target.save(root)
        except HANDLED_ERRORS as exc:
            return self._error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(output),
                "format": target.format,
                "nodes": sum(1 for _ in root.walk()),
            },
        )

    @staticmethod
    def layers(version: str) -> ServiceResult:
        """Describe a schema version's positional layer labels."""
        op = "layers"
        try:
            schema = get_schema(version)
        except ValidationError as exc:
            return ServiceResult.failure(op, "VALIDATION_FAILED", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": str(schema.version),
                "layers": schema.layers,
                "leaf_layer": schema.leaf_layer,
                "description": schema.description,
            },
        )

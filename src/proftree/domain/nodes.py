"""Generic node/layer abstraction for strictly-layered ownership trees.

A node holds a validated record of scalar fields plus, for composite
layers, an ordered collection of children of exactly one child layer.
Leaves have no child collection and are the base case of aggregation.
The root aggregate owns the forest of top-level nodes and shares the
child-collection contract without being a node itself.

INVARIANTS:
- A node is owned by at most one parent at a time; ``add_child`` refuses
  nodes that already have an owner.
- A collection only holds nodes of its declared ``child_type``.
- Removal never reorders the remaining siblings.
- A removed node (and its whole subtree) is terminal: every further
  mutation raises :class:`InvariantViolation`.
- ``all_leaves()`` is recomputed from the live structure on every call.

Mutations validate everything before touching state, so a failed call
leaves the tree exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, ClassVar, Self, cast

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from proftree.domain.errors import InvariantViolation, NotFoundError, ValidationError
from proftree.domain.ids import check_id, next_id

# Keys that describe structure rather than scalar state.
STRUCTURAL_KEYS = frozenset({"id", "children"})


class LayerFields(BaseModel):
    """Base for per-layer scalar field records. Unknown keys are rejected."""

    model_config = {"frozen": True, "extra": "forbid"}


def _merge_attrs(attrs: Mapping[str, Any] | None, extra: dict[str, Any]) -> dict[str, Any]:
    """Combine a positional attribute mapping with keyword attributes."""
    if attrs is not None and not isinstance(attrs, Mapping):
        msg = f"Expected a mapping of attributes, got {type(attrs).__name__}"
        raise ValidationError(msg)
    return {**(attrs or {}), **extra}


def _format_errors(exc: PydanticValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<record>"
        messages.append(f"{loc}: {err['msg']}")
    return messages


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------


class Node:
    """One vertex of an ownership tree.

    Subclasses declare ``layer`` (display label), ``fields_model`` (the
    scalar record) and ``label_field`` (``name`` or ``title``). Scalar
    fields are readable as attributes but only writable through
    :meth:`update`.
    """

    layer: ClassVar[str] = "Node"
    fields_model: ClassVar[type[LayerFields]] = LayerFields
    label_field: ClassVar[str] = "name"

    def __init__(self, fields: LayerFields, *, node_id: str | None = None) -> None:
        self._id = node_id if node_id is not None else next_id()
        self._fields = fields
        self._parent: Owner[Any] | None = None
        self._removed = False

    # --- Construction -----------------------------------------------------

    @classmethod
    def create(cls, attrs: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Self:
        """Validate *attrs* and return a new, unattached node.

        *attrs* may be a previously exported snapshot: an ``id`` is kept
        as-is and nested ``children`` are rebuilt in order. Without an
        ``id`` a fresh one is assigned.
        """
        return cls._from_record(_merge_attrs(attrs, kwargs), set())

    @classmethod
    def _from_record(cls, data: Mapping[str, Any], seen: set[str]) -> Self:
        record = dict(data)
        node_id: str | None = None
        raw_id = record.pop("id", None)
        if raw_id is not None:
            node_id = check_id(raw_id)
            if node_id in seen:
                msg = f"Duplicate node id in snapshot: {node_id}"
                raise ValidationError(msg)
            seen.add(node_id)
        children = record.pop("children", None)
        node = cls(cls._validate_fields(record), node_id=node_id)
        node._build_children(children, seen)
        return node

    @classmethod
    def _validate_fields(cls, record: Mapping[str, Any]) -> LayerFields:
        try:
            return cls.fields_model.model_validate(dict(record))
        except PydanticValidationError as exc:
            errors = _format_errors(exc)
            msg = f"Invalid {cls.layer}: {'; '.join(errors)}"
            raise ValidationError(msg, errors) from exc

    def _build_children(self, records: Any, seen: set[str]) -> None:
        if records is not None:
            msg = f"{self.layer} is a leaf layer and cannot have children"
            raise ValidationError(msg)

    # --- Identity and state -----------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> str:
        """The node's display label (its ``name`` or ``title``)."""
        return cast(str, getattr(self._fields, self.label_field))

    @property
    def parent(self) -> Owner[Any] | None:
        """The owning node or root, or None when unattached or removed."""
        return self._parent

    @property
    def is_removed(self) -> bool:
        return self._removed

    def scalars(self) -> dict[str, Any]:
        """Return the current scalar fields as a plain dict."""
        return self._fields.model_dump()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        fields = self.__dict__.get("_fields")
        if fields is not None and name in type(fields).model_fields:
            return getattr(fields, name)
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self).fields_model.model_fields:
            msg = f"{self.layer}.{name} is read-only; use update()"
            raise InvariantViolation(msg)
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, {self.label_field}={self.label!r})"

    def _ensure_live(self) -> None:
        if self._removed:
            msg = f"{self.layer} {self._id} has been removed and can no longer be mutated"
            raise InvariantViolation(msg)

    def _detach(self) -> None:
        """Drop the owner link and mark the whole subtree removed."""
        self._parent = None
        for node in self.walk():
            node._removed = True

    # --- Mutation ---------------------------------------------------------

    def update(self, attrs: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Self:
        """Shallow-merge the given scalar fields into this node.

        Only keys present in *attrs* change. ``id`` and ``children`` can
        never be updated.
        """
        self._ensure_live()
        changes = _merge_attrs(attrs, kwargs)
        structural = sorted(STRUCTURAL_KEYS.intersection(changes))
        if structural:
            msg = f"Cannot update {', '.join(structural)} on {self.layer} {self._id}"
            raise InvariantViolation(msg)
        merged = {**self._fields.model_dump(), **changes}
        self._fields = self._validate_fields(merged)
        return self

    def remove(self) -> None:
        """Detach this node (and its subtree) from its owner."""
        self._ensure_live()
        if self._parent is None:
            msg = f"{self.layer} {self._id} is not attached to an owner"
            raise InvariantViolation(msg)
        self._parent.remove_child(self)

    # --- Views ------------------------------------------------------------

    def iter_leaves(self) -> Iterator[Node]:
        raise NotImplementedError

    def all_leaves(self) -> list[Node]:
        """All leaves reachable from this node, in left-to-right order."""
        return list(self.iter_leaves())

    def walk(self) -> Iterator[Node]:
        """Depth-first, pre-order iteration over this node and its subtree."""
        yield self

    def find(self, node_id: str) -> Node | None:
        for node in self.walk():
            if node._id == node_id:
                return node
        return None

    def to_snapshot(self) -> dict[str, Any]:
        return {"id": self._id, **self._fields.model_dump(mode="json", exclude_none=True)}


class Leaf(Node):
    """A node with no child collection."""

    def iter_leaves(self) -> Iterator[Node]:
        yield self


# ---------------------------------------------------------------------------
# Child collections
# ---------------------------------------------------------------------------


class Owner[C: Node]:
    """Ordered, exclusively-owned collection of ``child_type`` nodes.

    Shared by composite nodes and the root aggregate.
    """

    child_type: ClassVar[type[Node]]
    _children: list[C]

    @property
    def children(self) -> tuple[C, ...]:
        return tuple(self._children)

    def _describe(self) -> str:
        return type(self).__name__

    def _build_children(self, records: Any, seen: set[str]) -> None:
        if records is None:
            return
        if not isinstance(records, Sequence) or isinstance(records, str | bytes):
            msg = f"children of {self._describe()} must be a list"
            raise ValidationError(msg)
        for record in records:
            if not isinstance(record, Mapping):
                msg = f"children of {self._describe()} must be mappings"
                raise ValidationError(msg)
            child = cast(C, self.child_type._from_record(record, seen))
            child._parent = self
            self._children.append(child)

    def add_child(self, child: Mapping[str, Any] | C | None = None, /, **kwargs: Any) -> C:
        """Append a child built from attributes, or adopt an unowned node."""
        self._ensure_live()  # type: ignore[attr-defined]
        if isinstance(child, Node):
            if kwargs:
                msg = "Keyword attributes cannot be combined with an existing node"
                raise ValidationError(msg)
            node = self._check_adoptable(child)
        else:
            node = cast(C, self.child_type.create(child, **kwargs))
        self._check_unique_ids(node)
        node._parent = self
        self._children.append(node)
        return node

    def _check_adoptable(self, child: Node) -> C:
        if not isinstance(child, self.child_type):
            msg = (
                f"{self._describe()} accepts {self.child_type.layer} children, "
                f"not {child.layer}"
            )
            raise InvariantViolation(msg)
        if child.is_removed:
            msg = f"{child.layer} {child.id} has been removed and cannot be re-attached"
            raise InvariantViolation(msg)
        if child.parent is not None:
            msg = f"{child.layer} {child.id} is already owned by {child.parent._describe()}"
            raise InvariantViolation(msg)
        return cast(C, child)

    def _top_owner(self) -> Owner[Any]:
        """The root aggregate, or the topmost node of an unattached subtree."""
        owner: Owner[Any] = self
        while isinstance(owner, Node) and owner.parent is not None:
            owner = owner.parent
        return owner

    def _check_unique_ids(self, incoming: Node) -> None:
        """Reject a subtree whose ids already occur anywhere in this tree."""
        existing = {node.id for node in self._top_owner().walk()}
        clashes = sorted(node.id for node in incoming.walk() if node.id in existing)
        if clashes:
            msg = f"Ids already present in the tree: {', '.join(clashes)}"
            raise InvariantViolation(msg)

    def remove_child(self, child: C | str) -> C:
        """Detach the child with the same id and discard its subtree."""
        self._ensure_live()  # type: ignore[attr-defined]
        target = child.id if isinstance(child, Node) else child
        for index, existing in enumerate(self._children):
            if existing.id == target:
                break
        else:
            msg = f"{target} is not a child of {self._describe()}"
            raise NotFoundError(msg)
        removed = self._children.pop(index)
        removed._detach()
        return removed

    def iter_leaves(self) -> Iterator[Node]:
        for child in self._children:
            yield from child.iter_leaves()

    def walk(self) -> Iterator[Node]:
        raise NotImplementedError

    def _walk_children(self) -> Iterator[Node]:
        for child in self._children:
            yield from child.walk()


class CompositeNode[C: Node](Owner[C], Node):
    """A node that owns an ordered collection of one child layer."""

    def __init__(self, fields: LayerFields, *, node_id: str | None = None) -> None:
        super().__init__(fields, node_id=node_id)
        self._children = []

    def _describe(self) -> str:
        return f"{self.layer} {self._id}"

    def walk(self) -> Iterator[Node]:
        yield self
        yield from self._walk_children()

    def to_snapshot(self) -> dict[str, Any]:
        snapshot = super().to_snapshot()
        snapshot["children"] = [child.to_snapshot() for child in self._children]
        return snapshot


# ---------------------------------------------------------------------------
# Root aggregate
# ---------------------------------------------------------------------------


class RootAggregate[C: Node](Owner[C]):
    """Top-level container of a tree: no id, no parent, never removed."""

    schema_version: ClassVar[str]

    def __init__(self) -> None:
        self._children = []

    @classmethod
    def create(cls, snapshot: Mapping[str, Any] | None = None) -> Self:
        """Build a root, optionally from an exported ``{version, children}`` record."""
        data = dict(snapshot or {})
        version = data.pop("version", None)
        if version is not None and version != cls.schema_version:
            msg = f"Snapshot version {version!r} does not match {cls.schema_version!r}"
            raise ValidationError(msg)
        children = data.pop("children", None)
        if data:
            msg = f"Unknown root key(s): {', '.join(sorted(data))}"
            raise ValidationError(msg)
        root = cls()
        root._build_children(children, set())
        return root

    def _ensure_live(self) -> None:
        return None

    def add_top_level(self, attrs: Mapping[str, Any] | C | None = None, /, **kwargs: Any) -> C:
        return self.add_child(attrs, **kwargs)

    def all_leaves(self) -> list[Node]:
        return list(self.iter_leaves())

    def walk(self) -> Iterator[Node]:
        """Depth-first iteration over every node in the forest."""
        yield from self._walk_children()

    def find(self, node_id: str) -> Node | None:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "version": str(self.schema_version),
            "children": [child.to_snapshot() for child in self._children],
        }

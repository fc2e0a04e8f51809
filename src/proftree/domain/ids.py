"""Identifier generation for tree nodes.

Every node receives a UUID4 string at creation time. Imported snapshots
keep the ids they carry.

INVARIANT: IDs are permanent. Once assigned, a node's ID never changes
and is never issued again.
"""

from __future__ import annotations

import uuid

from proftree.domain.errors import ValidationError


def next_id() -> str:
    """Return a fresh, globally-unique node identifier."""
    return str(uuid.uuid4())


def check_id(value: object) -> str:
    """Validate an identifier carried by an imported snapshot."""
    if not isinstance(value, str) or not value.strip():
        msg = f"Invalid node id: {value!r}"
        raise ValidationError(msg)
    return value

"""BaseService — foundation for proftree services.

Every service receives a :class:`SnapshotStore` at construction time and
owns its load/mutate/save boundary via ``self._store.transaction()``.
Domain and snapshot errors are converted into failed ServiceResults here;
anything else propagates.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from proftree.domain.errors import (
    InvariantViolation,
    NotFoundError,
    TreeError,
    ValidationError,
)
from proftree.infrastructure.store import SnapshotFormatError
from proftree.services.result import ServiceResult

if TYPE_CHECKING:
    from proftree.domain.nodes import Node, RootAggregate
    from proftree.infrastructure.store import SnapshotStore

logger = logging.getLogger(__name__)

# Exceptions a service turns into a failed result.
HANDLED_ERRORS: tuple[type[Exception], ...] = (
    TreeError,
    SnapshotFormatError,
    OSError,
)

_ERROR_CODES: dict[type[Exception], str] = {
    ValidationError: "VALIDATION_FAILED",
    NotFoundError: "NOT_FOUND",
    InvariantViolation: "INVARIANT_VIOLATION",
    SnapshotFormatError: "INVALID_SNAPSHOT",
    FileNotFoundError: "NO_TREE",
    OSError: "IO_ERROR",
}


class BaseService:
    """Base for service-layer classes operating on one snapshot file."""

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def _error(self, op: str, exc: Exception) -> ServiceResult:
        """Translate a handled exception into a failed ServiceResult."""
        code = next(
            (code for kind, code in _ERROR_CODES.items() if isinstance(exc, kind)),
            "TREE_ERROR",
        )
        detail: dict[str, Any] = {}
        if isinstance(exc, ValidationError):
            detail["errors"] = exc.errors
        if isinstance(exc, FileNotFoundError):
            message = f"No tree at {self._store.path}; run 'proftree init' first"
        else:
            message = str(exc)
        logger.debug("%s failed: %s (%s)", op, message, code)
        return ServiceResult.failure(op, code, message, detail=detail)

    @staticmethod
    def _require(root: RootAggregate[Any], node_id: str) -> Node:
        node = root.find(node_id)
        if node is None:
            msg = f"No node found with ID: {node_id}"
            raise NotFoundError(msg)
        return node

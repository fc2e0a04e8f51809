"""Error kinds raised by the ownership-tree engine.

All three are raised synchronously at the call site of the offending
operation and are never retried. Every mutation is all-or-nothing, so a
caller can safely retry by hand after fixing its input.
"""

from __future__ import annotations


class TreeError(Exception):
    """Base class for ownership-tree errors."""


class ValidationError(TreeError):
    """Construction or update attributes failed validation.

    Attributes:
        errors: One human-readable message per problem found.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class NotFoundError(TreeError):
    """The target is not currently a member of the expected collection."""


class InvariantViolation(TreeError):
    """A structural invariant would be broken (id, typing, ownership, removal)."""

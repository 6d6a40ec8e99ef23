"""Outliner Error Hierarchy.

Provides a structured error hierarchy for all document store operations:
- OutlineError: Base exception for all outline errors
- ValidationError: Argument validation failures
- InvalidArgumentError: Out-of-range index or otherwise unusable argument
- CycleError: Move would place a block under itself or its own subtree
- NotFoundError: Referenced block or anchor is not present

Each error type includes:
- Descriptive message
- Optional fields for context
- Recoverable flag for callers that retry
- Structured representation for CLI / JSON output

Usage:
    from outliner.errors import CycleError, InvalidArgumentError

    if new_index < 0:
        raise InvalidArgumentError("Index must not be negative", field="index", value=new_index)
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Base Classes
# =============================================================================


class OutlineError(Exception):
    """Base exception for all outline errors.

    Attributes:
        message: Human-readable error description
        recoverable: Whether the operation can be retried
        context: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        *,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured dictionary for CLI / JSON output."""
        return {
            "type": type(self).__name__.lower().replace("error", ""),
            "message": self.message,
            "recoverable": self.recoverable,
            **{k: v for k, v in self.context.items() if v is not None},
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(OutlineError):
    """Argument validation failed.

    Example:
        raise ValidationError("Index out of range", field="index", value=7)
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if constraint:
            context["constraint"] = constraint
        if value is not None:
            context["value"] = _truncate(str(value), 100)
        super().__init__(message, recoverable=False, context=context)
        self.field = field
        self.constraint = constraint


class InvalidArgumentError(ValidationError):
    """Index outside the accepted range, or an argument that cannot be used."""


class CycleError(ValidationError):
    """Move rejected because the target parent is the block or its descendant."""

    def __init__(
        self,
        message: str,
        *,
        block_id: str | None = None,
        parent_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            field="new_parent",
            constraint="acyclic",
            context={"block_id": block_id, "parent_id": parent_id},
        )
        self.block_id = block_id
        self.parent_id = parent_id


# =============================================================================
# Lookup Errors
# =============================================================================


class NotFoundError(OutlineError):
    """Requested block (or sequence anchor) does not exist."""

    def __init__(
        self,
        message: str,
        *,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            recoverable=False,
            context={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# =============================================================================
# Helpers
# =============================================================================


def _truncate(value: str | None, max_len: int) -> str | None:
    """Truncate a string for inclusion in error context."""
    if value is None:
        return None
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."

"""Error types shared by the finance tracker."""

from __future__ import annotations

from typing import Dict, Optional


class FinanceTrackerError(Exception):
    """Base class for all finance tracker errors."""


class ValidationError(FinanceTrackerError, ValueError):
    """Raised when submitted form data is missing or invalid.

    Args:
        errors: Mapping of field name to a human readable message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid fields: {fields}")


class NotFoundError(FinanceTrackerError, LookupError):
    """Raised when an operation references an id absent from its collection."""

    def __init__(self, kind: str, record_id: Optional[int]):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class InvalidTransitionError(FinanceTrackerError):
    """Raised when a goal operation is not allowed in the goal's current state."""


class StorageError(FinanceTrackerError):
    """Raised when a collection cannot be serialized or written."""


class NetworkError(FinanceTrackerError):
    """Raised when exchange rates cannot be fetched."""

"""
Outcome of a logical operation.

Every operation exposed by OrderingService returns an Outcome instead of
raising, so a request never crashes on an expected failure. The catalog
boundary uses the same type for menu fetches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from core.exceptions import TableOrderError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Discriminated success/failure result.

    Lifecycle:
        Created once by the operation, read by the caller. Never mutated.
    """

    success: bool
    """True when the operation took effect."""

    value: Optional[T] = None
    """Result payload on success (may legitimately be None)."""

    error: Optional[TableOrderError] = None
    """The error on failure, None on success."""

    message: str = ""
    """Short human-readable message for the caller."""

    @classmethod
    def ok(cls, value: Optional[T] = None, message: str = "") -> "Outcome[T]":
        """Create a successful outcome."""
        return cls(success=True, value=value, message=message)

    @classmethod
    def failed(cls, error: TableOrderError) -> "Outcome[T]":
        """Create a failed outcome from an error."""
        return cls(success=False, error=error, message=error.message)

    @property
    def status_code(self) -> int:
        """HTTP status for the JSON surface."""
        if self.success:
            return 200
        return self.error.status_code

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if not self.success:
            raise self.error
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Envelope without the value; routes add their own payload keys."""
        if self.success:
            data: Dict[str, Any] = {"success": True}
            if self.message:
                data["message"] = self.message
            return data

        data = {"success": False}
        data.update(self.error.to_dict())
        return data

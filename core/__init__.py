"""
Core module for the table order terminal.

Contains fundamental building blocks shared by every layer:
- exceptions: Custom exception hierarchy
- seat_identity: Seat id normalization and validation
- clock: Wall-clock helpers
"""

from .exceptions import (
    TableOrderError,
    ValidationError,
    LastOrderReachedError,
    EmptyCartError,
    NotFoundError,
    ThrottledError,
    CatalogUnavailableError,
)
from .seat_identity import (
    normalize_seat_id,
    validate_seat_id,
    is_canonical_seat_id,
    generate_seat_options,
)

__all__ = [
    "TableOrderError",
    "ValidationError",
    "LastOrderReachedError",
    "EmptyCartError",
    "NotFoundError",
    "ThrottledError",
    "CatalogUnavailableError",
    "normalize_seat_id",
    "validate_seat_id",
    "is_canonical_seat_id",
    "generate_seat_options",
]

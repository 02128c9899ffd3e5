"""
Custom exceptions for the table order terminal.

Exception Hierarchy:
    TableOrderError (base)
    ├── ValidationError          - Malformed seat id, bad quantity, sold-out item
    │   └── LastOrderReachedError - Confirmation after last order (when enforced)
    ├── EmptyCartError           - Confirm attempted on an empty cart
    ├── NotFoundError            - Unknown order record or seat scope
    ├── ThrottledError           - Staff call inside the cooldown window
    └── CatalogUnavailableError  - Menu catalog could not be read

Usage:
    Services raise these. OrderingService turns them into failed Outcomes,
    so no request ever crashes on one. None of them is fatal to the process.
    CatalogUnavailableError never leaves the catalog boundary; cart and
    ledger code only ever sees resolved MenuItems.
"""

from typing import Optional, Dict, Any


class TableOrderError(Exception):
    """
    Base exception for all table order errors.

    Attributes:
        status_code: HTTP status the JSON surface reports for this error
    """

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON error payload."""
        data = {
            "error": self.message,
            "errorType": type(self).__name__,
        }
        if self.details:
            data["details"] = dict(self.details)
        return data


class ValidationError(TableOrderError):
    """
    Input was rejected at the boundary; state is unchanged.

    Typical causes:
    - Seat id that does not normalize to the canonical form
    - Missing item id
    - Quantity that is not an integer
    - Adding an item the catalog marks as sold out
    """

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class LastOrderReachedError(ValidationError):
    """
    Order confirmed after the last-order cutoff.

    Only raised when LAST_ORDER_ENFORCED is enabled.
    """

    def __init__(self, last_order_at: str):
        super().__init__("Last order time has passed", field="lastOrderAt", value=last_order_at)
        self.last_order_at = last_order_at


class EmptyCartError(TableOrderError):
    """Confirm was attempted on an empty cart. No records were created."""

    status_code = 400

    def __init__(self, seat_id: str):
        super().__init__("Cart is empty", {"seat_id": seat_id})
        self.seat_id = seat_id


class NotFoundError(TableOrderError):
    """
    Operation referenced an order record (or seat scope) that does not exist.

    Treated as a no-op failure, never fatal.
    """

    status_code = 404

    def __init__(self, message: str, seat_id: Optional[str] = None, record_id: Optional[int] = None):
        details = {}
        if seat_id:
            details["seat_id"] = seat_id
        if record_id is not None:
            details["record_id"] = record_id
        super().__init__(message, details)
        self.seat_id = seat_id
        self.record_id = record_id


class ThrottledError(TableOrderError):
    """
    Staff call attempted inside the cooldown window.

    The caller is told how many seconds remain before the next call.
    """

    status_code = 429

    def __init__(self, seat_id: str, remaining_seconds: int):
        message = f"Please wait {remaining_seconds}s before calling staff again"
        details = {
            "seat_id": seat_id,
            "remaining_seconds": remaining_seconds,
        }
        super().__init__(message, details)
        self.seat_id = seat_id
        self.remaining_seconds = remaining_seconds


class CatalogUnavailableError(TableOrderError):
    """
    Menu catalog could not be read.

    Typical causes:
    - MENU_CATALOG_PATH points to a missing or malformed file
    - Upstream menu API is down
    """

    status_code = 503

    def __init__(self, message: str = "Menu catalog is not available", source: Optional[str] = None):
        details = {"resolution": "Unknown items are priced at 0 until the catalog recovers"}
        if source:
            details["source"] = source
        super().__init__(message, details)
        self.source = source

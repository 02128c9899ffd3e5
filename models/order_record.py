"""
Order ledger data models.

An OrderRecord is one confirmed line item. Records are frozen: the only
field that ever changes is ``delivered``, and the ledger does that by
swapping in a replaced copy. Wire keys (id, name, price, qty, delivered, ts)
match what the order history screen already reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict

from core.exceptions import ValidationError


class OrderFilter(Enum):
    """
    Order history filter.

    Values match the ``filter`` query parameter of the history screen.
    """

    ALL = "all"
    PENDING = "pending"
    DELIVERED = "delivered"

    @classmethod
    def from_value(cls, value) -> "OrderFilter":
        """Parse a query value; empty means ALL."""
        if value is None or value == "":
            return cls.ALL
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                "Filter must be one of: all, pending, delivered",
                field="filter",
                value=value,
            ) from None

    def matches(self, record: "OrderRecord") -> bool:
        if self is OrderFilter.PENDING:
            return not record.delivered
        if self is OrderFilter.DELIVERED:
            return record.delivered
        return True


@dataclass(frozen=True)
class OrderRecord:
    """
    A confirmed line item in a seat's ledger.

    Several records may share the same item id and even the same
    confirmation timestamp; ``record_id`` is the identity used for
    toggling and deletion.
    """

    record_id: int
    """Per-seat sequence number, unique within the seat's ledger."""

    item_id: str
    """Menu item id the line was confirmed from."""

    name: str
    """Item name at confirmation time."""

    unit_price: int
    """Unit price at confirmation time."""

    quantity: int
    """Confirmed quantity (>= 1)."""

    confirmed_at: int
    """Confirmation timestamp (epoch ms), shared by all lines of one confirmation."""

    delivered: bool = False
    """Whether staff have served this line."""

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    def with_delivered(self, delivered: bool) -> "OrderRecord":
        """Copy of this record with the delivery flag set."""
        return replace(self, delivered=delivered)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the order history JSON shape."""
        return {
            "recordId": self.record_id,
            "id": self.item_id,
            "name": self.name,
            "price": self.unit_price,
            "qty": self.quantity,
            "subtotal": self.subtotal,
            "delivered": self.delivered,
            "ts": self.confirmed_at,
        }


@dataclass(frozen=True)
class DeliveryStatus:
    """
    Derived delivered/pending quantities for one seat.

    Never stored; recomputed from the ledger on every read.
    """

    delivered_quantity: int = 0
    pending_quantity: int = 0

    @property
    def total_quantity(self) -> int:
        return self.delivered_quantity + self.pending_quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delivered": self.delivered_quantity,
            "pending": self.pending_quantity,
        }

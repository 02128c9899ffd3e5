"""
Cart data models.

The cart itself is stored as a plain item-id -> quantity mapping inside the
seat state. These classes are the read views handed to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.order_record import DeliveryStatus


@dataclass(frozen=True)
class CartLine:
    """One cart entry. Quantity is always at least 1."""

    item_id: str
    quantity: int

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Cart line quantity must be >= 1, got {self.quantity}")


@dataclass(frozen=True)
class PricedCartLine:
    """
    A cart line resolved against the menu catalog.

    Unknown items keep their raw id as name and are priced at 0.
    """

    item_id: str
    name: str
    unit_price: int
    quantity: int
    known: bool = True

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.item_id,
            "name": self.name,
            "price": self.unit_price,
            "qty": self.quantity,
            "subtotal": self.subtotal,
            "known": self.known,
        }


@dataclass(frozen=True)
class CartSummary:
    """
    Everything the cart panel needs in one read.

    Built by OrderingService.get_cart_snapshot.
    """

    seat_id: str
    """Seat this cart belongs to."""

    cart: Dict[str, int]
    """Raw item-id -> quantity mapping."""

    lines: List[PricedCartLine] = field(default_factory=list)
    """Cart lines resolved against the catalog."""

    total_price: int = 0
    """Sum of quantity x unit price; unknown items contribute 0."""

    total_items: int = 0
    """Sum of quantities."""

    delivery: DeliveryStatus = field(default_factory=DeliveryStatus)
    """Delivered/pending quantities of the seat's confirmed orders."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the getCart JSON payload."""
        return {
            "seatId": self.seat_id,
            "cart": dict(self.cart),
            "lines": [line.to_dict() for line in self.lines],
            "total": self.total_price,
            "count": self.total_items,
            "deliveryStatus": self.delivery.to_dict(),
        }

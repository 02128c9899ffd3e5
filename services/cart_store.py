"""
Per-seat cart operations.

Carts live in SeatStateStore; this class owns the mutation rules:
    - quantity is never zero or negative in stored state
    - setting a quantity <= 0 removes the line
    - unknown item ids are tolerated (priced at 0 downstream)

Every mutation returns a copy of the resulting cart, never the live dict.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from core.exceptions import ValidationError
from models.cart import CartLine
from services.seat_store import SeatStateStore
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

PriceLookup = Callable[[str], Optional[int]]

MAX_ITEM_ID_LENGTH = 64


def require_item_id(item_id: Any) -> str:
    """
    Trimmed item id.

    Raises:
        ValidationError: If the id is not a string, is blank or is too long
    """
    if item_id is None:
        item_id = ""
    if not isinstance(item_id, str):
        raise ValidationError("Item id must be a string", field="itemId", value=item_id)

    item_id = item_id.strip()
    if not item_id:
        raise ValidationError("Item id is required", field="itemId", value=item_id)
    if len(item_id) > MAX_ITEM_ID_LENGTH:
        raise ValidationError(
            f"Item id too long. Maximum is {MAX_ITEM_ID_LENGTH} characters",
            field="itemId",
            value=item_id[:MAX_ITEM_ID_LENGTH],
        )
    return item_id


class CartStore:
    """Cart primitives keyed by SeatId."""

    def __init__(self, store: SeatStateStore):
        self._store = store

    def add(self, seat_id: str, item_id: str) -> Dict[str, int]:
        """Increment the item's quantity by one (creating the line at 1)."""
        item_id = require_item_id(item_id)
        with self._store.locked(seat_id) as state:
            state.cart[item_id] = state.cart.get(item_id, 0) + 1
            logger.debug(f"{seat_id}: +1 {item_id} -> {state.cart[item_id]}")
            return dict(state.cart)

    def decrement(self, seat_id: str, item_id: str) -> Dict[str, int]:
        """Decrease the item's quantity by one; the line is removed at 1."""
        item_id = require_item_id(item_id)
        with self._store.locked(seat_id) as state:
            current = state.cart.get(item_id, 0)
            if current <= 1:
                state.cart.pop(item_id, None)
            else:
                state.cart[item_id] = current - 1
            return dict(state.cart)

    def remove(self, seat_id: str, item_id: str) -> Dict[str, int]:
        """Delete the line unconditionally."""
        item_id = require_item_id(item_id)
        with self._store.locked(seat_id) as state:
            state.cart.pop(item_id, None)
            return dict(state.cart)

    def set_quantity(self, seat_id: str, item_id: str, quantity: int) -> Dict[str, int]:
        """Set the quantity; anything <= 0 behaves as remove."""
        item_id = require_item_id(item_id)
        with self._store.locked(seat_id) as state:
            if quantity <= 0:
                state.cart.pop(item_id, None)
            else:
                state.cart[item_id] = int(quantity)
            return dict(state.cart)

    def clear(self, seat_id: str) -> Dict[str, int]:
        """Empty this seat's cart only."""
        with self._store.locked(seat_id) as state:
            state.cart.clear()
            return {}

    def snapshot(self, seat_id: str) -> Dict[str, int]:
        with self._store.locked(seat_id) as state:
            return dict(state.cart)

    def lines(self, seat_id: str) -> List[CartLine]:
        with self._store.locked(seat_id) as state:
            return [CartLine(item_id, quantity) for item_id, quantity in state.cart.items()]

    def total_items(self, seat_id: str) -> int:
        with self._store.locked(seat_id) as state:
            return sum(state.cart.values())

    def total_price(self, seat_id: str, price_lookup: PriceLookup) -> int:
        """
        Sum of quantity x unit price.

        Args:
            seat_id: Canonical seat id
            price_lookup: item id -> unit price, or None when unknown

        Returns:
            Total in yen; unknown items contribute 0
        """
        total = 0
        for item_id, quantity in self.snapshot(seat_id).items():
            total += quantity * (price_lookup(item_id) or 0)
        return total

"""
Per-seat order ledger.

The ledger is an append-only list of confirmed line items per seat.
Records are removed only by explicit deletion or "clear history".

Confirmation is atomic per seat:
    1. Take the seat lock (the same lock every cart mutation takes)
    2. Snapshot the cart; fail with EmptyCartError if it has no lines
    3. Build every OrderRecord first, one shared timestamp for the batch
    4. Append all records and clear the cart

Nothing is written until step 4, so a failure while resolving items
leaves both cart and ledger exactly as they were. A concurrent add on the
same seat either lands before the snapshot (and is confirmed) or after the
clear (and stays in the cart).
"""

from __future__ import annotations

from typing import Callable, List, Optional

from core.clock import now_millis
from core.exceptions import EmptyCartError, NotFoundError
from models.menu import MenuItem
from models.order_record import OrderFilter, OrderRecord
from services.seat_store import SeatState, SeatStateStore
from logging_config import get_logger, get_seat_logger


# Module logger
logger = get_logger(__name__)

ItemLookup = Callable[[str], MenuItem]


class OrderLedger:
    """
    Confirmed orders keyed by SeatId.

    Attributes:
        clock: Callable returning epoch milliseconds, used for confirmedAt
    """

    def __init__(self, store: SeatStateStore, clock: Callable[[], int] = now_millis):
        self._store = store
        self.clock = clock

    def confirm(self, seat_id: str, lookup: ItemLookup) -> List[OrderRecord]:
        """
        Turn the seat's cart into order records and clear the cart.

        Args:
            seat_id: Canonical seat id
            lookup: item id -> MenuItem (the unknown sentinel for misses)

        Returns:
            The newly appended records, in cart order

        Raises:
            EmptyCartError: If the cart has no lines (nothing changes)
        """
        with self._store.locked(seat_id) as state:
            cart = dict(state.cart)
            if not cart:
                raise EmptyCartError(seat_id)

            confirmed_at = self.clock()
            first_record_id = state.next_record_id

            records = []
            for offset, (item_id, quantity) in enumerate(cart.items()):
                item = lookup(item_id)
                records.append(OrderRecord(
                    record_id=first_record_id + offset,
                    item_id=item_id,
                    name=item.name,
                    unit_price=item.price,
                    quantity=quantity,
                    confirmed_at=confirmed_at,
                ))

            # Commit: nothing above touched the seat state
            state.ledger.extend(records)
            state.next_record_id = first_record_id + len(records)
            state.cart.clear()

        get_seat_logger(seat_id).info(
            f"Order confirmed: {len(records)} lines, {sum(r.quantity for r in records)} items"
        )
        return records

    def get(self, seat_id: str, record_id: int) -> OrderRecord:
        """
        Raises:
            NotFoundError: If the seat has no record with this id
        """
        with self._store.locked(seat_id) as state:
            return state.ledger[self._index_of(state, record_id)]

    def toggle_delivered(self, seat_id: str, record_id: int) -> OrderRecord:
        """
        Flip the delivered flag of one record.

        Raises:
            NotFoundError: If the seat has no record with this id
        """
        with self._store.locked(seat_id) as state:
            index = self._index_of(state, record_id)
            record = state.ledger[index]
            updated = record.with_delivered(not record.delivered)
            state.ledger[index] = updated

        logger.debug(f"{seat_id}: record {record_id} delivered={updated.delivered}")
        return updated

    def set_delivered(self, seat_id: str, record_id: int, delivered: bool) -> OrderRecord:
        """
        Set the delivered flag; repeating the call changes nothing.

        Raises:
            NotFoundError: If the seat has no record with this id
        """
        with self._store.locked(seat_id) as state:
            index = self._index_of(state, record_id)
            record = state.ledger[index]
            if record.delivered != delivered:
                record = record.with_delivered(delivered)
                state.ledger[index] = record
            return record

    def remove(self, seat_id: str, record_id: int) -> bool:
        """Delete one record. Returns False (no-op) when it does not exist."""
        with self._store.locked(seat_id) as state:
            try:
                index = self._index_of(state, record_id)
            except NotFoundError:
                return False
            removed = state.ledger.pop(index)

        get_seat_logger(seat_id).info(f"Order record {record_id} ({removed.item_id}) removed")
        return True

    def clear_all(self, seat_id: str) -> int:
        """
        Empty the seat's ledger.

        Returns:
            Number of records removed
        """
        with self._store.locked(seat_id) as state:
            count = len(state.ledger)
            state.ledger.clear()

        get_seat_logger(seat_id).info(f"Order history cleared ({count} records)")
        return count

    def list(self, seat_id: str, order_filter: Optional[OrderFilter] = None) -> List[OrderRecord]:
        """
        Records matching the filter, most recently confirmed first.
        """
        order_filter = order_filter or OrderFilter.ALL
        with self._store.locked(seat_id) as state:
            records = list(state.ledger)
        return [r for r in reversed(records) if order_filter.matches(r)]

    @staticmethod
    def _index_of(state: SeatState, record_id: int) -> int:
        for index, record in enumerate(state.ledger):
            if record.record_id == record_id:
                return index
        raise NotFoundError(
            "Order record not found",
            seat_id=state.seat_id,
            record_id=record_id,
        )

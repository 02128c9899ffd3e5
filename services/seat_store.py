"""
Authoritative per-seat state store.

This is the ONE source of truth for carts, order ledgers and staff-call
state. The browser may cache what it last saw, but that copy is disposable
and is repopulated from this store on reload; it is never used to decide
a confirmation or a delivery flag.

Isolation:
    - State is partitioned by canonical SeatId ("C-05")
    - Each seat has its own re-entrant lock
    - Operations on seat A never touch seat B's state

Thread Safety:
    - Store-level lock only guards creation of new SeatState entries
    - All reads and writes of a seat's data happen inside locked(seat_id)
    - The lock is re-entrant so a confirm can call cart primitives while
      already holding it

Usage:
    store = SeatStateStore()

    with store.locked("C-05") as state:
        state.cart["m01"] = 2
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from core.exceptions import ValidationError
from core.seat_identity import is_canonical_seat_id
from models.order_record import OrderRecord
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


@dataclass
class SeatState:
    """
    Mutable state of one seat.

    Only touched while holding ``lock`` (via SeatStateStore.locked).
    """

    seat_id: str
    """Canonical seat id this state belongs to."""

    cart: Dict[str, int] = field(default_factory=dict)
    """Item id -> quantity (always >= 1)."""

    ledger: List[OrderRecord] = field(default_factory=list)
    """Confirmed records, oldest first."""

    last_call_at: Optional[int] = None
    """Epoch ms of the last accepted staff call."""

    next_record_id: int = 1
    """Next OrderRecord.record_id to hand out."""

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


class SeatStateStore:
    """
    Thread-safe container of SeatState objects keyed by SeatId.

    A seat's state is created empty the first time the seat is used.
    """

    def __init__(self):
        """Initialize empty store."""
        self._seats: Dict[str, SeatState] = {}
        self._lock = threading.Lock()

    def _state(self, seat_id: str) -> SeatState:
        if not is_canonical_seat_id(seat_id):
            raise ValidationError("Invalid seat id", field="seatId", value=seat_id)

        with self._lock:
            state = self._seats.get(seat_id)
            if state is None:
                state = SeatState(seat_id=seat_id)
                self._seats[seat_id] = state
                logger.debug(f"Created state for seat {seat_id}")
            return state

    @contextmanager
    def locked(self, seat_id: str) -> Iterator[SeatState]:
        """
        Hold the seat's lock and yield its state.

        Args:
            seat_id: Canonical seat id

        Raises:
            ValidationError: If seat_id is not in canonical form
        """
        state = self._state(seat_id)
        with state.lock:
            yield state

    def seat_ids(self) -> List[str]:
        """Seats that have state, sorted."""
        with self._lock:
            return sorted(self._seats)

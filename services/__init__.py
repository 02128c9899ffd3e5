"""
Services layer for the table order terminal.

This module contains the seat-scoped order lifecycle:
- SeatStateStore: Authoritative per-seat state with per-seat locks
- CartStore: Cart mutation primitives and totals
- OrderLedger: Atomic cart -> order confirmation, delivery flags
- DeliveryAggregator: Delivered/pending totals
- LastOrderClock: Last-order countdown
- CallThrottle: Staff-call cooldown
- OrderingService: Facade returning Outcomes for every operation

Concurrency Model:
    Flask request threads
    └── SeatStateStore.locked(seat_id)  (one RLock per seat)
        ├── CartStore mutations
        ├── OrderLedger.confirm / toggle / remove / clear
        └── CallThrottle.try_call

Seats never share a lock, so one busy table does not block another.
"""

from .seat_store import SeatStateStore, SeatState
from .cart_store import CartStore
from .order_ledger import OrderLedger
from .delivery import DeliveryAggregator
from .last_order_clock import LastOrderClock
from .call_throttle import CallThrottle
from .ordering_service import OrderingService

__all__ = [
    "SeatStateStore",
    "SeatState",
    "CartStore",
    "OrderLedger",
    "DeliveryAggregator",
    "LastOrderClock",
    "CallThrottle",
    "OrderingService",
]

"""
Data models for the table order terminal.

This module contains dataclasses for:
- MenuItem: Read-only catalog item (plus the unknown-item sentinel)
- CartLine / PricedCartLine / CartSummary: Cart views
- OrderRecord / OrderFilter / DeliveryStatus: Order ledger
- LastOrderStatus / CallDecision: Time-driven status
- Outcome: Discriminated success/failure result

Read views are frozen so they can be handed across request threads.
"""

from .outcome import Outcome
from .menu import MenuItem
from .order_record import OrderRecord, OrderFilter, DeliveryStatus
from .cart import CartLine, PricedCartLine, CartSummary
from .status import LastOrderStatus, CallDecision

__all__ = [
    "Outcome",
    "MenuItem",
    # Order models
    "OrderRecord",
    "OrderFilter",
    "DeliveryStatus",
    # Cart models
    "CartLine",
    "PricedCartLine",
    "CartSummary",
    # Status models
    "LastOrderStatus",
    "CallDecision",
]

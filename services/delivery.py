"""Delivery status aggregation over a seat's order ledger."""

from __future__ import annotations

from typing import Iterable

from models.order_record import DeliveryStatus, OrderFilter, OrderRecord
from services.order_ledger import OrderLedger


class DeliveryAggregator:
    """
    Folds a ledger into delivered/pending quantities.

    Stateless: every call re-reads the ledger, so the totals can never
    drift from what the ledger actually holds.
    """

    def __init__(self, ledger: OrderLedger):
        self._ledger = ledger

    def summarize(self, seat_id: str) -> DeliveryStatus:
        return self.fold(self._ledger.list(seat_id, OrderFilter.ALL))

    @staticmethod
    def fold(records: Iterable[OrderRecord]) -> DeliveryStatus:
        delivered = 0
        pending = 0
        for record in records:
            if record.delivered:
                delivered += record.quantity
            else:
                pending += record.quantity
        return DeliveryStatus(delivered_quantity=delivered, pending_quantity=pending)

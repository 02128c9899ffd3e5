"""
Ordering service: every logical operation of the terminal in one place.

This is what routes talk to. Each method validates its inputs, runs the
operation against the seat-scoped components, and returns an Outcome.
Expected failures (bad seat, empty cart, missing record, cooldown) come
back as failed Outcomes carrying the TableOrderError; they are never
raised to the request.

Components:
    SeatStateStore     - authoritative per-seat state
    CartStore          - cart primitives
    OrderLedger        - confirmed records + delivery flags
    DeliveryAggregator - delivered/pending totals
    LastOrderClock     - LO countdown
    CallThrottle       - staff-call cooldown
    MenuCatalog        - external menu (resolved through lookup())

Usage:
    service = OrderingService.from_config(app.config)

    outcome = service.add_to_cart("C-05", "m03")
    if outcome.success:
        cart = outcome.value
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from core.clock import now_local, now_millis
from core.exceptions import (
    LastOrderReachedError,
    TableOrderError,
    ThrottledError,
    ValidationError,
)
from core.seat_identity import normalize_seat_id
from models.cart import CartSummary, PricedCartLine
from models.menu import MenuItem
from models.order_record import OrderFilter, OrderRecord
from models.outcome import Outcome
from models.status import CallDecision, LastOrderStatus
from modules.menu_catalog import (
    MenuCatalog,
    categories,
    create_catalog,
    filter_items,
    sort_items,
)
from services.call_throttle import CallThrottle
from services.cart_store import CartStore, require_item_id
from services.delivery import DeliveryAggregator
from services.last_order_clock import LastOrderClock
from services.order_ledger import OrderLedger
from services.seat_store import SeatStateStore
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

MAX_QUANTITY = 99


def _parse_quantity(value: Any) -> int:
    """Whole-number quantity from a form string or JSON number; 2.5, true and inf are rejected."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError("Quantity must be a whole number", field="quantity", value=value)
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Quantity must be a whole number", field="quantity", value=value) from None
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity too large. Maximum is {MAX_QUANTITY}", field="quantity", value=value)
    return quantity


def _parse_record_id(value: Any) -> int:
    if isinstance(value, (bool, float)):
        raise ValidationError("Record id must be a whole number", field="recordId", value=value)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Record id must be a whole number", field="recordId", value=value) from None


def _require_seat(seat_id: Optional[str]) -> str:
    normalized = normalize_seat_id(seat_id)
    if normalized is None:
        raise ValidationError("Invalid seat id", field="seatId", value=seat_id)
    return normalized


class OrderingService:
    """
    Facade over the seat-scoped order lifecycle.

    Holds no module-level state: one instance per application, created in
    create_app() and stored in app.config["ORDERING_SERVICE"].
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        clock: LastOrderClock,
        call_cooldown_ms: int = 30000,
        last_order_enforced: bool = False,
        store: Optional[SeatStateStore] = None,
        millis: Callable[[], int] = now_millis,
    ):
        self.catalog = catalog
        self.clock = clock
        self.last_order_enforced = last_order_enforced
        self.store = store or SeatStateStore()
        self.carts = CartStore(self.store)
        self.ledger = OrderLedger(self.store, clock=millis)
        self.delivery = DeliveryAggregator(self.ledger)
        self.throttle = CallThrottle(self.store, cooldown_ms=call_cooldown_ms)

        logger.info(
            f"OrderingService initialized (LO offset {clock.lo_offset_minutes} min, "
            f"call cooldown {call_cooldown_ms} ms, LO enforced={last_order_enforced})"
        )

    @classmethod
    def from_config(cls, config, catalog: Optional[MenuCatalog] = None) -> "OrderingService":
        """Build the service from a Flask config mapping."""
        return cls(
            catalog=catalog or create_catalog(config),
            clock=LastOrderClock.from_config(config),
            call_cooldown_ms=int(config.get("CALL_COOLDOWN_MS", 30000)),
            last_order_enforced=bool(config.get("LAST_ORDER_ENFORCED", False)),
        )

    def _run(self, operation: str, func: Callable[[], Outcome]) -> Outcome:
        try:
            return func()
        except TableOrderError as e:
            logger.info(f"{operation} rejected: {e}")
            return Outcome.failed(e)

    # =========================================================================
    # SEAT
    # =========================================================================

    def set_seat(self, raw: Optional[str]) -> Outcome[str]:
        """Normalize raw seat input; the caller stores the result in its session."""
        def op():
            seat_id = _require_seat(raw)
            # Touch the store so the seat's empty cart exists from now on
            self.carts.snapshot(seat_id)
            return Outcome.ok(seat_id, message=f"Seat set to {seat_id}")
        return self._run("setSeat", op)

    # =========================================================================
    # CART
    # =========================================================================

    def add_to_cart(self, seat_id: str, item_id: str) -> Outcome[Dict[str, int]]:
        def op():
            seat = _require_seat(seat_id)
            item = self.catalog.lookup(require_item_id(item_id))
            if item.known and item.sold_out:
                raise ValidationError(f"{item.name} is sold out", field="itemId", value=item_id)
            return Outcome.ok(self.carts.add(seat, item.id))
        return self._run("addToCart", op)

    def decrement_cart_item(self, seat_id: str, item_id: str) -> Outcome[Dict[str, int]]:
        return self._run(
            "decrementCartItem",
            lambda: Outcome.ok(self.carts.decrement(_require_seat(seat_id), item_id)),
        )

    def remove_from_cart(self, seat_id: str, item_id: str) -> Outcome[Dict[str, int]]:
        return self._run(
            "removeFromCart",
            lambda: Outcome.ok(self.carts.remove(_require_seat(seat_id), item_id)),
        )

    def update_quantity(self, seat_id: str, item_id: str, quantity: Any) -> Outcome[Dict[str, int]]:
        def op():
            seat = _require_seat(seat_id)
            return Outcome.ok(self.carts.set_quantity(seat, item_id, _parse_quantity(quantity)))
        return self._run("updateQuantity", op)

    def get_cart_snapshot(self, seat_id: str) -> Outcome[CartSummary]:
        """Cart, priced lines, totals and delivery status in one read."""
        def op():
            seat = _require_seat(seat_id)
            items = self._resolver()

            # One seat lock across all reads so lines and totals agree
            with self.store.locked(seat):
                cart = self.carts.snapshot(seat)
                lines = []
                for item_id, quantity in cart.items():
                    item = items(item_id)
                    lines.append(PricedCartLine(
                        item_id=item_id,
                        name=item.name,
                        unit_price=item.price,
                        quantity=quantity,
                        known=item.known,
                    ))

                summary = CartSummary(
                    seat_id=seat,
                    cart=cart,
                    lines=lines,
                    total_price=self.carts.total_price(seat, lambda i: items(i).price),
                    total_items=self.carts.total_items(seat),
                    delivery=self.delivery.summarize(seat),
                )
            return Outcome.ok(summary)
        return self._run("getCartSnapshot", op)

    # =========================================================================
    # ORDERS
    # =========================================================================

    def confirm_order(self, seat_id: str, now: Optional[datetime] = None) -> Outcome[List[OrderRecord]]:
        """Confirm the whole cart as one order; EmptyCartError when there is nothing to confirm."""
        def op():
            seat = _require_seat(seat_id)
            if self.last_order_enforced:
                current = now or now_local()
                if self.clock.is_last_order_reached(current):
                    raise LastOrderReachedError(
                        self.clock.last_order_time(current).isoformat(timespec="minutes")
                    )
            records = self.ledger.confirm(seat, self._resolver())
            return Outcome.ok(records, message="Order confirmed")
        return self._run("confirmOrder", op)

    def list_orders(self, seat_id: str, order_filter: Any = None) -> Outcome[List[OrderRecord]]:
        def op():
            seat = _require_seat(seat_id)
            return Outcome.ok(self.ledger.list(seat, OrderFilter.from_value(order_filter)))
        return self._run("listOrders", op)

    def get_order(self, seat_id: str, record_id: Any) -> Outcome[OrderRecord]:
        return self._run(
            "getOrder",
            lambda: Outcome.ok(self.ledger.get(_require_seat(seat_id), _parse_record_id(record_id))),
        )

    def toggle_delivered(self, seat_id: str, record_id: Any) -> Outcome[OrderRecord]:
        def op():
            record = self.ledger.toggle_delivered(_require_seat(seat_id), _parse_record_id(record_id))
            message = "Marked as delivered" if record.delivered else "Marked as not delivered"
            return Outcome.ok(record, message=message)
        return self._run("toggleDelivered", op)

    def set_delivered(self, seat_id: str, record_id: Any, delivered: bool) -> Outcome[OrderRecord]:
        def op():
            record = self.ledger.set_delivered(
                _require_seat(seat_id), _parse_record_id(record_id), bool(delivered)
            )
            return Outcome.ok(record)
        return self._run("setDelivered", op)

    def remove_order_record(self, seat_id: str, record_id: Any) -> Outcome[bool]:
        """Success carries True when a record was deleted, False when it was already gone."""
        def op():
            removed = self.ledger.remove(_require_seat(seat_id), _parse_record_id(record_id))
            return Outcome.ok(removed, message="Order removed" if removed else "Order not found")
        return self._run("removeOrderRecord", op)

    def clear_order_history(self, seat_id: str) -> Outcome[int]:
        def op():
            count = self.ledger.clear_all(_require_seat(seat_id))
            return Outcome.ok(count, message="Order history cleared")
        return self._run("clearOrderHistory", op)

    # =========================================================================
    # TIME-DRIVEN
    # =========================================================================

    def get_last_order_status(self, now: Optional[datetime] = None) -> Outcome[LastOrderStatus]:
        return Outcome.ok(self.clock.status(now or now_local()))

    def request_staff_call(self, seat_id: str, now_ms: Optional[int] = None) -> Outcome[CallDecision]:
        def op():
            seat = _require_seat(seat_id)
            decision = self.throttle.try_call(seat, now_ms if now_ms is not None else now_millis())
            if not decision.allowed:
                raise ThrottledError(seat, decision.remaining_seconds)
            return Outcome.ok(decision, message=f"Staff has been called (seat: {seat})")
        return self._run("requestStaffCall", op)

    # =========================================================================
    # MENU
    # =========================================================================

    def list_menu(self, keyword: str = "", category: str = "", sort_order: str = "recommend") -> Outcome[Dict[str, Any]]:
        """Filtered, sorted menu plus the category list; a catalog failure is returned as-is."""
        def op():
            for field, value in (("search", keyword), ("category", category), ("sort", sort_order)):
                if value is not None and not isinstance(value, str):
                    raise ValidationError(f"{field} must be a string", field=field, value=value)

            fetched = self.catalog.fetch_items()
            if not fetched.success:
                return fetched

            items = fetched.value
            listed = sort_items(filter_items(items, keyword, category), sort_order)
            return Outcome.ok({
                "items": listed,
                "categories": categories(items),
            })
        return self._run("listMenu", op)

    def _resolver(self) -> Callable[[str], MenuItem]:
        """
        Item lookup backed by a single catalog fetch.

        Used for whole-cart operations so one confirmation or snapshot
        reads the catalog once; a failed fetch resolves everything to the
        unknown sentinel.
        """
        fetched = self.catalog.fetch_items()
        by_id = {item.id: item for item in fetched.value} if fetched.success else {}

        def resolve(item_id: str) -> MenuItem:
            return by_id.get(item_id) or MenuItem.unknown(item_id)

        return resolve

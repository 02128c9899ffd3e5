"""
Cart routes.

Handles:
- GET  /api/cart            - Cart, totals and delivery status
- POST /api/cart/add        - +1 of an item
- POST /api/cart/decrement  - -1 of an item (removes at 1)
- POST /api/cart/remove     - Drop an item
- POST /api/cart/update     - Set an item's quantity (<= 0 removes)
- POST /api/orders/confirm  - Turn the cart into an order

All cart mutations answer with the resulting cart so the client can
re-render without a second request.
"""

from flask import Blueprint

from core.exceptions import ValidationError
from routes.helpers import (
    error_response,
    get_ordering_service,
    outcome_response,
    request_value,
    require_seat_id,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

cart_bp = Blueprint("cart", __name__)


@cart_bp.route("/api/cart", methods=["GET"])
def get_cart():
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().get_cart_snapshot(seat_id)
    if not outcome.success:
        return outcome_response(outcome)
    return outcome_response(outcome, **outcome.value.to_dict())


@cart_bp.route("/api/cart/<action>", methods=["POST"])
def mutate_cart(action: str):
    """
    Apply one cart mutation.

    Form/JSON fields: itemId, and quantity for "update".
    """
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    service = get_ordering_service()
    item_id = request_value("itemId", "")

    if action == "add":
        outcome = service.add_to_cart(seat_id, item_id)
    elif action == "decrement":
        outcome = service.decrement_cart_item(seat_id, item_id)
    elif action == "remove":
        outcome = service.remove_from_cart(seat_id, item_id)
    elif action == "update":
        outcome = service.update_quantity(seat_id, item_id, request_value("quantity", 0))
    else:
        return {"success": False, "error": f"Unknown cart action: {action}"}, 404

    return outcome_response(outcome, cart=outcome.value)


@cart_bp.route("/api/orders/confirm", methods=["POST"])
def confirm_order():
    """
    Confirm the seat's cart.

    Returns 400 with errorType "EmptyCartError" when the cart is empty.
    """
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().confirm_order(seat_id)
    if not outcome.success:
        return outcome_response(outcome)

    records = outcome.value
    logger.info(f"Seat {seat_id} confirmed {len(records)} lines")
    return outcome_response(
        outcome,
        orders=[record.to_dict() for record in records],
    )

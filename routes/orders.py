"""
Order history routes.

Handles:
- GET    /api/orders?filter=all|pending|delivered  - History, newest first
- GET    /api/orders/<record_id>                   - One record
- POST   /api/orders/<record_id>/toggle            - Flip delivered
- POST   /api/orders/<record_id>/delivered         - Set delivered (idempotent)
- DELETE /api/orders/<record_id>                   - Remove one record
- POST   /api/orders/clear                         - Clear history
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

orders_bp = Blueprint("orders", __name__)


def _parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@orders_bp.route("/api/orders", methods=["GET"])
def list_orders():
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    service = get_ordering_service()
    outcome = service.list_orders(seat_id, request_value("filter", "all"))
    if not outcome.success:
        return outcome_response(outcome)

    return outcome_response(
        outcome,
        seatId=seat_id,
        orders=[record.to_dict() for record in outcome.value],
        deliveryStatus=service.delivery.summarize(seat_id).to_dict(),
    )


@orders_bp.route("/api/orders/<record_id>", methods=["GET"])
def get_order(record_id: str):
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().get_order(seat_id, record_id)
    if not outcome.success:
        return outcome_response(outcome)
    return outcome_response(outcome, order=outcome.value.to_dict())


@orders_bp.route("/api/orders/<record_id>/toggle", methods=["POST"])
def toggle_delivered(record_id: str):
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().toggle_delivered(seat_id, record_id)
    if not outcome.success:
        return outcome_response(outcome)
    return outcome_response(outcome, order=outcome.value.to_dict())


@orders_bp.route("/api/orders/<record_id>/delivered", methods=["POST"])
def set_delivered(record_id: str):
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    delivered = _parse_flag(request_value("delivered", True))
    outcome = get_ordering_service().set_delivered(seat_id, record_id, delivered)
    if not outcome.success:
        return outcome_response(outcome)
    return outcome_response(outcome, order=outcome.value.to_dict())


@orders_bp.route("/api/orders/<record_id>", methods=["DELETE"])
def remove_order(record_id: str):
    """Remove one record; success is false (but 200) when it was already gone."""
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().remove_order_record(seat_id, record_id)
    body, status = outcome_response(outcome)
    if outcome.success:
        body["success"] = outcome.value
        body["removed"] = outcome.value
    return body, status


@orders_bp.route("/api/orders/clear", methods=["POST"])
def clear_history():
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().clear_order_history(seat_id)
    return outcome_response(outcome, removed=outcome.value)

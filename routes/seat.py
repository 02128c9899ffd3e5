"""
Seat and staff-call routes.

Handles:
- GET  /api/seat  - Seat bound to this terminal
- POST /api/seat  - Select a seat (normalized, e.g. "c5" -> "C-05")
- GET  /api/seats - Seat picker options for the whole floor
- POST /api/call  - Call staff to the seat (30s cooldown per seat)
"""

from flask import Blueprint, session

from core.clock import now_millis
from core.exceptions import ThrottledError, ValidationError
from core.seat_identity import generate_seat_options
from routes.helpers import (
    SESSION_SEAT_KEY,
    current_seat_id,
    error_response,
    get_ordering_service,
    outcome_response,
    request_value,
    require_seat_id,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

seat_bp = Blueprint("seat", __name__)


@seat_bp.route("/api/seat", methods=["GET"])
def get_seat():
    return {"success": True, "seatId": current_seat_id()}


@seat_bp.route("/api/seat", methods=["POST"])
def set_seat():
    """
    Bind this terminal's session to a seat.

    Only the seat id lives in the session cookie; cart and orders stay in
    the server-side store under that seat.
    """
    outcome = get_ordering_service().set_seat(request_value("seatId"))
    if outcome.success:
        session[SESSION_SEAT_KEY] = outcome.value
        session.modified = True
        logger.info(f"Session bound to seat {outcome.value}")
    return outcome_response(outcome, seatId=outcome.value)


@seat_bp.route("/api/seats", methods=["GET"])
def seat_options():
    return {"success": True, "seats": generate_seat_options()}


@seat_bp.route("/api/call", methods=["POST"])
def call_staff():
    """
    Request a staff call.

    Returns 429 with remainingSeconds inside the cooldown window.
    """
    try:
        seat_id = require_seat_id()
    except ValidationError as e:
        return error_response(e)

    outcome = get_ordering_service().request_staff_call(seat_id, now_millis())
    if outcome.success:
        return outcome_response(outcome, seatId=seat_id)

    body, status = outcome_response(outcome)
    if isinstance(outcome.error, ThrottledError):
        body["remainingSeconds"] = outcome.error.remaining_seconds
    return body, status

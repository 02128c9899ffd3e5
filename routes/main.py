"""
Main routes (status, health).

Handles:
- GET /               - Store name, seat, clock and LO countdown for the top screen
- GET /api/last-order - LO countdown only (polled by the banner)
- GET /health         - Health check endpoint
"""

from flask import Blueprint, current_app

from core.clock import now_local
from routes.helpers import current_seat_id, get_ordering_service, outcome_response

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Top screen state. The clock is advisory and never touches seat state."""
    now = now_local()
    outcome = get_ordering_service().get_last_order_status(now)
    return outcome_response(
        outcome,
        storeName=current_app.config.get("STORE_NAME", ""),
        seatId=current_seat_id(),
        currentTime=now.strftime("%H:%M:%S"),
        lastOrder=outcome.value.to_dict(),
    )


@main_bp.route("/api/last-order", methods=["GET"])
def last_order():
    outcome = get_ordering_service().get_last_order_status(now_local())
    return outcome_response(outcome, **outcome.value.to_dict())


@main_bp.route("/health", methods=["GET"])
def health():
    """
    Health check endpoint.

    Reports "degraded" (503) when the menu catalog cannot be read; carts
    and orders still work in that state.
    """
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    service = current_app.config.get("ORDERING_SERVICE")
    if service is None:
        health_status["checks"]["ordering_service"] = "not_available"
        health_status["status"] = "degraded"
    else:
        health_status["checks"]["ordering_service"] = "ok"
        health_status["checks"]["active_seats"] = len(service.store.seat_ids())
        if service.catalog.fetch_items().success:
            health_status["checks"]["menu_catalog"] = "ok"
        else:
            health_status["checks"]["menu_catalog"] = "unavailable"
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code

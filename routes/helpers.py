"""
Shared helpers for route handlers.

- Reading form / JSON request values with sanitizing
- Resolving the seat bound to this terminal's session
- Turning Outcomes into JSON responses
"""

import html
from typing import Any, Dict, Optional

import bleach
from flask import current_app, request, session

from core.exceptions import ValidationError
from core.seat_identity import normalize_seat_id
from models.outcome import Outcome

SESSION_SEAT_KEY = "seat_id"


def get_ordering_service():
    """The OrderingService created in create_app()."""
    return current_app.config["ORDERING_SERVICE"]


def request_value(name: str, default: Any = None) -> Any:
    """
    Read a value from the JSON body, form data or query string (in that order).

    Strings are trimmed and stripped of markup. Entities bleach escapes are
    turned back into text, so "a&b" stays "a&b". Length limits belong to the
    operation that uses the value.
    """
    payload = request.get_json(silent=True)
    if isinstance(payload, dict) and name in payload:
        value = payload[name]
    elif name in request.form:
        value = request.form.get(name)
    else:
        value = request.args.get(name, default)

    if isinstance(value, str):
        value = html.unescape(bleach.clean(value.strip(), tags=[], strip=True))
    return value


def current_seat_id() -> Optional[str]:
    """Seat stored in the session, falling back to DEFAULT_SEAT_ID."""
    seat_id = normalize_seat_id(session.get(SESSION_SEAT_KEY))
    if seat_id:
        return seat_id
    return normalize_seat_id(current_app.config.get("DEFAULT_SEAT_ID"))


def require_seat_id() -> str:
    """
    Raises:
        ValidationError: If neither the session nor the config names a seat
    """
    seat_id = current_seat_id()
    if not seat_id:
        raise ValidationError("No seat selected", field="seatId", value=None)
    return seat_id


def outcome_response(outcome: Outcome, **payload: Any):
    """
    JSON response for an Outcome.

    Success: {"success": true, "message": ..., **payload}, 200
    Failure: {"success": false, "error": ..., "errorType": ...}, error.status_code
    """
    body: Dict[str, Any] = outcome.to_dict()
    if outcome.success:
        body.update(payload)
    return body, outcome.status_code


def error_response(error: ValidationError):
    """JSON response for an error raised before reaching the service."""
    return outcome_response(Outcome.failed(error))

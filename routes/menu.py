"""
Menu route.

GET /api/menu?search=&category=&sort=recommend|category|quick

Returns 503 when the catalog cannot be read. Cart and order endpoints keep
working in that state, pricing unresolved items at 0.
"""

from flask import Blueprint

from routes.helpers import get_ordering_service, outcome_response, request_value

menu_bp = Blueprint("menu", __name__)


@menu_bp.route("/api/menu", methods=["GET"])
def list_menu():
    outcome = get_ordering_service().list_menu(
        keyword=request_value("search", ""),
        category=request_value("category", ""),
        sort_order=request_value("sort", "recommend"),
    )
    if not outcome.success:
        return outcome_response(outcome)

    return outcome_response(
        outcome,
        items=[item.to_dict() for item in outcome.value["items"]],
        categories=outcome.value["categories"],
    )

"""
Flask route blueprints for the table order terminal.

Route handlers organized by functionality:
- main: Top screen state, LO countdown, health
- seat: Seat selection and staff call
- menu: Menu listing
- cart: Cart mutations and order confirmation
- orders: Order history and delivery flags

All endpoints speak JSON. Each blueprint is registered in create_app().
"""

from .main import main_bp
from .seat import seat_bp
from .menu import menu_bp
from .cart import cart_bp
from .orders import orders_bp

__all__ = [
    "main_bp",
    "seat_bp",
    "menu_bp",
    "cart_bp",
    "orders_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(seat_bp)
    app.register_blueprint(menu_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)

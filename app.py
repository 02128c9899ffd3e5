"""
Table order terminal - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config classes)
2. Sets up logging
3. Creates the menu catalog and the OrderingService
4. Registers route blueprints
5. Sets up JSON error handlers

ARCHITECTURE:
    Flask request threads
    ├── Session cookie: which seat this terminal is bound to (nothing else)
    └── OrderingService (one per app)
        ├── SeatStateStore  - authoritative carts / ledgers / call state
        ├── MenuCatalog     - external menu, failures degrade to price 0
        ├── LastOrderClock  - LO countdown, recomputed on demand
        └── CallThrottle    - staff-call cooldown

No background threads. Every operation is a synchronous request/response.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from modules.menu_catalog import MenuCatalog
from services.ordering_service import OrderingService
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: the directory containing the executable
    In development: the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(
    config_object: str = "config.Config",
    catalog: Optional[MenuCatalog] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the config class
        catalog: Menu catalog to use instead of the configured one (tests)

    Returns:
        Configured Flask application

    Raises:
        ValueError: If store hours or cooldown settings are out of range
    """
    # .env next to the executable wins over the shell environment
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.ensure_ascii = False

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        log_dir=Path(app.config["LOG_DIR"]),
        enable_file_logging=enable_file_logging
    )

    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting table order terminal in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    try:
        ordering_service = OrderingService.from_config(app.config, catalog=catalog)
    except ValueError as e:
        logger.error(f"FATAL: Invalid store configuration - {e}")
        raise

    app.config["ORDERING_SERVICE"] = ordering_service

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return {"success": False, "error": e.description, "errorType": e.name}, e.code

    @app.errorhandler(Exception)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return {"success": False, "error": "An unexpected error occurred. Please try again."}, 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)

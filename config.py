"""
Configuration for the table order terminal.

All values can be overridden from the environment (or a .env file next to
the application). The server-side seat store is the only source of truth
for carts, order history and staff-call state; the session cookie only
remembers which seat this terminal belongs to.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


def _env_bool(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "table_order_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Store hours / last order
    # ==========================================================================
    # STORE_CLOSE_HOUR accepts 0-24. 24 means midnight at the end of the day,
    # so the close time rolls over to the next calendar day.
    #
    # LO_OFFSET_MINUTES: last order is this many minutes before closing.
    #
    # LAST_ORDER_ENFORCED: when enabled, confirmations after LO are rejected.
    # Off by default - the countdown is advisory.
    # ==========================================================================
    STORE_NAME = os.environ.get("STORE_NAME", "Midori-tei Main Branch")
    STORE_CLOSE_HOUR = int(os.environ.get("STORE_CLOSE_HOUR", "24"))
    STORE_CLOSE_MINUTE = int(os.environ.get("STORE_CLOSE_MINUTE", "0"))
    LO_OFFSET_MINUTES = int(os.environ.get("LO_OFFSET_MINUTES", "30"))
    LAST_ORDER_ENFORCED = _env_bool("LAST_ORDER_ENFORCED")

    # Staff call cooldown per seat (milliseconds)
    CALL_COOLDOWN_MS = int(os.environ.get("CALL_COOLDOWN_MS", "30000"))

    # Seat used when the session has not selected one yet.
    # Set to an empty string to require an explicit seat selection.
    DEFAULT_SEAT_ID = os.environ.get("DEFAULT_SEAT_ID", "C-01")

    # ==========================================================================
    # Menu catalog
    # ==========================================================================
    # MENU_CATALOG_PATH: JSON file with a list of menu items. When empty,
    # a generated dummy menu of DUMMY_MENU_COUNT items is served instead.
    # ==========================================================================
    MENU_CATALOG_PATH = os.environ.get("MENU_CATALOG_PATH", "")
    DUMMY_MENU_COUNT = int(os.environ.get("DUMMY_MENU_COUNT", "12"))

    # Log files (production only)
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 12 * 3600  # one business day


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret-key"
    STORE_CLOSE_HOUR = 24
    STORE_CLOSE_MINUTE = 0
    LO_OFFSET_MINUTES = 30
    CALL_COOLDOWN_MS = 30000
    DEFAULT_SEAT_ID = "C-01"
    LAST_ORDER_ENFORCED = False
    MENU_CATALOG_PATH = ""
    DUMMY_MENU_COUNT = 12

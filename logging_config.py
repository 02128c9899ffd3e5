"""
Centralized logging configuration for the table order terminal.

Flask serves requests from a pool of threads, and several terminals can
hit the same seat at once, so every log line carries the thread name.
Per-seat loggers make it easy to follow one table through a shift.

Features:
    - Automatic thread name and ID in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Per-seat loggers ("table_order.seat.C-05")

Log Format:
    2025-12-03 21:15:30 [INFO    ] [MainThread] table_order.app - Starting application
    2025-12-03 21:15:31 [INFO    ] [Thread-3] table_order.seat.C-05 - Order confirmed: 3 lines
    2025-12-03 21:15:32 [WARNING ] [Thread-4] table_order.seat.A-02 - Staff call throttled (12s)

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)

    # For seat-scoped events
    seat_logger = get_seat_logger("C-05")
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "table_order"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# THREAD CONTEXT FILTER
# =============================================================================

class ThreadContextFilter(logging.Filter):
    """
    Adds ``thread_name`` and ``thread_id`` to every record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        record.thread_id = threading.get_ident()
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(ThreadContextFilter())
    logger.addHandler(handler)


def setup_logging(
    app_name: str = ROOT_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure the "table_order" logger tree.

    Console output is always on. With enable_file_logging a rotating
    "<app_name>.log" (10 MB x 5) is written to log_dir. Calling this again
    replaces the handlers, so each create_app() starts clean.

    Args:
        app_name: Name of the root logger (default: "table_order")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write a log file (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    _attach(logger, logging.StreamHandler(sys.stdout), log_level)

    if enable_file_logging:
        log_dir = log_dir or Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"{app_name}.log"
        _attach(
            logger,
            RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"),
            log_level,
        )
        logger.info(f"File logging enabled: {log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger under the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance, e.g. "table_order.services.order_ledger"
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def get_seat_logger(seat_id: str) -> logging.Logger:
    """
    Get a logger for events that belong to one seat.

    Args:
        seat_id: Canonical seat id (e.g. "C-05")

    Returns:
        Logger named "table_order.seat.<seat_id>"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.seat.{seat_id}")

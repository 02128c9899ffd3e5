"""Helper modules for the table order terminal."""

__all__ = [
    "menu_catalog",
]

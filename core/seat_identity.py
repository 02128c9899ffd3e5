"""
Seat identity: the one place raw seat input becomes a canonical SeatId.

Canonical form is one uppercase letter, a dash and two digits ("C-05").
Every store in the application is partitioned by this key.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

# Accepts "c5", "C 5", "c-05", "Z99" ... after trim + uppercase
_RAW_SEAT_PATTERN = re.compile(r"^([A-Z])[-\s]?(\d{1,2})$", re.ASCII)

SEAT_ID_PATTERN = re.compile(r"^[A-Z]-\d{2}$", re.ASCII)

# Seat layout of the floor: (prefix, count, label)
SEAT_TYPES = (
    ("C", 10, "Counter"),
    ("A", 5, "1F Table"),
    ("B", 15, "2F Table"),
)


def normalize_seat_id(raw: Optional[str]) -> Optional[str]:
    """
    Normalize raw seat input to the canonical form.

    Args:
        raw: User input such as "c5", "Z 99" or "C-05"

    Returns:
        Canonical seat id, or None when the input is empty or does not match.
        A missing seat is a normal state, not an error.
    """
    if not raw:
        return None

    candidate = str(raw).strip().upper()
    match = _RAW_SEAT_PATTERN.fullmatch(candidate)
    if not match:
        return None

    letter, number = match.groups()
    return f"{letter}-{int(number):02d}"


def validate_seat_id(candidate: Optional[str]) -> bool:
    """
    Strict check: the candidate must already be in canonical form
    (case-insensitive). "c-05" passes, "C5" and "C 05" do not.
    """
    normalized = normalize_seat_id(candidate)
    if normalized is None:
        return False
    return normalized == str(candidate).upper()


def is_canonical_seat_id(value: Optional[str]) -> bool:
    """True iff value is exactly a stored-form SeatId (no case folding)."""
    return bool(value) and SEAT_ID_PATTERN.fullmatch(value) is not None


def generate_seat_options() -> List[Dict[str, str]]:
    """
    Build the seat picker options for the whole floor.

    Returns:
        List of {"value": "C-01", "label": "Counter: C-01", "group": "Counter"}
    """
    options = []
    for prefix, count, label in SEAT_TYPES:
        for number in range(1, count + 1):
            value = f"{prefix}-{number:02d}"
            options.append({
                "value": value,
                "label": f"{label}: {value}",
                "group": label,
            })
    return options

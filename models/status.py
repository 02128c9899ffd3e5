"""
Time-driven status models: last-order countdown and staff-call decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class LastOrderStatus:
    """Point-in-time view of the last-order countdown."""

    minutes_remaining: int
    """Whole minutes until last order; 0 once LO is reached."""

    display_text: str
    """Text for the countdown banner."""

    last_order_at: datetime
    """The LO cutoff the countdown was computed against."""

    @property
    def reached(self) -> bool:
        return self.minutes_remaining == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minutesRemaining": self.minutes_remaining,
            "displayText": self.display_text,
            "lastOrderAt": self.last_order_at.isoformat(timespec="minutes"),
            "reached": self.reached,
        }


@dataclass(frozen=True)
class CallDecision:
    """
    Result of a staff-call attempt.

    ``allowed`` False means throttled; ``remaining_seconds`` says how long
    until the next call is accepted.
    """

    allowed: bool
    remaining_seconds: int = 0

    @classmethod
    def allow(cls) -> "CallDecision":
        return cls(allowed=True)

    @classmethod
    def throttled(cls, remaining_seconds: int) -> "CallDecision":
        return cls(allowed=False, remaining_seconds=remaining_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "allowed": self.allowed,
            "remainingSeconds": self.remaining_seconds,
        }

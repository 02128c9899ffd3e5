"""
Staff-call throttling.

A seat may call staff once per cooldown window. Rejected attempts do not
move the window: the cooldown always counts from the last ACCEPTED call.
"""

from __future__ import annotations

import math
from typing import Optional

from models.status import CallDecision
from services.seat_store import SeatStateStore
from logging_config import get_seat_logger

DEFAULT_COOLDOWN_MS = 30000


class CallThrottle:
    """
    Per-seat cooldown between staff calls.

    Attributes:
        cooldown_ms: Default cooldown when try_call is not given one
    """

    def __init__(self, store: SeatStateStore, cooldown_ms: int = DEFAULT_COOLDOWN_MS):
        if cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {cooldown_ms}")
        self._store = store
        self.cooldown_ms = cooldown_ms

    def try_call(self, seat_id: str, now_ms: int, cooldown_ms: Optional[int] = None) -> CallDecision:
        """
        Record a staff call if the seat is outside its cooldown.

        Args:
            seat_id: Canonical seat id
            now_ms: Current epoch milliseconds
            cooldown_ms: Override for the configured cooldown

        Returns:
            CallDecision.allow(), or throttled with whole seconds remaining (rounded up)
        """
        if cooldown_ms is None:
            cooldown_ms = self.cooldown_ms

        with self._store.locked(seat_id) as state:
            last = state.last_call_at
            if last is None or now_ms - last >= cooldown_ms:
                state.last_call_at = now_ms
                get_seat_logger(seat_id).info("Staff call accepted")
                return CallDecision.allow()

            # A clock that moved backwards must not stretch the wait past one cooldown
            remaining = min(
                math.ceil((cooldown_ms - (now_ms - last)) / 1000),
                math.ceil(cooldown_ms / 1000),
            )

        get_seat_logger(seat_id).warning(f"Staff call throttled ({remaining}s remaining)")
        return CallDecision.throttled(remaining)

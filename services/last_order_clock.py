"""
Last-order (LO) countdown.

LO is the store's closing time minus a fixed offset. The countdown is a
pure function of "now" and static configuration, so nothing is cached;
the banner simply asks again every time it refreshes.

Closing hour 24 means midnight at the end of today, i.e. 00:00 of the
next calendar day. Any other hour is taken on the current day.

Example (close 24:00, offset 30 min):
    now 22:10 -> 80 minutes  ("1:20 remaining until last order")
    now 23:30 -> 0           ("0 minutes (LO reached)")
"""

from __future__ import annotations

from datetime import datetime, timedelta

from models.status import LastOrderStatus


class LastOrderClock:
    """
    Computes minutes remaining until last order.

    Attributes:
        close_hour: 0-24, where 24 is midnight of the next day
        close_minute: 0-59
        lo_offset_minutes: Minutes before close that orders stop
    """

    def __init__(self, close_hour: int = 24, close_minute: int = 0, lo_offset_minutes: int = 30):
        """
        Raises:
            ValueError: If any setting is out of range
        """
        if not 0 <= close_hour <= 24:
            raise ValueError(f"close_hour must be between 0 and 24, got {close_hour}")
        if not 0 <= close_minute <= 59:
            raise ValueError(f"close_minute must be between 0 and 59, got {close_minute}")
        if close_hour == 24 and close_minute != 0:
            raise ValueError("close_minute must be 0 when close_hour is 24")
        if lo_offset_minutes < 0:
            raise ValueError(f"lo_offset_minutes must be >= 0, got {lo_offset_minutes}")

        self.close_hour = close_hour
        self.close_minute = close_minute
        self.lo_offset_minutes = lo_offset_minutes

    @classmethod
    def from_config(cls, config) -> "LastOrderClock":
        """Build from a Flask config mapping."""
        return cls(
            close_hour=int(config.get("STORE_CLOSE_HOUR", 24)),
            close_minute=int(config.get("STORE_CLOSE_MINUTE", 0)),
            lo_offset_minutes=int(config.get("LO_OFFSET_MINUTES", 30)),
        )

    def close_time(self, now: datetime) -> datetime:
        close = now.replace(
            hour=self.close_hour % 24,
            minute=self.close_minute,
            second=0,
            microsecond=0,
        )
        if self.close_hour == 24:
            close += timedelta(days=1)
        return close

    def last_order_time(self, now: datetime) -> datetime:
        return self.close_time(now) - timedelta(minutes=self.lo_offset_minutes)

    def minutes_remaining(self, now: datetime) -> int:
        """Whole minutes until LO (floored); 0 once LO is reached."""
        lo_time = self.last_order_time(now)
        if now >= lo_time:
            return 0
        return int((lo_time - now).total_seconds() // 60)

    def is_last_order_reached(self, now: datetime) -> bool:
        return now >= self.last_order_time(now)

    def display_text(self, now: datetime) -> str:
        return self._format(self.minutes_remaining(now))

    def status(self, now: datetime) -> LastOrderStatus:
        minutes = self.minutes_remaining(now)
        return LastOrderStatus(
            minutes_remaining=minutes,
            display_text=self._format(minutes),
            last_order_at=self.last_order_time(now),
        )

    @staticmethod
    def _format(minutes: int) -> str:
        if minutes <= 0:
            return "0 minutes (LO reached)"
        hours, mins = divmod(minutes, 60)
        return f"{hours}:{mins:02d} remaining until last order"

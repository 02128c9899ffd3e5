"""
Unit tests for the last-order countdown.
"""

from datetime import datetime

import pytest

from services.last_order_clock import LastOrderClock


def at(hour, minute, second=0, day=3):
    return datetime(2025, 12, day, hour, minute, second)


# Fixtures

@pytest.fixture
def midnight_clock():
    """Close at 24:00 (next day 00:00), last order 30 minutes before."""
    return LastOrderClock(close_hour=24, close_minute=0, lo_offset_minutes=30)


class TestMidnightClose:

    def test_half_hour_before_lo(self, midnight_clock):
        assert midnight_clock.minutes_remaining(at(23, 0)) == 30

    def test_exactly_at_lo(self, midnight_clock):
        assert midnight_clock.minutes_remaining(at(23, 30)) == 0

    def test_after_lo(self, midnight_clock):
        assert midnight_clock.minutes_remaining(at(23, 45)) == 0

    def test_floors_partial_minutes(self, midnight_clock):
        assert midnight_clock.minutes_remaining(at(23, 0, 30)) == 29
        assert midnight_clock.minutes_remaining(at(23, 29, 59)) == 0

    def test_close_rolls_to_next_day(self, midnight_clock):
        assert midnight_clock.close_time(at(18, 0)) == datetime(2025, 12, 4, 0, 0)
        assert midnight_clock.last_order_time(at(18, 0)) == at(23, 30)

    def test_early_evening(self, midnight_clock):
        assert midnight_clock.minutes_remaining(at(18, 0)) == 330


class TestSameDayClose:

    def test_close_at_22(self):
        clock = LastOrderClock(close_hour=22, close_minute=15, lo_offset_minutes=45)
        assert clock.last_order_time(at(20, 0)) == at(21, 30)
        assert clock.minutes_remaining(at(20, 0)) == 90
        assert clock.minutes_remaining(at(22, 0)) == 0

    def test_zero_offset(self):
        clock = LastOrderClock(close_hour=23, close_minute=0, lo_offset_minutes=0)
        assert clock.minutes_remaining(at(22, 59)) == 1
        assert clock.is_last_order_reached(at(23, 0)) is True


class TestDisplayText:

    def test_reached(self, midnight_clock):
        assert midnight_clock.display_text(at(23, 45)) == "0 minutes (LO reached)"

    def test_hours_and_minutes(self, midnight_clock):
        assert midnight_clock.display_text(at(22, 10)) == "1:20 remaining until last order"

    def test_minutes_are_zero_padded(self, midnight_clock):
        assert midnight_clock.display_text(at(21, 25)) == "2:05 remaining until last order"

    def test_status(self, midnight_clock):
        status = midnight_clock.status(at(23, 0))
        assert status.minutes_remaining == 30
        assert status.reached is False
        assert status.to_dict() == {
            "minutesRemaining": 30,
            "displayText": "0:30 remaining until last order",
            "lastOrderAt": "2025-12-03T23:30",
            "reached": False,
        }


class TestConfiguration:

    @pytest.mark.parametrize("kwargs", [
        {"close_hour": 25},
        {"close_hour": -1},
        {"close_minute": 60},
        {"close_hour": 24, "close_minute": 30},
        {"lo_offset_minutes": -5},
    ])
    def test_invalid_settings_rejected(self, kwargs):
        with pytest.raises(ValueError):
            LastOrderClock(**kwargs)

    def test_from_config(self):
        clock = LastOrderClock.from_config({
            "STORE_CLOSE_HOUR": 23,
            "STORE_CLOSE_MINUTE": 30,
            "LO_OFFSET_MINUTES": 60,
        })
        assert clock.last_order_time(at(20, 0)) == at(22, 30)

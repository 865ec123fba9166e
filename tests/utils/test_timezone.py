"""Tests for utils/timezone.py - UTC time handling."""

from datetime import datetime, timezone
from unittest.mock import patch

from utils.timezone import now_utc, today_utc


class TestNowUtc:

    def test_is_timezone_aware_utc(self):
        assert now_utc().tzinfo == timezone.utc


class TestTodayUtc:

    def test_uses_utc_calendar_day(self):
        late_evening_utc = datetime(2024, 3, 15, 23, 59, tzinfo=timezone.utc)
        with patch("utils.timezone.now_utc", return_value=late_evening_utc):
            assert today_utc().isoformat() == "2024-03-15"

"""Tests for geo_backend.quota.window - daily reset boundary."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from geo_backend.quota.ledger import LedgerEntry
from geo_backend.quota.window import is_expired, next_reset_boundary, utcnow

UTC = timezone.utc


class TestNextResetBoundary:

    @pytest.mark.parametrize(
        "now",
        [
            datetime(2024, 6, 15, 0, 0, 0, tzinfo=UTC),
            datetime(2024, 6, 15, 0, 0, 1, tzinfo=UTC),
            datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC),
            datetime(2024, 6, 15, 23, 59, 59, 999000, tzinfo=UTC),
        ],
    )
    def test_whole_day_maps_to_next_midnight(self, now):
        assert next_reset_boundary(now) == datetime(2024, 6, 16, tzinfo=UTC)

    def test_end_of_month(self):
        now = datetime(2024, 3, 1, 23, 59, 59, tzinfo=UTC)
        assert next_reset_boundary(now) == datetime(2024, 3, 2, tzinfo=UTC)

    def test_end_of_year(self):
        now = datetime(2024, 12, 31, 18, 0, tzinfo=UTC)
        assert next_reset_boundary(now) == datetime(2025, 1, 1, tzinfo=UTC)

    def test_leap_day(self):
        now = datetime(2024, 2, 28, 8, 0, tzinfo=UTC)
        assert next_reset_boundary(now) == datetime(2024, 2, 29, tzinfo=UTC)

    def test_naive_datetime_is_treated_as_utc(self):
        assert next_reset_boundary(datetime(2024, 6, 15, 9)) == datetime(2024, 6, 16, tzinfo=UTC)

    def test_other_timezone_uses_utc_calendar_date(self):
        # 2024-06-15 22:00 at UTC-5 is already 2024-06-16 03:00 UTC
        eastern = timezone(timedelta(hours=-5))
        now = datetime(2024, 6, 15, 22, 0, tzinfo=eastern)
        assert next_reset_boundary(now) == datetime(2024, 6, 17, tzinfo=UTC)

    def test_result_is_aware_utc(self):
        assert next_reset_boundary(utcnow()).tzinfo is not None


class TestIsExpired:

    def test_before_reset(self):
        entry = LedgerEntry(count=1, reset_at=datetime(2024, 6, 16, tzinfo=UTC))
        assert not is_expired(entry, datetime(2024, 6, 15, 23, 59, 59, tzinfo=UTC))

    def test_exactly_at_reset(self):
        entry = LedgerEntry(count=1, reset_at=datetime(2024, 6, 16, tzinfo=UTC))
        assert is_expired(entry, datetime(2024, 6, 16, tzinfo=UTC))

    def test_after_reset(self):
        entry = LedgerEntry(count=1, reset_at=datetime(2024, 6, 16, tzinfo=UTC))
        assert is_expired(entry, datetime(2024, 6, 17, tzinfo=UTC))

"""Daily quota window: every window ends at the next midnight UTC."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geo_backend.quota.ledger import LedgerEntry


def utcnow() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Normalise ``moment`` to aware UTC (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def next_reset_boundary(now: datetime) -> datetime:
    """Midnight UTC of the calendar day following ``now``.

    2024-03-01T23:59:59Z and 2024-03-01T00:00:01Z both map to
    2024-03-02T00:00:00Z.
    """
    now = as_utc(now)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=1)


def is_expired(entry: "LedgerEntry", now: datetime) -> bool:
    return as_utc(now) >= entry.reset_at


__all__ = ["utcnow", "as_utc", "next_reset_boundary", "is_expired"]

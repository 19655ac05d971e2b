"""Admission decisions for the daily analysis quota.

Each call to :meth:`QuotaEngine.account_and_check` consumes one unit of the
caller's quota for the current UTC day and says whether the request may
proceed. :meth:`QuotaEngine.peek` reports the same numbers without
consuming anything.

The engine owns its ledger. Build one per process (the FastAPI lifespan
does this) and pass it where it is needed; tests build their own.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from geo_backend.quota.ledger import LedgerEntry, QuotaLedger
from geo_backend.quota.window import as_utc, is_expired, next_reset_boundary, utcnow

LOG = logging.getLogger(__name__)

DAILY_REQUEST_LIMIT = 3


def to_epoch_ms(moment: datetime) -> int:
    return int(as_utc(moment).timestamp() * 1000)


@dataclass(frozen=True)
class QuotaStatus:
    """Quota left for an identity, without consuming any."""
    remaining: int
    reset_at: datetime
    limit: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "remaining": self.remaining,
            "resetAt": to_epoch_ms(self.reset_at),
            "limit": self.limit,
        }


@dataclass(frozen=True)
class QuotaVerdict:
    """Outcome of one accounting call."""
    allowed: bool
    remaining: int
    reset_at: datetime
    limit: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "allowed": self.allowed,
            "remaining": self.remaining,
            "resetAt": to_epoch_ms(self.reset_at),
            "limit": self.limit,
        }


class QuotaEngine:
    """Per-identity daily request counter with a fixed limit.

    Args:
        ledger: Ledger to account into (a fresh one by default).
        limit: Requests allowed per identity per UTC day.
        clock: Returns "now" when callers do not pass it explicitly.
    """

    def __init__(
        self,
        ledger: Optional[QuotaLedger] = None,
        limit: int = DAILY_REQUEST_LIMIT,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._ledger = ledger if ledger is not None else QuotaLedger()
        self.limit = limit
        self._clock = clock

    @property
    def ledger(self) -> QuotaLedger:
        return self._ledger

    def now(self) -> datetime:
        """Current time according to the engine's clock."""
        return as_utc(self._clock())

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now) if now is not None else self.now()

    def account_and_check(self, identity: str, now: Optional[datetime] = None) -> QuotaVerdict:
        """Count one request for ``identity`` and decide whether it is allowed.

        The counter keeps growing past the limit so every call is recorded;
        only the reported ``remaining`` is clamped at zero.
        """
        now = self._now(now)
        with self._ledger.lock:
            entry = self._ledger.get(identity)
            if entry is None or is_expired(entry, now):
                # Rollover: the previous window's count is discarded, not merged
                entry = LedgerEntry(count=0, reset_at=next_reset_boundary(now))
            entry = entry.incremented()
            self._ledger.set(identity, entry)

        remaining = max(0, self.limit - entry.count)
        allowed = entry.count <= self.limit
        if allowed:
            LOG.debug(
                "quota: %s used %d/%d (resets %s)",
                identity, entry.count, self.limit, entry.reset_at.isoformat(),
            )
        else:
            LOG.warning(
                "quota: %s denied, %d requests against limit %d (resets %s)",
                identity, entry.count, self.limit, entry.reset_at.isoformat(),
            )
        return QuotaVerdict(
            allowed=allowed,
            remaining=remaining,
            reset_at=entry.reset_at,
            limit=self.limit,
        )

    def peek(self, identity: str, now: Optional[datetime] = None) -> QuotaStatus:
        """Report the quota left for ``identity`` without consuming it."""
        now = self._now(now)
        entry = self._ledger.get(identity)
        if entry is None or is_expired(entry, now):
            return QuotaStatus(
                remaining=self.limit,
                reset_at=next_reset_boundary(now),
                limit=self.limit,
            )
        return QuotaStatus(
            remaining=max(0, self.limit - entry.count),
            reset_at=entry.reset_at,
            limit=self.limit,
        )

    def sweep_expired(self, now: Optional[datetime] = None) -> int:
        """Delete every expired entry and return how many were removed."""
        now = self._now(now)
        removed = 0
        with self._ledger.lock:
            for identity, entry in self._ledger.items():
                if is_expired(entry, now):
                    self._ledger.delete(identity)
                    removed += 1
        return removed


def format_retry_after(reset_at: datetime, now: Optional[datetime] = None) -> str:
    """Human-readable time until ``reset_at``, e.g. ``"5h 12m"``."""
    now = as_utc(now if now is not None else utcnow())
    seconds = max(0, int((as_utc(reset_at) - now).total_seconds()))
    if seconds < 60:
        return "less than a minute"
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


__all__ = [
    "DAILY_REQUEST_LIMIT",
    "QuotaEngine",
    "QuotaStatus",
    "QuotaVerdict",
    "format_retry_after",
    "to_epoch_ms",
]

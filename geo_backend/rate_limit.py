"""Burst rate limiting shared by the routers.

Uses `slowapi` (which wraps `limits`) to cap short bursts per client. This
sits in front of the daily quota (``geo_backend.quota``): slowapi rejects
hammering within a minute, the quota engine enforces the per-day budget.
Both key on the same client identity.

Env vars
--------
RATE_LIMIT_DEFAULT : str
    Default limit applied to *all* routes (e.g. ``"60/minute"``).
RATE_LIMIT_EXPENSIVE : str
    Stricter limit for the dual-LLM analysis endpoint (e.g. ``"10/minute"``).
"""
from __future__ import annotations

from slowapi import Limiter

from geo_backend.config import RATE_LIMIT_DEFAULT, RATE_LIMIT_EXPENSIVE
from geo_backend.quota.identity import client_identity_from_request

DEFAULT_LIMIT: str = RATE_LIMIT_DEFAULT
EXPENSIVE_LIMIT: str = RATE_LIMIT_EXPENSIVE

# Single limiter instance shared across the app
limiter = Limiter(key_func=client_identity_from_request, default_limits=[DEFAULT_LIMIT])


def reset_limiter() -> None:
    """Forget all burst counters (used by tests)."""
    limiter.reset()


__all__ = ["limiter", "DEFAULT_LIMIT", "EXPENSIVE_LIMIT", "reset_limiter"]

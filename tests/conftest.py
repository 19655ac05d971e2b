"""Shared fixtures for the geo-analyzer test suite."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from geo_backend.dependencies import get_quota_engine
from geo_backend.main import app
from geo_backend.quota.engine import QuotaEngine
from geo_backend.rate_limit import reset_limiter


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

FIXED_NOW = datetime(2024, 6, 15, 10, 30, 0, tzinfo=timezone.utc)
NEXT_MIDNIGHT = datetime(2024, 6, 16, 0, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock passed to QuotaEngine."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock) -> QuotaEngine:
    return QuotaEngine(clock=clock)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_burst_limits():
    """slowapi keeps hit counters in memory; start every test from zero."""
    reset_limiter()
    yield


@pytest.fixture
def client(engine):
    """TestClient whose routes see the test's own engine."""
    app.dependency_overrides[get_quota_engine] = lambda: engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_quota_engine, None)

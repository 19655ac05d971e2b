"""Per-client daily quota: identity resolution, ledger, admission, sweep."""

from geo_backend.quota.engine import (
    DAILY_REQUEST_LIMIT,
    QuotaEngine,
    QuotaStatus,
    QuotaVerdict,
    format_retry_after,
)
from geo_backend.quota.identity import client_identity_from_request, resolve_client_identity
from geo_backend.quota.janitor import QuotaJanitor
from geo_backend.quota.ledger import LedgerEntry, QuotaLedger

__all__ = [
    "DAILY_REQUEST_LIMIT",
    "LedgerEntry",
    "QuotaEngine",
    "QuotaJanitor",
    "QuotaLedger",
    "QuotaStatus",
    "QuotaVerdict",
    "client_identity_from_request",
    "format_retry_after",
    "resolve_client_identity",
]

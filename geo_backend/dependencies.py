"""FastAPI dependencies handing the process-wide quota engine to routes."""
from __future__ import annotations

from fastapi import HTTPException, Request

from geo_backend.quota.engine import QuotaEngine
from geo_backend.quota.identity import client_identity_from_request


def get_quota_engine(request: Request) -> QuotaEngine:
    engine = getattr(request.app.state, "quota_engine", None)
    if engine is None:
        # Lifespan did not run (e.g. app mounted without startup)
        raise HTTPException(status_code=503, detail="Quota engine not initialized")
    return engine


def get_client_identity(request: Request) -> str:
    return client_identity_from_request(request)

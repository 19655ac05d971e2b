"""Router reporting the caller's remaining daily quota."""

from fastapi import APIRouter, Depends, Response

from geo_backend.dependencies import get_client_identity, get_quota_engine
from geo_backend.models import QuotaStatusResponse
from geo_backend.quota.engine import QuotaEngine
from geo_backend.routers.analyze import rate_limit_headers

router = APIRouter(tags=["quota"])


@router.get("/quota", response_model=QuotaStatusResponse)
def quota_status(
    response: Response,
    engine: QuotaEngine = Depends(get_quota_engine),
    identity: str = Depends(get_client_identity),
):
    """Return remaining analyses for the caller without consuming any."""
    now = engine.now()
    status = engine.peek(identity, now)
    response.headers.update(rate_limit_headers(status, now))
    return status.to_dict()

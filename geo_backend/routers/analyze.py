"""Router for the dual-LLM analysis endpoint."""

import logging
from datetime import datetime
from typing import Dict, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from geo_backend.analysis import run_dual_analysis
from geo_backend.dependencies import get_client_identity, get_quota_engine
from geo_backend.models import AnalysisResponse, AnalyzeRequest, ErrorResponse, RateLimitErrorResponse
from geo_backend.quota.engine import QuotaEngine, QuotaStatus, QuotaVerdict, format_retry_after
from geo_backend.quota.window import as_utc
from geo_backend.rate_limit import EXPENSIVE_LIMIT, limiter

log = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])

MISSING_FIELDS_ERROR = "Missing required fields: query, keywords, and url"


def rate_limit_headers(status: Union[QuotaVerdict, QuotaStatus], now: datetime) -> Dict[str, str]:
    """``X-RateLimit-*`` headers plus ``Retry-After`` once the quota is spent."""
    reset_at = as_utc(status.reset_at)
    headers = {
        "X-RateLimit-Limit": str(status.limit),
        "X-RateLimit-Remaining": str(status.remaining),
        "X-RateLimit-Reset": str(int(reset_at.timestamp())),
    }
    if isinstance(status, QuotaVerdict) and not status.allowed:
        headers["Retry-After"] = str(max(0, int((reset_at - now).total_seconds())))
    return headers


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": RateLimitErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit(EXPENSIVE_LIMIT)
async def analyze_endpoint(
    request: Request,
    req: AnalyzeRequest,
    engine: QuotaEngine = Depends(get_quota_engine),
    identity: str = Depends(get_client_identity),
):
    """Analyze a URL for a query and keywords with Gemini and ChatGPT.

    Consumes one unit of the caller's daily quota; once it is spent the
    request is rejected with 429 until the next midnight UTC.
    """
    if req.missing_fields():
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})

    now = engine.now()
    verdict = engine.account_and_check(identity, now)
    headers = rate_limit_headers(verdict, now)
    quota = verdict.to_dict()
    del quota["allowed"]

    if not verdict.allowed:
        retry_in = format_retry_after(verdict.reset_at, now)
        log.info("analyze: quota exhausted for %s, retry in %s", identity, retry_in)
        return JSONResponse(
            status_code=429,
            headers=headers,
            content={
                "error": (
                    f"Daily limit of {verdict.limit} analyses reached. "
                    f"Try again in {retry_in}."
                ),
                **quota,
            },
        )

    log.info("analyze: %s running analysis (%d left today)", identity, verdict.remaining)
    try:
        results = await run_dual_analysis(req.query, req.keywords, req.url)
    except Exception:
        log.exception("Error in analyze endpoint")
        return JSONResponse(status_code=500, content={"error": "Internal Server error"})

    return JSONResponse(status_code=200, headers=headers, content={**results, **quota})

"""FastAPI app for the GEO & SEO analyzer.

Endpoints:
  POST /analyze  -> { "query": "...", "keywords": "...", "url": "https://..." }
  GET  /quota    -> remaining analyses for the caller today

Response (POST /analyze):
  200: { "gemini": "...", "chatgpt": "...", "remaining": 2, "resetAt": <epoch ms>, "limit": 3 }
  400/429/500: { "error": "message", ... }
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from geo_backend.config import CORS_ORIGINS, QUOTA_SWEEP_INTERVAL_SECONDS
from geo_backend.logging_config import setup_logging
from geo_backend.quota.engine import QuotaEngine
from geo_backend.quota.janitor import QuotaJanitor
from geo_backend.rate_limit import limiter
from geo_backend.routers import analyze, quota

setup_logging()

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One engine per process; state is lost when the process exits
    engine = QuotaEngine()
    janitor = QuotaJanitor(engine, interval_seconds=QUOTA_SWEEP_INTERVAL_SECONDS)
    app.state.quota_engine = engine
    app.state.quota_janitor = janitor
    janitor.start()
    log.info("quota engine ready (limit=%d/day)", engine.limit)
    try:
        yield
    finally:
        await janitor.stop()


app = FastAPI(title="GEO & SEO Analyzer API", lifespan=lifespan)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    log.info("Incoming request: %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception as exc:
        log.exception("Error handling request %s %s: %s", request.method, request.url.path, exc)
        raise
    log.info("Response %s for %s %s", response.status_code, request.method, request.url.path)
    return response


@app.get("/")
async def root():
    """Service description with links to the main endpoints."""
    return {
        "service": "geo-analyzer backend",
        "endpoints": [
            {"path": "/analyze", "method": "POST", "desc": "GEO/SEO analysis from Gemini and ChatGPT (3 per day)"},
            {"path": "/quota", "method": "GET", "desc": "remaining analyses for the caller today"},
        ],
    }


# Allow the Next.js front-end (local dev server by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
)

app.include_router(analyze.router)
app.include_router(quota.router)

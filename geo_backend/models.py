"""Pydantic request/response models shared across routers."""
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel


class AnalyzeRequest(BaseModel):
    # Optional so a missing field yields the 400 below rather than a 422
    query: Optional[str] = None
    keywords: Optional[str] = None
    url: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("query", "keywords", "url")
            if not (getattr(self, name) or "").strip()
        ]


class QuotaStatusResponse(BaseModel):
    remaining: int
    resetAt: int
    limit: int


class AnalysisResponse(QuotaStatusResponse):
    gemini: str
    chatgpt: str


class ErrorResponse(BaseModel):
    error: str


class RateLimitErrorResponse(ErrorResponse):
    remaining: int
    resetAt: int
    limit: int

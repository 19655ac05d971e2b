"""Gemini (Google GenAI) client wrapper.

Uses the official ``google-genai`` SDK. The API key comes from the
constructor or the ``GEMINI_API_KEY`` environment variable. Transient
failures (rate limits, 5xx, network) are retried with exponential backoff
via ``tenacity``.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from google import genai
from google.genai import types
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from geo_backend.config import GEMINI_MODEL, LLM_BACKOFF_MAX, LLM_BACKOFF_MIN, LLM_MAX_RETRIES
from geo_backend.llm_base import LLMClient, UsageStats, is_retryable

LOG = logging.getLogger(__name__)

GEMINI_MAX_RETRIES = LLM_MAX_RETRIES
GEMINI_BACKOFF_MIN = LLM_BACKOFF_MIN
GEMINI_BACKOFF_MAX = LLM_BACKOFF_MAX

EMPTY_RESPONSE_TEXT = "No response generated from Gemini"

_is_retryable = is_retryable


class GeminiClient(LLMClient):
    """Client for Google Gemini.

    - ``api_key`` falls back to ``GEMINI_API_KEY``; a missing key fails at
      construction so misconfiguration shows up before any request.
    - ``generate(...)`` returns the model's text output.
    """

    def __init__(self, api_key: Optional[str] = None, default_model: Optional[str] = GEMINI_MODEL):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.default_model = default_model
        if not self.api_key:
            raise RuntimeError(
                "Gemini API key not found. Set GEMINI_API_KEY in the environment or the .env file"
            )
        try:
            self._client = genai.Client(api_key=self.api_key)
        except Exception as exc:
            raise RuntimeError(f"Failed to initialize GenAI client: {exc}")

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = 512,
        temperature: float = 0.0,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Generate text for the given prompt."""
        model_id = self._resolve_model(model)
        config = types.GenerateContentConfig(
            max_output_tokens=max_tokens,
            temperature=temperature,
            system_instruction=system_instruction,
        )

        @retry(
            stop=stop_after_attempt(GEMINI_MAX_RETRIES),
            wait=wait_exponential(min=GEMINI_BACKOFF_MIN, max=GEMINI_BACKOFF_MAX),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(LOG, logging.WARNING),
            reraise=True,
        )
        def _call():
            return self._client.models.generate_content(
                model=model_id,
                contents=prompt,
                config=config,
            )

        try:
            response = _call()
        except Exception as exc:
            raise RuntimeError(f"Gemini API error: {exc}")

        self.last_usage = _usage_from_response(response, model_id)
        return response.text or EMPTY_RESPONSE_TEXT


def _usage_from_response(response, model_id: str) -> UsageStats:
    meta = getattr(response, "usage_metadata", None)

    def _count(name: str) -> int:
        value = getattr(meta, name, None) if meta is not None else None
        return value if isinstance(value, int) else 0

    return UsageStats(
        input_tokens=_count("prompt_token_count"),
        output_tokens=_count("candidates_token_count"),
        total_tokens=_count("total_token_count"),
        model=model_id,
    )


__all__ = ["GeminiClient"]

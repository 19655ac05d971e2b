"""OpenAI client: chat completions over plain HTTP.

Calls ``POST {OPENAI_BASE_URL}/chat/completions`` with ``requests`` and the
same retry policy as ``GeminiClient``.

Configuration (environment variables):
    OPENAI_API_KEY    - required
    OPENAI_BASE_URL   - default ``https://api.openai.com/v1``
    OPENAI_MODEL      - default ``gpt-4o``
"""
from __future__ import annotations

import logging
import os
from typing import Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from geo_backend.config import (
    LLM_BACKOFF_MAX,
    LLM_BACKOFF_MIN,
    LLM_MAX_RETRIES,
    LLM_REQUEST_TIMEOUT,
    OPENAI_BASE_URL,
    OPENAI_MODEL,
)
from geo_backend.llm_base import LLMClient, UsageStats, is_retryable

LOG = logging.getLogger(__name__)

OPENAI_MAX_RETRIES = LLM_MAX_RETRIES
OPENAI_BACKOFF_MIN = LLM_BACKOFF_MIN
OPENAI_BACKOFF_MAX = LLM_BACKOFF_MAX

EMPTY_RESPONSE_TEXT = "No Response From ChatGPT"

_RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class OpenAIHTTPError(RuntimeError):
    """Non-2xx answer from the OpenAI API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, OpenAIHTTPError):
        return exc.status_code in _RETRYABLE_STATUS
    return is_retryable(exc)


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return f"HTTP Error! status: {resp.status_code}"


class OpenAIClient(LLMClient):
    """LLM client for OpenAI chat models.

    Parameters
    ----------
    api_key : str | None
        Falls back to ``OPENAI_API_KEY``.
    base_url : str | None
        API root (default ``OPENAI_BASE_URL``).
    default_model : str | None
        Model name to use when none is provided per-call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_model: Optional[str] = OPENAI_MODEL,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key:
            raise RuntimeError(
                "OpenAI API key not found. Set OPENAI_API_KEY in the environment or the .env file"
            )
        self.base_url = (base_url or OPENAI_BASE_URL).rstrip("/")
        self.default_model = default_model

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = 512,
        temperature: float = 0.0,
        system_instruction: Optional[str] = None,
    ) -> str:
        model_id = self._resolve_model(model)
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        @retry(
            stop=stop_after_attempt(OPENAI_MAX_RETRIES),
            wait=wait_exponential(min=OPENAI_BACKOFF_MIN, max=OPENAI_BACKOFF_MAX),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(LOG, logging.WARNING),
            reraise=True,
        )
        def _call() -> dict:
            resp = requests.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json={
                    "model": model_id,
                    "messages": messages,
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                },
                timeout=LLM_REQUEST_TIMEOUT,
            )
            if not resp.ok:
                raise OpenAIHTTPError(resp.status_code, _error_message(resp))
            return resp.json()

        try:
            data = _call()
        except Exception as exc:
            raise RuntimeError(f"OpenAI API error: {exc}")

        usage = data.get("usage") or {}
        self.last_usage = UsageStats(
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
            model=data.get("model", model_id),
        )

        choices = data.get("choices") or []
        if not choices:
            return EMPTY_RESPONSE_TEXT
        content = (choices[0].get("message") or {}).get("content")
        return content or EMPTY_RESPONSE_TEXT


__all__ = ["OpenAIClient", "OpenAIHTTPError"]

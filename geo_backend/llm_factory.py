"""LLM provider factory - returns the right client for a provider name.

- ``gemini`` - Google Gemini through the GenAI SDK
- ``openai`` - OpenAI chat completions over HTTP

Callers should use ``get_llm_client()`` instead of instantiating the
clients directly so tests can swap providers in one place.
"""
from __future__ import annotations

import logging
from typing import Optional

from geo_backend.llm_base import LLMClient

LOG = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai")


def get_llm_client(provider: str, *, default_model: Optional[str] = None) -> LLMClient:
    """Instantiate and return the client for ``provider``.

    Parameters
    ----------
    provider : str
        One of ``SUPPORTED_PROVIDERS`` (case-insensitive).
    default_model : str | None
        Override the provider's default model for this instance.
    """
    prov = provider.lower().strip()
    kwargs: dict = {}
    if default_model:
        kwargs["default_model"] = default_model

    if prov == "gemini":
        from geo_backend.gemini_client import GeminiClient
        return GeminiClient(**kwargs)

    if prov == "openai":
        from geo_backend.openai_client import OpenAIClient
        return OpenAIClient(**kwargs)

    raise ValueError(
        f"Unknown LLM provider '{prov}'. "
        f"Supported values: {', '.join(SUPPORTED_PROVIDERS)}"
    )


__all__ = ["get_llm_client", "SUPPORTED_PROVIDERS"]

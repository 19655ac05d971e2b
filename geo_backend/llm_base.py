"""Abstract base class for LLM clients.

Every LLM backend (Gemini, OpenAI, ...) must implement this thin interface
so the analysis code stays provider-agnostic.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class UsageStats:
    """Token usage information returned after generation."""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    model: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "model": self.model,
            **self.extra,
        }


class LLMClient(ABC):
    """Minimal contract that all LLM backends must satisfy."""

    default_model: Optional[str]

    # Populated after generate completes
    last_usage: Optional[UsageStats] = None

    @abstractmethod
    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: int = 512,
        temperature: float = 0.0,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Return the full model response as a single string."""

    def _resolve_model(self, model: Optional[str]) -> str:
        model_id = model or self.default_model
        if not model_id:
            raise ValueError("model must be provided either via constructor or argument")
        return model_id


def is_retryable(exc: BaseException) -> bool:
    """Return True for transient provider errors safe to retry.

    Rate limits (429 / RESOURCE_EXHAUSTED), server errors (5xx) and network
    failures are retried; auth and validation errors are not.
    """
    if isinstance(exc, (ConnectionError, TimeoutError, OSError)):
        return True
    exc_str = str(exc).lower()
    if "resource_exhausted" in exc_str or "rate limit" in exc_str:
        return True
    return any(code in exc_str for code in ("429", "500", "502", "503", "504"))


__all__ = ["LLMClient", "UsageStats", "is_retryable"]

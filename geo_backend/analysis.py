"""Run the GEO/SEO analysis against Gemini and ChatGPT side by side.

Both providers are called concurrently on worker threads. One provider
failing does not fail the other: its slot carries a Markdown failure
notice instead of an analysis.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict

from geo_backend.config import (
    ANALYSIS_MAX_TOKENS,
    GEMINI_MODEL,
    GEMINI_TEMPERATURE,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
)
from geo_backend.llm_factory import get_llm_client
from geo_backend.prompt_builder import (
    CHATGPT_STYLE,
    GEMINI_STYLE,
    build_system_prompt,
    build_user_prompt,
)

LOG = logging.getLogger(__name__)


def failure_markdown(exc: BaseException) -> str:
    return f"### Analysis Failed 😭\n\n**Reason:** {exc}"


def analyze_with_gemini(query: str, keywords: str, url: str) -> str:
    client = get_llm_client("gemini")
    return client.generate(
        build_user_prompt(query, keywords, url),
        model=GEMINI_MODEL,
        max_tokens=ANALYSIS_MAX_TOKENS,
        temperature=GEMINI_TEMPERATURE,
        system_instruction=build_system_prompt("Gemini", GEMINI_STYLE),
    )


def analyze_with_chatgpt(query: str, keywords: str, url: str) -> str:
    client = get_llm_client("openai")
    return client.generate(
        build_user_prompt(query, keywords, url),
        model=OPENAI_MODEL,
        max_tokens=ANALYSIS_MAX_TOKENS,
        temperature=OPENAI_TEMPERATURE,
        system_instruction=build_system_prompt("ChatGPT", CHATGPT_STYLE),
    )


async def run_dual_analysis(query: str, keywords: str, url: str) -> Dict[str, str]:
    """Return ``{"gemini": markdown, "chatgpt": markdown}``."""
    gemini_result, chatgpt_result = await asyncio.gather(
        asyncio.to_thread(analyze_with_gemini, query, keywords, url),
        asyncio.to_thread(analyze_with_chatgpt, query, keywords, url),
        return_exceptions=True,
    )

    results: Dict[str, str] = {}
    for name, outcome in (("gemini", gemini_result), ("chatgpt", chatgpt_result)):
        if isinstance(outcome, BaseException):
            LOG.error("analysis: %s failed: %s", name, outcome)
            results[name] = failure_markdown(outcome)
        else:
            results[name] = outcome
    return results


__all__ = [
    "analyze_with_chatgpt",
    "analyze_with_gemini",
    "failure_markdown",
    "run_dual_analysis",
]

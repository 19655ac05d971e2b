"""Backend package for the GEO & SEO analyzer.

This package exposes small service modules grouped by responsibility:
- quota: per-client daily quota (identity, ledger, admission, janitor)
- analysis: runs the Gemini and ChatGPT analyses side by side
- gemini_client / openai_client: LLM provider clients
- routers: FastAPI routes (``/analyze``, ``/quota``)
"""

from . import quota  # expose the quota engine as geo_backend.quota

__all__ = [
    "quota",
]

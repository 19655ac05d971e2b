"""Centralized configuration for the backend application.

This module contains all default settings and model configurations to
avoid hardcoded values scattered across the codebase. Values can be
overridden through environment variables or a ``.env`` file at the
repository root.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(env_path)

# Quota Configuration (the daily limit itself is fixed, see quota.engine)
QUOTA_SWEEP_INTERVAL_SECONDS = float(os.getenv("QUOTA_SWEEP_INTERVAL_SECONDS", "3600"))

# Burst limits enforced by slowapi on top of the daily quota
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
RATE_LIMIT_EXPENSIVE = os.getenv("RATE_LIMIT_EXPENSIVE", "10/minute")

# Model Configuration
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-pro")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

# Generation Configuration
ANALYSIS_MAX_TOKENS = int(os.getenv("ANALYSIS_MAX_TOKENS", "8192"))
GEMINI_TEMPERATURE = 0.0
OPENAI_TEMPERATURE = 0.7

# Retry Configuration (shared by both providers)
LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "3"))
LLM_BACKOFF_MIN = float(os.getenv("LLM_BACKOFF_MIN", "2"))
LLM_BACKOFF_MAX = float(os.getenv("LLM_BACKOFF_MAX", "30"))
LLM_REQUEST_TIMEOUT = float(os.getenv("LLM_REQUEST_TIMEOUT", "120"))

# CORS: the Next.js front-end in local development by default
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

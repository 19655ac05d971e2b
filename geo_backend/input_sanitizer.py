"""Input sanitization to mitigate prompt injection attacks.

The analyze form fields (query, keywords, url) are embedded verbatim into
the prompts sent to both providers. Before that happens they are cleaned:

1. **Control character removal** - strip invisible Unicode that could be
   used to hide payloads.
2. **Instruction-stripping** - neutralise common injection phrases
   (e.g. "ignore previous instructions", "you are now...").
3. **Length limiting** - form fields are short; anything longer is cut.
4. **Delimiter enforcement** - see :func:`wrap_in_delimiters`.
"""
from __future__ import annotations

import re
import unicodedata

# ---------------------------------------------------------------------------
# Known injection patterns (case-insensitive)
# ---------------------------------------------------------------------------

_INJECTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in [
        # Direct instruction overrides
        r"(ignore|disregard|forget|override)\s+(all\s+)?(previous|prior|above|earlier)\s+(instructions?|prompts?|rules?|context)",
        # Role reassignment
        r"you\s+are\s+now\s+",
        r"pretend\s+(you\s+are|to\s+be)\s+",
        r"your\s+new\s+(role|instructions?|task|purpose)\s+",
        # System prompt leaking
        r"(show|reveal|print|output|display|repeat)\s+(me\s+)?(your|the)\s+(system\s+)?(prompt|instructions?|rules?)",
        # Delimiter escape
        r"<\s*/?\s*(system|instruction|user|assistant|user_input)\s*>",
        r"\[/?INST\]",
    ]
]

_CONTROL_CHAR_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f"
    r"\u200b-\u200f"           # Zero-width chars
    r"\u202a-\u202e"           # Bidi overrides
    r"\u2060-\u2064"           # Invisible formatters
    r"\ufeff"                  # BOM
    r"]"
)

MAX_FIELD_LENGTH = 2_000


def _strip_control_chars(text: str) -> str:
    return _CONTROL_CHAR_RE.sub("", text)


def _neutralise_injections(text: str) -> str:
    for pattern in _INJECTION_PATTERNS:
        text = pattern.sub("[FILTERED]", text)
    return text


def sanitize_field(text: str, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Clean one user-supplied form field before it goes into a prompt.

    Idempotent; returns the stripped, normalised, length-capped text.
    """
    if not text:
        return text

    text = _strip_control_chars(text)
    text = unicodedata.normalize("NFC", text)
    text = _neutralise_injections(text)
    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text


def wrap_in_delimiters(text: str, label: str = "USER_INPUT") -> str:
    """Wrap text in XML-style delimiters so the model treats it as data."""
    return f"<{label}>{text}</{label}>"

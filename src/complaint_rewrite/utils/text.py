"""
Bounded text rendering for error reasons and diagnostics.

truncate()        -- code point truncation
truncate_reason() -- grapheme cluster truncation (never splits emoji / ZWJ sequences)
safe_short()      -- JSON rendering of arbitrary values, capped in length
"""

import json
from typing import Any

import regex

ELLIPSIS = "…"

_GRAPHEME = regex.compile(r"\X")


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length code points, appending an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def truncate_reason(reason: str, max_length: int) -> str:
    """
    Cut reason to max_length grapheme clusters, appending an ellipsis when cut.

    Family emoji, flags and skin-tone modifiers are single clusters, so the
    result never ends in half of a multi-codepoint sequence.
    """
    clusters = _GRAPHEME.findall(reason)
    if len(clusters) <= max_length:
        return reason
    return "".join(clusters[:max_length]) + ELLIPSIS


def safe_short(value: Any, limit: int = 300) -> str:
    """Render any value as a short string (JSON when possible)."""
    if isinstance(value, str):
        return value[:limit]
    try:
        rendered = json.dumps(value if value is not None else "", ensure_ascii=False)
    except (TypeError, ValueError):
        rendered = str(value)
    return rendered[:limit]

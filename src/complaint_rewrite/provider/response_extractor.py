"""
Response Extractor -- recover the rewritten text from a provider response body.

Providers do not always honour the output schema, so extraction tries a fixed
sequence of shapes. Each attempt is independent and returns None instead of
raising:

  1. structured     {"rewritten_text": "..."}
  2. free text      output_text
                    output[].content[].text / .text.value / .content
                    choices[0].message.content / choices[0].text
  3. embedded JSON  free text that is itself {"rewritten_text": "..."}

An empty string means no usable text was found. Callers must check for it;
it is a normal outcome, not an error.
"""

import json
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

# Only these two preambles are stripped; anything else is kept verbatim.
_FILLER_PREFIXES = (
    re.compile(r"^here(’|'|)s (a|the) rewritten (version|message)\s*:\s*", re.IGNORECASE),
    re.compile(r"^rewritten message\s*:\s*", re.IGNORECASE),
)
_QUOTE_PAIRS = (('"', '"'), ("“", "”"))


# =============================================================================
# SHAPE DECODERS
# =============================================================================


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _decode_structured(data: Any) -> str | None:
    if not isinstance(data, Mapping):
        return None
    return _non_blank(data.get("rewritten_text"))


def _decode_output_text(data: Any) -> str | None:
    if not isinstance(data, Mapping):
        return None
    return _non_blank(data.get("output_text"))


def _content_parts(block: Any) -> list[str]:
    if not isinstance(block, Mapping):
        return []
    parts = []
    text = block.get("text")
    if isinstance(text, str):
        parts.append(text)
    elif isinstance(text, Mapping) and isinstance(text.get("value"), str):
        parts.append(text["value"])
    if isinstance(block.get("content"), str):
        parts.append(block["content"])
    return parts


def _decode_output_items(data: Any) -> str | None:
    if not isinstance(data, Mapping) or not _is_sequence(data.get("output")):
        return None
    for item in data["output"]:
        content = item.get("content") if isinstance(item, Mapping) else None
        if not _is_sequence(content):
            continue
        joined = "".join(part for block in content for part in _content_parts(block))
        if joined.strip():
            return joined.strip()
    return None


def _decode_chat_completion(data: Any) -> str | None:
    if not isinstance(data, Mapping):
        return None
    choices = data.get("choices")
    if not _is_sequence(choices) or not choices or not isinstance(choices[0], Mapping):
        return None
    first = choices[0]
    message = first.get("message")
    if isinstance(message, Mapping):
        content = _non_blank(message.get("content"))
        if content:
            return content
    return _non_blank(first.get("text"))


FREE_TEXT_DECODERS: tuple[Callable[[Any], str | None], ...] = (
    _decode_output_text,
    _decode_output_items,
    _decode_chat_completion,
)


def extract_free_text(data: Any) -> str:
    """First non-empty free-text field found in any known response shape."""
    for decode in FREE_TEXT_DECODERS:
        text = decode(data)
        if text:
            return text
    return ""


def _decode_embedded_json(text: str) -> str | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return _decode_structured(parsed)


# =============================================================================
# CLEANUP
# =============================================================================


def clean_output(text: str) -> str:
    """Trim, drop a known preamble, and unwrap one outer pair of quotes."""
    cleaned = text.strip()
    for prefix in _FILLER_PREFIXES:
        cleaned = prefix.sub("", cleaned, count=1)

    for opening, closing in _QUOTE_PAIRS:
        if len(cleaned) >= 2 and cleaned.startswith(opening) and cleaned.endswith(closing):
            cleaned = cleaned[1:-1].strip()
            break
    return cleaned.strip()


def extract_rewritten_text(body: Any) -> str:
    """
    Extract the cleaned rewritten message from a provider response body.

    Args:
        body: Parsed JSON response body (any shape).

    Returns:
        Cleaned rewritten text, or "" when nothing usable was found.
    """
    structured = _decode_structured(body)
    if structured:
        return clean_output(structured)

    text = extract_free_text(body)
    if not text:
        logger.debug("[Extractor] No text found in provider response body")
        return ""

    embedded = _decode_embedded_json(text)
    if embedded:
        return clean_output(embedded)
    return clean_output(text)

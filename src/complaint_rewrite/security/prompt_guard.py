"""
Prompt Guard - flag prompt-injection attempts hidden in complaint text.

The complaint is untrusted user text that gets embedded in a provider request.
The request instructions already tell the model to treat it as data; this
module adds a detection layer so operators can see how often it happens.

Detection only: the message is never altered or blocked, and logs carry the
number of matches, never the text itself.

Reference: OWASP LLM Top 10 (2025) - LLM01: Prompt Injection
"""

import logging
import re

logger = logging.getLogger(__name__)

INJECTION_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"ignore\s+(all\s+)?(previous|prior|above)\s+instructions",
        r"disregard\s+(all\s+)?(previous|prior|above)\s+instructions",
        r"forget\s+(all\s+)?(your|previous)\s+instructions",
        r"you\s+are\s+now\s+a",
        r"new\s+instructions\s*:",
        r"system\s*:\s*",
        r"<\|im_start\|>",
        r"<\|im_end\|>",
        r"\[/?INST\]",
        r"<\|(system|user|assistant)\|>",
        r"reveal\s+(your|the)\s+(system\s+)?prompt",
        r"output\s+(your|the)\s+(system\s+)?prompt",
        r"override\s+safety",
        r"jailbreak",
    )
)


def detect_injection_attempt(text: str) -> list[str]:
    """
    Return the injection patterns found in text (empty list = clean).

    Args:
        text: Untrusted message text.

    Returns:
        Pattern strings that matched, in declaration order.
    """
    if not text or not isinstance(text, str):
        return []

    findings = [p.pattern for p in INJECTION_PATTERNS if p.search(text)]

    if findings:
        logger.warning(
            f"[PromptGuard] Detected {len(findings)} potential injection pattern(s) "
            f"in message ({len(text)} chars)"
        )
    return findings

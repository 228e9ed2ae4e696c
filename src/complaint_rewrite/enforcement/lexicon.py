"""
Lexicon -- the fixed rule table behind the safety evaluator.

Rules are compiled once at import and shared read-only by every evaluation.
All matching is case-insensitive and word-boundary anchored.

Hard rules (fail the rewrite):
  vulgarity, slur, personal_attack, authority, preference_disclosure, medical, blame
Warn rules (downgrade tone to "warn"):
  sarcasm_warn, hedge_warn (density-based, see HEDGE_DENSITY_THRESHOLD)
Power-mode rules add extra authority checks depending on who is writing to whom.
"""

import re
from dataclasses import dataclass

from ..models import PowerMode
from .models import ViolationCode


@dataclass(frozen=True)
class LexiconRule:
    code: str
    severity: str  # "hard" or "warn"
    pattern: re.Pattern
    message: str


def _rule(code: str, severity: str, pattern: str, message: str) -> LexiconRule:
    return LexiconRule(code, severity, re.compile(pattern, re.IGNORECASE), message)


HARD_RULES: tuple[LexiconRule, ...] = (
    _rule(
        ViolationCode.VULGARITY, "hard",
        r"\b(fuck|shit|damn|asshole|bitch|bastard)\b",
        "Profanity in rewritten message",
    ),
    _rule(
        ViolationCode.SLUR, "hard",
        r"\b(retard|idiot|moron)\b",
        "Slur in rewritten message",
    ),
    _rule(
        ViolationCode.PERSONAL_ATTACK, "hard",
        r"\byou\b[^.!?]*\b(stupid|lazy|disgusting|selfish|idiot)\b",
        "Insult aimed at the recipient",
    ),
    _rule(
        ViolationCode.AUTHORITY, "hard",
        r"(\bbecause\s+i\s*(am|'m|’m)\s*(the\s*)?(owner|landlord)\b|\bhouse\s+rules\b"
        r"|\byou\s+must\b|\byou\s+have\s+to\b)",
        "Invokes ownership, house rules or issues a command",
    ),
    _rule(
        ViolationCode.PREFERENCE_DISCLOSURE, "hard",
        r"\b(your\s+preferences|tailored\s+for\s+you|based\s+on\s+your\s+answers)\b",
        "Reveals that the message was personalized",
    ),
    _rule(
        ViolationCode.MEDICAL, "hard",
        r"\b(adhd|autistic|bipolar|psychopath|crazy)\b",
        "Diagnostic label in rewritten message",
    ),
    _rule(
        ViolationCode.BLAME, "hard",
        r"\b(your\s+fault|you\s+always|you\s+never)\b",
        "Blaming language",
    ),
)

SARCASM_RULE = _rule(
    ViolationCode.SARCASM_WARN, "warn",
    r"\b(yeah\s+right|sure\s+you|of\s+course\s+you)\b",
    "Sarcastic phrasing",
)

HEDGE_PATTERN = re.compile(r"\b(maybe|perhaps|kinda|sort\s+of|possibly)\b", re.IGNORECASE)
HEDGE_DENSITY_THRESHOLD = 0.01  # warn only when hedge hits / tokens is strictly above

# Extra authority checks keyed by power mode.
POWER_MODE_RULES: dict[str, LexiconRule] = {
    PowerMode.HIGHER_SENDER: _rule(
        ViolationCode.AUTHORITY, "hard",
        r"\b(must|have\s+to|rules)\b",
        "Higher-status sender issuing commands or rules",
    ),
    PowerMode.HIGHER_RECIPIENT: _rule(
        ViolationCode.AUTHORITY, "hard",
        r"\b(must|have\s+to|immediately)\b",
        "Urgent demand toward a higher-status recipient",
    ),
}

SOFT_REQUEST_MARKERS = re.compile(
    r"\b(could\s+you|would\s+you|please|can\s+you|let['’]s|would\s+it\s+be)\b",
    re.IGNORECASE,
)

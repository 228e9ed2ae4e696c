"""
Rewrite pipeline data models.

Enumerations are plain string constants (the values travel as JSON), and every
record is a frozen dataclass: requests, responses and batch records are
created once per rewrite job and never mutated by the core.
"""

import json
from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# ENUMERATIONS
# =============================================================================


class PowerMode:
    """Relative status of sender vs. recipient."""

    HIGHER_SENDER = "higher_sender"
    HIGHER_RECIPIENT = "higher_recipient"
    PEER = "peer"

    ALL = (HIGHER_SENDER, HIGHER_RECIPIENT, PEER)


class Intent:
    """What the original complaint is trying to achieve."""

    REQUEST = "request"
    BOUNDARY = "boundary"
    CONCERN = "concern"
    CLARIFICATION = "clarification"

    ALL = (REQUEST, BOUNDARY, CONCERN, CLARIFICATION)


# =============================================================================
# REWRITE REQUEST / RESPONSE
# =============================================================================


@dataclass(frozen=True)
class RewriteRequest:
    """The message to rewrite, as owned by the surrounding job system."""

    rewrite_request_id: str
    target_locale: str
    original_text: str
    intent: str


@dataclass(frozen=True)
class RewriteResponse:
    """Provider output reassembled for one recipient."""

    rewrite_request_id: str
    recipient_user_id: str
    rewritten_text: str
    output_language: str


@dataclass(frozen=True)
class RewriteInput:
    """Everything the request builder needs for one batch line.

    context_pack and policy are untrusted JSON-like values; they are only
    ever read through the context minimizer.
    """

    model: str
    prompt_version: str
    target_locale: str
    intent: str
    original_text: str
    context_pack: Any = None
    policy: Any = None
    routing_decision: dict[str, Any] | None = None


# =============================================================================
# MINIMIZED CONTEXT
# =============================================================================


@dataclass(frozen=True)
class PreferenceSignal:
    key: str
    value: str


@dataclass(frozen=True)
class ToneHints:
    directness: str = "soft"  # "soft" or "neutral"
    warmth: str = "gentle"  # "gentle" or "neutral"
    brevity: str = "concise"


@dataclass(frozen=True)
class PolicyHints:
    avoid_commands: bool = True
    avoid_blame: bool = True
    avoid_rules: bool = True
    no_new_facts: bool = True


@dataclass(frozen=True)
class MinimizedSignals:
    """
    Privacy-safe projection of a context pack.

    power_mode: None when the source value was not recognized (omitted on output).
    preference_signals: At most 8 entries, each side at most 32 characters.
    """

    power_mode: str | None = None
    tone_hints: ToneHints = field(default_factory=ToneHints)
    policy_hints: PolicyHints = field(default_factory=PolicyHints)
    preference_signals: tuple[PreferenceSignal, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.power_mode is not None:
            out["power_mode"] = self.power_mode
        out["tone_hints"] = {
            "directness": self.tone_hints.directness,
            "warmth": self.tone_hints.warmth,
            "brevity": self.tone_hints.brevity,
        }
        out["policy_hints"] = {
            "avoid_commands": self.policy_hints.avoid_commands,
            "avoid_blame": self.policy_hints.avoid_blame,
            "avoid_rules": self.policy_hints.avoid_rules,
            "no_new_facts": self.policy_hints.no_new_facts,
        }
        if self.preference_signals:
            out["preference_signals"] = [
                {"key": p.key, "value": p.value} for p in self.preference_signals
            ]
        return out


# =============================================================================
# BATCH JOB RECORD
# =============================================================================


@dataclass(frozen=True)
class BatchJobRecord:
    """One provider batch request line. custom_id is the job id, verbatim."""

    custom_id: str
    method: str
    url: str
    body: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "custom_id": self.custom_id,
            "method": self.method,
            "url": self.url,
            "body": self.body,
        }

    def to_jsonl_line(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

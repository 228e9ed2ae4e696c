"""Data models for the rewrite safety evaluator."""

from dataclasses import dataclass, field
from typing import Any


class ViolationCode:
    """Violation taxonomy. ALL is also the order codes are reported in."""

    VULGARITY = "vulgarity"
    SLUR = "slur"
    PERSONAL_ATTACK = "personal_attack"
    AUTHORITY = "authority"
    PREFERENCE_DISCLOSURE = "preference_disclosure"
    MEDICAL = "medical"
    NEW_FACT = "new_fact"  # declared, no detector yet
    NON_TARGET_LOCALE = "non_target_locale"
    BLAME = "blame"
    SARCASM_WARN = "sarcasm_warn"
    HEDGE_WARN = "hedge_warn"

    HARD = (
        VULGARITY,
        SLUR,
        PERSONAL_ATTACK,
        AUTHORITY,
        PREFERENCE_DISCLOSURE,
        MEDICAL,
        NEW_FACT,
        NON_TARGET_LOCALE,
        BLAME,
    )
    WARN = (SARCASM_WARN, HEDGE_WARN)
    ALL = HARD + WARN


class Verdict:
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class Violation:
    """A single rule hit found in a rewritten message.

    Attributes:
        code: ViolationCode value.
        severity: "hard" fails the rewrite; "warn" only downgrades tone_safety.
        message: Human-readable explanation.
        location: The text fragment that triggered the rule.
    """

    code: str
    severity: str  # "hard" or "warn"
    message: str
    location: str = ""


@dataclass(frozen=True)
class EvalOptions:
    judge_version: str = "v1"
    dataset_version: str = "none"


@dataclass(frozen=True)
class EvalResult:
    """
    Verdict for one rewrite.

    violations: De-duplicated codes in ViolationCode.ALL order, so two results
                with the same set of codes compare equal.
    findings: Individual rule hits behind the codes (not part of the report).
    """

    schema_valid: bool
    lexicon_pass: bool
    tone_safety: str
    intent_preserved: str
    violations: tuple[str, ...] = ()
    judge_version: str = "v1"
    dataset_version: str = "none"
    findings: tuple[Violation, ...] = field(default=(), compare=False, repr=False)

    @property
    def is_deliverable(self) -> bool:
        return self.lexicon_pass and self.tone_safety != Verdict.FAIL

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_valid": self.schema_valid,
            "lexicon_pass": self.lexicon_pass,
            "tone_safety": self.tone_safety,
            "intent_preserved": self.intent_preserved,
            "violations": list(self.violations),
            "judge_version": self.judge_version,
            "dataset_version": self.dataset_version,
        }

"""
Safety Evaluator -- deterministic lexicon gate for rewritten complaints.

Runs every rule in the lexicon against the full rewritten text and folds the
hits into one EvalResult:

  schema_valid      -- ids and text present on the response
  lexicon_pass      -- no hard violation
  tone_safety       -- fail (hard hit) / warn (warn-level hit) / pass
  intent_preserved  -- warn when a request or boundary lost its soft ask

The evaluator is a pure function: no I/O, no shared mutable state, and it
never raises for well-typed input. Rewritten text is never logged.

Known gap: new_fact has no detector; it can only appear if a future rule or
an upstream judge adds it.
"""

import logging
from typing import Any

from ..models import Intent, RewriteRequest, RewriteResponse
from ..security.context_minimizer import get_power_mode
from ..utils.text import safe_short
from .lexicon import (
    HARD_RULES,
    HEDGE_DENSITY_THRESHOLD,
    HEDGE_PATTERN,
    POWER_MODE_RULES,
    SARCASM_RULE,
    SOFT_REQUEST_MARKERS,
    LexiconRule,
)
from .models import EvalOptions, EvalResult, Verdict, Violation, ViolationCode

logger = logging.getLogger(__name__)

INTENTS_NEEDING_SOFT_ASK = (Intent.REQUEST, Intent.BOUNDARY)


def _check(rule: LexiconRule, text: str) -> Violation | None:
    match = rule.pattern.search(text)
    if not match:
        return None
    return Violation(
        code=rule.code,
        severity=rule.severity,
        message=rule.message,
        location=match.group(0),
    )


def hedge_density(text: str) -> float:
    """Hedge-word hits per whitespace-delimited token."""
    hits = len(HEDGE_PATTERN.findall(text))
    tokens = max(1, len(text.split()))
    return hits / tokens


def _intent_verdict(intent: str, text: str) -> str:
    if intent in INTENTS_NEEDING_SOFT_ASK and not SOFT_REQUEST_MARKERS.search(text):
        return Verdict.WARN
    return Verdict.PASS


def _ordered_codes(findings: list[Violation]) -> tuple[str, ...]:
    raised = {f.code for f in findings}
    return tuple(code for code in ViolationCode.ALL if code in raised)


def evaluate(
    request: RewriteRequest,
    response: RewriteResponse,
    context_pack: Any = None,
    options: EvalOptions | None = None,
) -> EvalResult:
    """
    Evaluate one rewritten message.

    Args:
        request: The original rewrite request (target locale, intent).
        response: The provider rewrite reassembled for a recipient.
        context_pack: JSON-like context; only power.power_mode is read
                      (unknown or missing counts as peer).
        options: judge / dataset version labels for the result.

    Returns:
        EvalResult with violations in taxonomy order.
    """
    options = options or EvalOptions()
    text = response.rewritten_text or ""
    findings: list[Violation] = []

    schema_valid = bool(
        response.rewrite_request_id and response.recipient_user_id and response.rewritten_text
    )

    output_language = (response.output_language or "").lower()
    if output_language != (request.target_locale or "").lower():
        findings.append(Violation(
            code=ViolationCode.NON_TARGET_LOCALE,
            severity="hard",
            message="Output language does not match the target locale",
            location=response.output_language or "",
        ))

    for rule in HARD_RULES:
        hit = _check(rule, text)
        if hit:
            findings.append(hit)

    sarcasm = _check(SARCASM_RULE, text)
    if sarcasm:
        findings.append(sarcasm)

    density = hedge_density(text)
    if density > HEDGE_DENSITY_THRESHOLD:
        findings.append(Violation(
            code=ViolationCode.HEDGE_WARN,
            severity="warn",
            message=f"Hedge density {density:.3f} above {HEDGE_DENSITY_THRESHOLD}",
        ))

    power_rule = POWER_MODE_RULES.get(get_power_mode(context_pack))
    if power_rule:
        hit = _check(power_rule, text)
        if hit:
            findings.append(hit)

    violations = _ordered_codes(findings)
    hard = any(code in ViolationCode.HARD for code in violations)
    warn = any(code in ViolationCode.WARN for code in violations)

    if hard:
        tone_safety = Verdict.FAIL
    elif warn:
        tone_safety = Verdict.WARN
    else:
        tone_safety = Verdict.PASS

    if violations:
        logger.debug(
            f"[Evaluator] {request.rewrite_request_id}: {len(findings)} finding(s), "
            f"codes={','.join(violations)}"
        )

    return EvalResult(
        schema_valid=schema_valid,
        lexicon_pass=not hard,
        tone_safety=tone_safety,
        intent_preserved=_intent_verdict(request.intent, text),
        violations=violations,
        judge_version=options.judge_version,
        dataset_version=options.dataset_version,
        findings=tuple(findings),
    )


def delivery_block_reason(result: EvalResult) -> str | None:
    """None when the rewrite may be delivered, else a bounded failure reason."""
    if result.is_deliverable:
        return None
    return "eval_failed:" + safe_short(",".join(result.violations))

"""
Rewrite enforcement -- deterministic safety verdicts for rewritten complaints.

Components:
  - lexicon: Precompiled rule table (hard, warn and power-mode rules)
  - evaluate: Applies the lexicon to a request/response pair, returns EvalResult
  - delivery_block_reason: Gate used before a rewrite is handed to delivery
"""

from .evaluator import delivery_block_reason, evaluate, hedge_density
from .models import EvalOptions, EvalResult, Verdict, Violation, ViolationCode

__all__ = [
    "EvalOptions",
    "EvalResult",
    "Verdict",
    "Violation",
    "ViolationCode",
    "delivery_block_reason",
    "evaluate",
    "hedge_density",
]

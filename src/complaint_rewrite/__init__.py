"""
complaint-rewrite -- softened, safety-checked rewrites of housemate complaints.

Pipeline:
  minimize_context_pack()  -- whitelist context signals before they leave the system
  build_batch_job_line()   -- one provider batch request record per rewrite job
  extract_rewritten_text() -- recover rewritten text from any provider response shape
  evaluate()               -- deterministic lexicon gate (pass / warn / fail)

The fixture harness replays provider outputs against versioned eval cases:
    complaint-rewrite eval outputs.jsonl
"""

from .enforcement import EvalOptions, EvalResult, ViolationCode, delivery_block_reason, evaluate
from .models import (
    BatchJobRecord,
    Intent,
    MinimizedSignals,
    PowerMode,
    RewriteInput,
    RewriteRequest,
    RewriteResponse,
)
from .provider import build_batch_job_line, extract_rewritten_text
from .security import minimize_context_pack

__version__ = "0.1.0"

__all__ = [
    "BatchJobRecord",
    "EvalOptions",
    "EvalResult",
    "Intent",
    "MinimizedSignals",
    "PowerMode",
    "RewriteInput",
    "RewriteRequest",
    "RewriteResponse",
    "ViolationCode",
    "build_batch_job_line",
    "delivery_block_reason",
    "evaluate",
    "extract_rewritten_text",
    "minimize_context_pack",
]

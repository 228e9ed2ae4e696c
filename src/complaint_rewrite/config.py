"""
Runtime configuration loaded from environment variables.

Configuration via environment:
  COMPLAINT_REWRITE_STRUCTURED_OUTPUT=1   (attach the JSON-schema output constraint)
  COMPLAINT_REWRITE_MINIMIZED_CONTEXT=1   (send minimized context signals)
  COMPLAINT_REWRITE_FIXTURES_DIR=evals/fixtures/eval_cases
  COMPLAINT_REWRITE_JUDGE_VERSION=v1
  COMPLAINT_REWRITE_DATASET_VERSION=v1
  COMPLAINT_REWRITE_LOG_LEVEL=WARNING
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FIXTURES_DIR = Path("evals/fixtures/eval_cases")
DEFAULT_JUDGE_VERSION = "v1"
DEFAULT_DATASET_VERSION = "v1"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag. Unrecognized values keep the default."""
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    if raw:
        logger.warning(f"[Config] Ignoring unrecognized value for {name}")
    return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


@dataclass(frozen=True)
class RewriteConfig:
    """Switches for provider request construction."""

    use_structured_output: bool = True
    use_minimized_context: bool = True

    @classmethod
    def from_env(cls) -> "RewriteConfig":
        return cls(
            use_structured_output=_env_flag("COMPLAINT_REWRITE_STRUCTURED_OUTPUT", True),
            use_minimized_context=_env_flag("COMPLAINT_REWRITE_MINIMIZED_CONTEXT", True),
        )


@dataclass(frozen=True)
class HarnessConfig:
    """Settings for the offline fixture harness and CLI."""

    fixtures_dir: Path = DEFAULT_FIXTURES_DIR
    judge_version: str = DEFAULT_JUDGE_VERSION
    dataset_version: str = DEFAULT_DATASET_VERSION
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        return cls(
            fixtures_dir=Path(_env_str("COMPLAINT_REWRITE_FIXTURES_DIR", str(DEFAULT_FIXTURES_DIR))),
            judge_version=_env_str("COMPLAINT_REWRITE_JUDGE_VERSION", DEFAULT_JUDGE_VERSION),
            dataset_version=_env_str("COMPLAINT_REWRITE_DATASET_VERSION", DEFAULT_DATASET_VERSION),
            log_level=_env_str("COMPLAINT_REWRITE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

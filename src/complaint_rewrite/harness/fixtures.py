"""
Fixture and provider-output models for the offline regression harness.

Parse at the boundary: fixture files and provider output batches are operator
input, so they are validated with pydantic as they are loaded. Any problem is
raised as FixtureRunError with the file (and line) that caused it.

Fixture file (one JSON object per file):
    {"case_id", "topic", "power_mode", "rewrite_strength", "source_locale",
     "target_locale", "original_text", "expected_intent",
     "expected_lexicon_violations"}

Provider outputs (JSONL, one object per line):
    {"case_id", "rewritten_text", "output_language", "recipient_user_id"?}
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..enforcement.models import ViolationCode
from ..errors import FixtureRunError
from ..models import Intent

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================


class Fixture(BaseModel):
    """A versioned eval case: an original message and the violations it should raise."""

    model_config = ConfigDict(frozen=True)

    case_id: str = Field(..., min_length=1)
    topic: str
    power_mode: str
    rewrite_strength: str
    source_locale: str
    target_locale: str
    original_text: str
    expected_intent: str
    expected_lexicon_violations: tuple[str, ...] = ()

    @field_validator("expected_intent")
    @classmethod
    def _known_intent(cls, value: str) -> str:
        if value not in Intent.ALL:
            raise ValueError(f"expected_intent must be one of: {', '.join(Intent.ALL)}")
        return value

    @field_validator("expected_lexicon_violations")
    @classmethod
    def _known_codes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = [code for code in value if code not in ViolationCode.ALL]
        if unknown:
            raise ValueError(f"unknown violation code(s): {', '.join(unknown)}")
        return value


class ProviderOutput(BaseModel):
    """One externally produced rewrite for a fixture case."""

    model_config = ConfigDict(frozen=True)

    case_id: str = Field(..., min_length=1)
    rewritten_text: str | None = ""
    output_language: str | None = ""
    recipient_user_id: str | None = None


# =============================================================================
# LOADERS
# =============================================================================


def load_fixtures(directory: Path) -> dict[str, Fixture]:
    """
    Load every *.json fixture in directory, keyed by case_id.

    Raises:
        FixtureRunError: Missing directory, no fixtures, unreadable or invalid
            file, or duplicate case_id.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FixtureRunError(f"Fixture directory not found: {directory}")

    fixtures: dict[str, Fixture] = {}
    for path in sorted(directory.glob("*.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise FixtureRunError(f"Cannot read fixture {path}: {e.strerror}") from e
        except UnicodeDecodeError as e:
            raise FixtureRunError(f"Fixture {path} is not valid UTF-8: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise FixtureRunError(f"Invalid JSON in fixture {path}: {e.msg}") from e
        except RecursionError as e:
            raise FixtureRunError(f"Invalid JSON in fixture {path}: nesting too deep") from e

        try:
            fixture = Fixture.model_validate(data)
        except ValidationError as e:
            raise FixtureRunError(f"Invalid fixture {path}: {e}") from e

        if fixture.case_id in fixtures:
            raise FixtureRunError(f"Duplicate case_id '{fixture.case_id}' in {path}")
        fixtures[fixture.case_id] = fixture

    if not fixtures:
        raise FixtureRunError(f"No fixtures found in {directory}")

    logger.info(f"[FixtureRunner] Loaded {len(fixtures)} fixture(s) from {directory}")
    return fixtures


def load_provider_outputs(path: Path) -> list[ProviderOutput]:
    """
    Load a provider-output JSONL file. Blank lines are skipped.

    Raises:
        FixtureRunError: Missing or unreadable file, or an invalid line.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FixtureRunError(f"Cannot read provider outputs {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise FixtureRunError(f"Provider outputs {path} are not valid UTF-8: {e.reason}") from e

    outputs = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            outputs.append(ProviderOutput.model_validate_json(line))
        except ValidationError as e:
            raise FixtureRunError(f"Invalid provider output at {path}:{line_no}: {e}") from e
    return outputs

"""
Fixture Runner -- replay provider outputs against versioned eval cases.

For every provider output:
  - unknown case_id  -> recorded as a diagnostic and skipped (the run goes on)
  - known case_id    -> evaluated with the fixture's locale, intent and power mode

A case matches when every expected violation was raised. Extra violations do
not fail the comparison: fixtures pin what must be caught, not everything
that may be caught.

Usage:
    runner = FixtureRunner.from_directory(Path("evals/fixtures/eval_cases"))
    report = runner.run(load_provider_outputs(Path("outputs.jsonl")))
    for line in report.to_jsonl_lines():
        print(line)
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..enforcement.evaluator import evaluate
from ..enforcement.models import EvalOptions, EvalResult
from ..models import RewriteRequest, RewriteResponse
from .fixtures import Fixture, ProviderOutput, load_fixtures

logger = logging.getLogger(__name__)

UNKNOWN_RECIPIENT = "unknown"


def matches_expected(expected: Iterable[str], raised: Iterable[str]) -> bool:
    """True when every expected code is among the raised codes."""
    return set(expected) <= set(raised)


@dataclass(frozen=True)
class CaseResult:
    """Report line for one evaluated case."""

    case_id: str
    eval_result: EvalResult
    expected_lexicon_violations: tuple[str, ...]
    matched_expected: bool

    @property
    def missing_violations(self) -> tuple[str, ...]:
        raised = set(self.eval_result.violations)
        return tuple(c for c in self.expected_lexicon_violations if c not in raised)

    def to_dict(self) -> dict[str, Any]:
        return {
            "case_id": self.case_id,
            "eval_result": self.eval_result.to_dict(),
            "expected_lexicon_violations": list(self.expected_lexicon_violations),
            "matched_expected": self.matched_expected,
        }


@dataclass
class FixtureRunReport:
    results: list[CaseResult] = field(default_factory=list)
    unknown_case_ids: list[str] = field(default_factory=list)

    @property
    def matched(self) -> int:
        return sum(1 for r in self.results if r.matched_expected)

    @property
    def mismatched(self) -> list[CaseResult]:
        return [r for r in self.results if not r.matched_expected]

    @property
    def all_matched(self) -> bool:
        return not self.mismatched

    def to_jsonl_lines(self) -> list[str]:
        return [json.dumps(r.to_dict(), ensure_ascii=False) for r in self.results]


class FixtureRunner:
    """Evaluates provider outputs against a fixed set of fixtures."""

    def __init__(
        self,
        fixtures: Mapping[str, Fixture],
        judge_version: str = "v1",
        dataset_version: str = "v1",
    ):
        self._fixtures = dict(fixtures)
        self._options = EvalOptions(judge_version=judge_version, dataset_version=dataset_version)

    @classmethod
    def from_directory(cls, directory: Path, **kwargs) -> "FixtureRunner":
        return cls(load_fixtures(directory), **kwargs)

    @property
    def fixtures(self) -> Mapping[str, Fixture]:
        return self._fixtures

    def evaluate_case(self, fixture: Fixture, output: ProviderOutput) -> CaseResult:
        request = RewriteRequest(
            rewrite_request_id=fixture.case_id,
            target_locale=fixture.target_locale,
            original_text=fixture.original_text,
            intent=fixture.expected_intent,
        )
        response = RewriteResponse(
            rewrite_request_id=fixture.case_id,
            recipient_user_id=output.recipient_user_id or UNKNOWN_RECIPIENT,
            rewritten_text=output.rewritten_text or "",
            output_language=output.output_language or "",
        )
        result = evaluate(
            request,
            response,
            {"power": {"power_mode": fixture.power_mode}},
            self._options,
        )
        return CaseResult(
            case_id=fixture.case_id,
            eval_result=result,
            expected_lexicon_violations=fixture.expected_lexicon_violations,
            matched_expected=matches_expected(fixture.expected_lexicon_violations, result.violations),
        )

    def run(self, outputs: Iterable[ProviderOutput]) -> FixtureRunReport:
        """Evaluate outputs in the order given."""
        report = FixtureRunReport()
        for output in outputs:
            fixture = self._fixtures.get(output.case_id)
            if fixture is None:
                logger.debug(f"[FixtureRunner] Unknown case_id {output.case_id}")
                report.unknown_case_ids.append(output.case_id)
                continue
            report.results.append(self.evaluate_case(fixture, output))

        logger.info(
            f"[FixtureRunner] {len(report.results)} case(s) evaluated, "
            f"{report.matched} matched, {len(report.unknown_case_ids)} unknown"
        )
        return report

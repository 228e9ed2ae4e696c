"""Eval test fixtures -- fixture directory, recorded provider outputs, runner."""

from pathlib import Path

import pytest

from complaint_rewrite.harness import FixtureRunner, load_provider_outputs

FIXTURES_ROOT = Path(__file__).parent / "fixtures"


@pytest.fixture
def eval_cases_dir():
    return FIXTURES_ROOT / "eval_cases"


@pytest.fixture
def recorded_outputs():
    """Provider outputs recorded for every eval case (dataset v1)."""
    return load_provider_outputs(FIXTURES_ROOT / "provider_outputs_v1.jsonl")


@pytest.fixture
def fixture_runner(eval_cases_dir):
    return FixtureRunner.from_directory(eval_cases_dir, judge_version="v1", dataset_version="v1")

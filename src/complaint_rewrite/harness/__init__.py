"""Offline regression harness -- fixtures, provider outputs, and the runner."""

from .fixture_runner import CaseResult, FixtureRunner, FixtureRunReport, matches_expected
from .fixtures import Fixture, ProviderOutput, load_fixtures, load_provider_outputs

"""Tests for environment-driven configuration."""

from pathlib import Path

from complaint_rewrite.config import HarnessConfig, RewriteConfig


class TestRewriteConfig:
    def test_defaults_on(self, monkeypatch):
        monkeypatch.delenv("COMPLAINT_REWRITE_STRUCTURED_OUTPUT", raising=False)
        monkeypatch.delenv("COMPLAINT_REWRITE_MINIMIZED_CONTEXT", raising=False)
        config = RewriteConfig.from_env()
        assert config.use_structured_output is True
        assert config.use_minimized_context is True

    def test_flags_can_be_disabled(self, monkeypatch):
        monkeypatch.setenv("COMPLAINT_REWRITE_STRUCTURED_OUTPUT", "false")
        monkeypatch.setenv("COMPLAINT_REWRITE_MINIMIZED_CONTEXT", "0")
        config = RewriteConfig.from_env()
        assert config.use_structured_output is False
        assert config.use_minimized_context is False

    def test_unrecognized_value_keeps_default(self, monkeypatch):
        monkeypatch.setenv("COMPLAINT_REWRITE_STRUCTURED_OUTPUT", "sometimes")
        assert RewriteConfig.from_env().use_structured_output is True


class TestHarnessConfig:
    def test_defaults(self, monkeypatch):
        for name in (
            "COMPLAINT_REWRITE_FIXTURES_DIR",
            "COMPLAINT_REWRITE_JUDGE_VERSION",
            "COMPLAINT_REWRITE_DATASET_VERSION",
            "COMPLAINT_REWRITE_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        config = HarnessConfig.from_env()
        assert config.fixtures_dir == Path("evals/fixtures/eval_cases")
        assert config.judge_version == "v1"
        assert config.dataset_version == "v1"
        assert config.log_level == "WARNING"

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COMPLAINT_REWRITE_FIXTURES_DIR", str(tmp_path))
        monkeypatch.setenv("COMPLAINT_REWRITE_DATASET_VERSION", "2025-01")
        monkeypatch.setenv("COMPLAINT_REWRITE_LOG_LEVEL", "debug")
        config = HarnessConfig.from_env()
        assert config.fixtures_dir == tmp_path
        assert config.dataset_version == "2025-01"
        assert config.log_level == "DEBUG"

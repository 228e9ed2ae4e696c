"""Tests for the deterministic safety evaluator."""

from complaint_rewrite.enforcement import (
    EvalOptions,
    delivery_block_reason,
    evaluate,
    hedge_density,
)

HIGHER_RECIPIENT = {"power": {"power_mode": "higher_recipient"}}
HIGHER_SENDER = {"power": {"power_mode": "higher_sender"}}


class TestHardRules:
    def test_clean_rewrite_passes(self, make_pair):
        result = evaluate(*make_pair("Could you please rinse the pans after dinner?"))
        assert result.schema_valid
        assert result.lexicon_pass
        assert result.tone_safety == "pass"
        assert result.intent_preserved == "pass"
        assert result.violations == ()

    def test_command_to_higher_recipient_is_authority(self, make_pair):
        result = evaluate(*make_pair("you must clean this immediately"), HIGHER_RECIPIENT)
        assert "authority" in result.violations
        assert result.lexicon_pass is False
        assert result.tone_safety == "fail"

    def test_urgency_only_flagged_for_higher_recipient(self, make_pair):
        pair = make_pair("Could you clean this immediately?")
        assert "authority" in evaluate(*pair, HIGHER_RECIPIENT).violations
        assert evaluate(*pair).violations == ()

    def test_rules_flagged_for_higher_sender(self, make_pair):
        pair = make_pair("Could we go over the kitchen rules together?")
        assert evaluate(*pair, HIGHER_SENDER).violations == ("authority",)
        assert evaluate(*pair, {"power": {"power_mode": "peer"}}).violations == ()

    def test_unknown_power_mode_counts_as_peer(self, make_pair):
        pair = make_pair("Could you clean this immediately?")
        assert evaluate(*pair, {"power": {"power_mode": "landlord"}}).violations == ()

    def test_each_hard_rule(self, make_pair):
        cases = {
            "vulgarity": "Please move your damn bike.",
            "slur": "Only an idiot leaves the door open.",
            "personal_attack": "You are being so lazy about the trash.",
            "preference_disclosure": "This message was tailored for you.",
            "medical": "That mess is honestly psychopath behaviour.",
            "blame": "It is your fault the sink is blocked.",
        }
        for code, text in cases.items():
            assert code in evaluate(*make_pair(text)).violations, code

    def test_locale_mismatch(self, make_pair):
        result = evaluate(*make_pair("Could you help?", target_locale="es", output_language="en"))
        assert result.violations == ("non_target_locale",)
        assert result.tone_safety == "fail"

    def test_locale_comparison_ignores_case(self, make_pair):
        result = evaluate(*make_pair("Could you help?", target_locale="pt-BR", output_language="pt-br"))
        assert "non_target_locale" not in result.violations

    def test_violations_deduplicated_in_taxonomy_order(self, make_pair):
        result = evaluate(
            *make_pair("You always leave it, damn, you must fix it now."),
            HIGHER_RECIPIENT,
        )
        assert result.violations == ("vulgarity", "authority", "blame")
        assert len(result.findings) == 4


class TestWarnRules:
    def test_sarcasm_warns(self, make_pair):
        result = evaluate(*make_pair("Yeah right, could you do the dishes for once?"))
        assert result.violations == ("sarcasm_warn",)
        assert result.lexicon_pass
        assert result.tone_safety == "warn"

    def test_hedge_at_one_percent_does_not_warn(self, make_pair):
        text = "maybe " + " ".join(["word"] * 99)
        assert hedge_density(text) == 0.01
        assert "hedge_warn" not in evaluate(*make_pair(text, intent="concern")).violations

    def test_hedge_above_one_percent_warns(self, make_pair):
        text = "maybe " + " ".join(["word"] * 98)
        assert "hedge_warn" in evaluate(*make_pair(text, intent="concern")).violations

    def test_hedge_words_are_whole_words(self):
        assert hedge_density("mayberry perhapsish") == 0

    def test_warn_does_not_block_delivery(self, make_pair):
        result = evaluate(*make_pair("Perhaps we could talk?", intent="clarification"))
        assert result.tone_safety == "warn"
        assert delivery_block_reason(result) is None


class TestSchemaAndIntent:
    def test_empty_text_is_schema_invalid(self, make_pair):
        result = evaluate(*make_pair(""))
        assert result.schema_valid is False

    def test_request_without_soft_ask_warns(self, make_pair):
        result = evaluate(*make_pair("The dishes are piling up again."))
        assert result.intent_preserved == "warn"

    def test_concern_needs_no_soft_ask(self, make_pair):
        result = evaluate(*make_pair("The dishes are piling up again.", intent="concern"))
        assert result.intent_preserved == "pass"

    def test_soft_markers(self, make_pair):
        for text in ("Let's sort the fridge out.", "Would it be ok to swap days?", "Can you help?"):
            assert evaluate(*make_pair(text, intent="boundary")).intent_preserved == "pass", text


class TestResultLabelsAndGate:
    def test_default_labels(self, make_pair):
        result = evaluate(*make_pair("Could you help?"))
        assert result.judge_version == "v1"
        assert result.dataset_version == "none"

    def test_custom_labels(self, make_pair):
        options = EvalOptions(judge_version="v2", dataset_version="2024-06")
        result = evaluate(*make_pair("Could you help?"), None, options)
        assert result.to_dict()["judge_version"] == "v2"
        assert result.to_dict()["dataset_version"] == "2024-06"

    def test_block_reason_lists_codes(self, make_pair):
        result = evaluate(*make_pair("Damn, you never help."))
        assert delivery_block_reason(result) == "eval_failed:vulgarity,blame"

    def test_same_input_same_result(self, make_pair):
        pair = make_pair("You must stop, yeah right.")
        assert evaluate(*pair, HIGHER_SENDER) == evaluate(*pair, HIGHER_SENDER)

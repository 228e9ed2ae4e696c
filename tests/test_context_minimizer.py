"""Tests for the context minimizer and power-mode readers."""

from complaint_rewrite.security import (
    MAX_PREFERENCE_SIGNALS,
    get_power_mode,
    minimize_context_pack,
    read_power_mode,
)


class TestMinimizeContextPack:
    def test_only_whitelisted_fields_survive(self, context_pack):
        out = minimize_context_pack(context_pack, None).to_dict()
        assert set(out) == {"power_mode", "tone_hints", "policy_hints", "preference_signals"}
        assert "12 Elm Street" not in str(out)
        assert "Ana" not in str(out)

    def test_defaults_for_missing_input(self):
        out = minimize_context_pack(None, None).to_dict()
        assert out == {
            "tone_hints": {"directness": "soft", "warmth": "gentle", "brevity": "concise"},
            "policy_hints": {
                "avoid_commands": True,
                "avoid_blame": True,
                "avoid_rules": True,
                "no_new_facts": True,
            },
        }

    def test_unknown_power_mode_is_omitted(self):
        out = minimize_context_pack({"power": {"power_mode": "boss"}}, None).to_dict()
        assert "power_mode" not in out

    def test_known_power_mode_is_kept(self):
        signals = minimize_context_pack({"power": {"power_mode": "higher_sender"}}, None)
        assert signals.power_mode == "higher_sender"

    def test_preference_signals_capped_at_eight(self):
        pack = {"preference_signals": [{"key": f"k{i}", "value": f"v{i}"} for i in range(20)]}
        signals = minimize_context_pack(pack, None).preference_signals
        assert len(signals) == MAX_PREFERENCE_SIGNALS
        assert signals[0].key == "k0"
        assert signals[-1].key == "k7"

    def test_cap_applies_before_filtering(self):
        raw = [{"key": "", "value": "x"}] * 8 + [{"key": "late", "value": "kept?"}]
        assert minimize_context_pack({"preference_signals": raw}, None).preference_signals == ()

    def test_signals_trimmed_and_bounded(self):
        raw = [
            {"key": "  contact ", "value": " text first  "},
            {"key": "k" * 33, "value": "too long key"},
            {"key": "note", "value": "v" * 33},
            {"key": "exact", "value": "v" * 32},
            {"key": "   ", "value": "blank key"},
            {"key": 7, "value": "not a string"},
            "not a mapping",
        ]
        signals = minimize_context_pack({"preference_signals": raw}, None).preference_signals
        assert [(s.key, s.value) for s in signals] == [("contact", "text first"), ("exact", "v" * 32)]

    def test_non_list_signals_ignored(self):
        signals = minimize_context_pack({"preference_signals": {"key": "a", "value": "b"}}, None)
        assert signals.preference_signals == ()
        assert "preference_signals" not in signals.to_dict()

    def test_policy_neutral_values(self):
        hints = minimize_context_pack(None, {"directness": "neutral", "tone": "neutral"}).tone_hints
        assert hints.directness == "neutral"
        assert hints.warmth == "neutral"
        assert hints.brevity == "concise"

    def test_policy_unknown_values_fall_back(self):
        hints = minimize_context_pack(None, {"directness": "blunt", "tone": ["x"]}).tone_hints
        assert hints.directness == "soft"
        assert hints.warmth == "gentle"

    def test_malformed_context_never_raises(self):
        for pack in ("string", 42, [], {"power": "peer"}, {"power": {"power_mode": 3}}):
            signals = minimize_context_pack(pack, "policy")
            assert signals.power_mode is None


class TestPowerMode:
    def test_read_returns_none_for_unknown(self):
        assert read_power_mode({"power": {"power_mode": "admin"}}) is None

    def test_get_defaults_to_peer(self):
        assert get_power_mode(None) == "peer"
        assert get_power_mode({"power": {"power_mode": "admin"}}) == "peer"

    def test_get_returns_known_value(self):
        assert get_power_mode({"power": {"power_mode": "higher_recipient"}}) == "higher_recipient"

"""
Context Minimizer -- reduce a context pack to the signals a provider may see.

The context pack holds household preference data that can identify people.
Only a whitelisted, size-bounded projection crosses the provider boundary:

  power_mode          -- copied only when it is one of the known values
  tone_hints          -- soft / gentle / concise unless policy picks "neutral"
  policy_hints        -- constant, all true
  preference_signals  -- first 8 entries, trimmed, each side <= 32 chars

Deny by default: fields not listed above are dropped, so new upstream fields
never leak by accident. Malformed input degrades to defaults and never raises;
nothing from the input is written to logs or error messages.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..models import MinimizedSignals, PowerMode, PreferenceSignal, ToneHints

logger = logging.getLogger(__name__)

MAX_PREFERENCE_SIGNALS = 8
MAX_SIGNAL_FIELD_LENGTH = 32

DIRECTNESS_VALUES = ("soft", "neutral")
WARMTH_VALUES = ("gentle", "neutral")


def read_power_mode(context_pack: Any) -> str | None:
    """Return context_pack.power.power_mode when it is a known value, else None."""
    if not isinstance(context_pack, Mapping):
        return None
    power = context_pack.get("power")
    if not isinstance(power, Mapping):
        return None
    mode = power.get("power_mode")
    if isinstance(mode, str) and mode in PowerMode.ALL:
        return mode
    return None


def get_power_mode(context_pack: Any) -> str:
    """Like read_power_mode(), but unknown or missing values count as peer."""
    return read_power_mode(context_pack) or PowerMode.PEER


def _clean_preference_signals(raw: Any) -> tuple[PreferenceSignal, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()

    cleaned = []
    for entry in raw[:MAX_PREFERENCE_SIGNALS]:
        if not isinstance(entry, Mapping):
            continue
        key = entry.get("key")
        value = entry.get("value")
        key = key.strip() if isinstance(key, str) else ""
        value = value.strip() if isinstance(value, str) else ""
        if not key or not value:
            continue
        if len(key) > MAX_SIGNAL_FIELD_LENGTH or len(value) > MAX_SIGNAL_FIELD_LENGTH:
            continue
        cleaned.append(PreferenceSignal(key=key, value=value))
    return tuple(cleaned)


def _tone_hints(policy: Any) -> ToneHints:
    if not isinstance(policy, Mapping):
        return ToneHints()

    directness = policy.get("directness")
    tone = policy.get("tone")
    return ToneHints(
        directness=directness if directness in DIRECTNESS_VALUES else "soft",
        warmth=tone if tone in WARMTH_VALUES else "gentle",
    )


def minimize_context_pack(context_pack: Any, policy: Any) -> MinimizedSignals:
    """
    Project a context pack and rewrite policy onto the provider-safe signal set.

    Args:
        context_pack: Untrusted JSON-like mapping (may be None or malformed).
        policy: Untrusted JSON-like mapping with optional directness / tone.

    Returns:
        MinimizedSignals; never raises.
    """
    preference_signals: tuple[PreferenceSignal, ...] = ()
    if isinstance(context_pack, Mapping):
        preference_signals = _clean_preference_signals(context_pack.get("preference_signals"))

    signals = MinimizedSignals(
        power_mode=read_power_mode(context_pack),
        tone_hints=_tone_hints(policy),
        preference_signals=preference_signals,
    )

    logger.debug(
        f"[Minimizer] power_mode={'set' if signals.power_mode else 'omitted'}, "
        f"{len(signals.preference_signals)} preference signal(s) kept"
    )
    return signals

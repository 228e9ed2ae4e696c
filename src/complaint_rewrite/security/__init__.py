"""Privacy and prompt-safety helpers applied before anything reaches a provider."""
from .context_minimizer import (
    MAX_PREFERENCE_SIGNALS,
    MAX_SIGNAL_FIELD_LENGTH,
    get_power_mode,
    minimize_context_pack,
    read_power_mode,
)
from .prompt_guard import detect_injection_attempt

"""Exception types for operator-facing failures.

Malformed provider or context data never raises -- it degrades silently.
These exceptions are reserved for usage errors an operator has to fix
(missing files, broken fixtures, unparseable batch lines).
"""

from .utils.text import truncate_reason

MAX_DETAIL_LENGTH = 200


class ComplaintRewriteError(Exception):
    """Base class for all operator-facing errors."""

    pass


class FixtureRunError(ComplaintRewriteError):
    """Raised when fixtures or provider outputs cannot be loaded."""

    pass


class BatchLineError(ComplaintRewriteError):
    """Raised when a provider batch output line cannot be used.

    Attributes:
        reason: Short machine-readable code (e.g. "invalid_custom_id_uuid").
        detail: Free-form context, cut to MAX_DETAIL_LENGTH graphemes.
    """

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = truncate_reason(detail, MAX_DETAIL_LENGTH)
        super().__init__(f"{reason}: {self.detail}" if self.detail else reason)

"""Small text helpers shared by the batch and harness layers."""
from .text import ELLIPSIS, safe_short, truncate, truncate_reason

"""
Batch output parsing -- turn provider output JSONL back into per-job results.

Each output line looks like:
    {"custom_id": "<job uuid>", "response": {"body": {...}}, "error": null}

custom_id must be the UUID the request builder was given; lines with any
other value cannot be matched to a job and are rejected.
"""

import json
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import BatchLineError
from ..utils.text import safe_short
from .response_extractor import extract_rewritten_text

logger = logging.getLogger(__name__)

MAX_JSONL_LINE_CHARS = 2_000_000

_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class BatchStatus:
    """Normalized provider batch states."""

    SUBMITTED = "submitted"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"


def is_uuid(value: str) -> bool:
    return bool(_UUID.match(value))


def map_provider_status(status: str | None) -> str:
    """Map a provider batch status (validating, in_progress, ...) to a BatchStatus."""
    s = str(status or "").lower()
    if s == "completed":
        return BatchStatus.COMPLETED
    if s == "failed":
        return BatchStatus.FAILED
    if s in ("canceled", "cancelled"):
        return BatchStatus.CANCELED
    return BatchStatus.RUNNING


@dataclass(frozen=True)
class BatchOutputItem:
    """One parsed output line."""

    custom_id: str
    body: Any = None
    error: Any = None

    @property
    def has_error(self) -> bool:
        return bool(self.error)

    @property
    def error_summary(self) -> str:
        return f"provider_item_error:{safe_short(self.error)}" if self.error else ""

    @property
    def rewritten_text(self) -> str:
        if self.error:
            return ""
        return extract_rewritten_text(self.body)


def parse_batch_output_line(line: str) -> BatchOutputItem:
    """
    Parse one provider output line.

    Raises:
        BatchLineError: jsonl_line_too_large, invalid_jsonl_line or
            invalid_custom_id_uuid.
    """
    if len(line) > MAX_JSONL_LINE_CHARS:
        raise BatchLineError("jsonl_line_too_large", f"{len(line)} chars")

    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise BatchLineError("invalid_jsonl_line", e.msg) from e
    except RecursionError as e:
        raise BatchLineError("invalid_jsonl_line", "nesting too deep") from e

    if not isinstance(data, Mapping):
        raise BatchLineError("invalid_jsonl_line", "expected a JSON object")

    custom_id = str(data.get("custom_id") or "").strip()
    if not is_uuid(custom_id):
        raise BatchLineError("invalid_custom_id_uuid")

    response = data.get("response")
    body = response.get("body") if isinstance(response, Mapping) else None
    return BatchOutputItem(custom_id=custom_id, body=body, error=data.get("error"))


def iter_batch_output(
    text: str,
) -> Iterator[tuple[BatchOutputItem | None, BatchLineError | None]]:
    """Yield (item, None) or (None, error) for every non-blank line of a batch output file."""
    for line_no, raw in enumerate(text.split("\n"), 1):
        line = raw.strip()
        if not line:
            continue
        try:
            yield parse_batch_output_line(line), None
        except BatchLineError as e:
            logger.warning(f"[BatchOutput] Line {line_no} rejected: {e.reason}")
            yield None, e

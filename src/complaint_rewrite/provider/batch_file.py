"""
Batch file assembly -- pack request records into one JSONL upload.

Caps are measured in UTF-8 bytes, the unit the provider enforces:
  MAX_JSONL_LINE_BYTES  -- a single oversized line is skipped
  MAX_JSONL_BYTES       -- once the file is full, remaining jobs are deferred

A record whose custom_id drifted from the job id it was built for is skipped;
its output could never be matched back to the job.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models import BatchJobRecord
from ..utils.text import truncate

logger = logging.getLogger(__name__)

MAX_JSONL_BYTES = 5_000_000
MAX_JSONL_LINE_BYTES = 100_000

REASON_CUSTOM_ID_MISMATCH = "batch_custom_id_mismatch"
REASON_BATCH_FULL = "batch_full_deferred"


@dataclass(frozen=True)
class SkippedJob:
    job_id: str
    reason: str


@dataclass(frozen=True)
class BatchFile:
    """Accepted lines (in input order) plus every job that did not make it."""

    lines: tuple[str, ...] = ()
    job_ids: tuple[str, ...] = ()
    skipped: tuple[SkippedJob, ...] = ()
    deferred: tuple[SkippedJob, ...] = ()
    total_bytes: int = 0

    @property
    def jsonl(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def assemble_batch_file(
    entries: Iterable[tuple[str, BatchJobRecord]],
    max_bytes: int = MAX_JSONL_BYTES,
    max_line_bytes: int = MAX_JSONL_LINE_BYTES,
) -> BatchFile:
    """
    Serialize (job_id, record) pairs into a size-capped JSONL batch file.

    Args:
        entries: Job ids paired with the record built for them.
        max_bytes: Cap for the whole file, newlines included.
        max_line_bytes: Cap for a single line.

    Returns:
        BatchFile with accepted lines, skipped jobs and deferred jobs.
    """
    lines: list[str] = []
    job_ids: list[str] = []
    skipped: list[SkippedJob] = []
    deferred: list[SkippedJob] = []
    total = 0

    for job_id, record in entries:
        if record.custom_id != job_id:
            skipped.append(SkippedJob(job_id, REASON_CUSTOM_ID_MISMATCH))
            continue

        line = record.to_jsonl_line()
        line_bytes = len(line.encode("utf-8"))
        if line_bytes > max_line_bytes:
            skipped.append(SkippedJob(job_id, f"batch_line_too_large_{line_bytes}"))
            continue

        newline_bytes = 1 if lines else 0
        if total + newline_bytes + line_bytes > max_bytes:
            deferred.append(SkippedJob(job_id, REASON_BATCH_FULL))
            continue

        lines.append(line)
        job_ids.append(job_id)
        total += newline_bytes + line_bytes

    if skipped or deferred:
        reasons = ", ".join(sorted({s.reason for s in skipped + deferred}))
        logger.info(
            f"[BatchFile] {len(lines)} accepted, {len(skipped)} skipped, "
            f"{len(deferred)} deferred ({truncate(reasons, 120)})"
        )

    return BatchFile(
        lines=tuple(lines),
        job_ids=tuple(job_ids),
        skipped=tuple(skipped),
        deferred=tuple(deferred),
        total_bytes=total,
    )

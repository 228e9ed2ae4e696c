"""
Provider boundary -- batch request construction and response parsing.

Transport (file upload, batch creation, polling, retries) lives outside this
package; everything here is a pure transform over already-fetched data.
"""

from .batch_file import BatchFile, SkippedJob, assemble_batch_file
from .batch_output import (
    BatchOutputItem,
    BatchStatus,
    iter_batch_output,
    map_provider_status,
    parse_batch_output_line,
)
from .request_builder import (
    BATCH_ENDPOINT,
    REWRITE_JSON_SCHEMA,
    build_batch_job_line,
    build_system_prompt,
    build_user_payload,
    resolve_routing,
)
from .response_extractor import clean_output, extract_free_text, extract_rewritten_text

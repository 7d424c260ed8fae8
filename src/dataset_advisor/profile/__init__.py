"""Profile stage.

Turns an uploaded CSV into a DatasetSnapshot: per-column type, unique and
missing counts, numeric means, sample values and the first few rows.
"""

from .csv_profiler import (
    NULL_TOKENS,
    infer_column_type,
    is_non_null,
    parse_number,
    profile_csv_bytes,
    profile_csv_file,
    profile_csv_text,
)
from .summarize import snapshot_to_frame, snapshot_to_json, snapshot_to_payload

__all__ = [
    "NULL_TOKENS",
    "infer_column_type",
    "is_non_null",
    "parse_number",
    "profile_csv_bytes",
    "profile_csv_file",
    "profile_csv_text",
    "snapshot_to_frame",
    "snapshot_to_json",
    "snapshot_to_payload",
]

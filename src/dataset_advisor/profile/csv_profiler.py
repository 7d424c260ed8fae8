from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Optional, Sequence

from ..errors import ParseError
from ..models import (
    CategoricalColumn,
    Column,
    ColumnStats,
    ColumnType,
    DatasetSnapshot,
    NumericColumn,
    NumericStats,
    Row,
    TextColumn,
    UnknownColumn,
)

logger = logging.getLogger(__name__)

# Exact, case-sensitive tokens treated as missing. Not a general null scheme.
NULL_TOKENS = frozenset({"", "NaN", "null"})

TEXT_MIN_LENGTH = 100
MAX_SAMPLE_VALUES = 10
MAX_SAMPLE_ROWS = 5

# Plain decimal literals only: "3", "-2", "4.5", ".5", "1e5". No hex, no
# underscores, no inf/nan spellings, no thousands separators.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_non_null(value: Optional[str]) -> bool:
    """A field counts as present unless it is absent, empty, "NaN" or "null"."""
    return value is not None and value not in NULL_TOKENS


def parse_number(value: str) -> Optional[float]:
    """Return the float value of a decimal literal, or None if it is not one."""
    s = value.strip()
    if not _NUMBER_RE.fullmatch(s):
        return None
    return float(s)


def infer_column_type(non_null: Sequence[str]) -> ColumnType:
    """
    Classify a column from its non-null values, in precedence order:
    numeric, then text, then categorical. An empty column is UNKNOWN.
    """
    if not non_null:
        return ColumnType.UNKNOWN
    if all(parse_number(v) is not None for v in non_null):
        return ColumnType.NUMERIC
    if len(non_null[0]) > TEXT_MIN_LENGTH:
        return ColumnType.TEXT
    return ColumnType.CATEGORICAL


def _split_fields(line: str) -> list[str]:
    # No quote handling: a comma inside quotes still splits the field.
    return [f.strip() for f in line.split(",")]


def _align(fields: list[str], width: int) -> Row:
    """Pad short rows with None and drop fields beyond the header."""
    if len(fields) >= width:
        return tuple(fields[:width])
    return tuple(fields) + (None,) * (width - len(fields))


def profile_column(name: str, values: Sequence[Optional[str]], row_count: int) -> Column:
    non_null = [v for v in values if is_non_null(v)]
    column_type = infer_column_type(non_null)

    unique_count = len(set(non_null))
    missing_count = row_count - len(non_null)
    sample_values = tuple(non_null[:MAX_SAMPLE_VALUES])

    logger.debug(
        "profiled column %r: type=%s non_null=%d unique=%d",
        name, column_type.value, len(non_null), unique_count,
    )

    if column_type is ColumnType.NUMERIC:
        # non_null is never empty here; UNKNOWN covers the empty case.
        # Plain float arithmetic: overflow and "1e400" literals give inf/nan
        # instead of raising. An overflowing sum is retried pre-scaled.
        numbers = [float(v) for v in non_null]
        total = sum(numbers)
        mean: Optional[float] = total / len(numbers)
        if not math.isfinite(total):
            mean = sum(x / len(numbers) for x in numbers)
        if not math.isfinite(mean):
            logger.info("column %r: mean is not finite, stored as None", name)
            mean = None
        return NumericColumn(
            name=name,
            sample_values=sample_values,
            stats=NumericStats(unique_count=unique_count, missing_count=missing_count, mean=mean),
        )

    stats = ColumnStats(unique_count=unique_count, missing_count=missing_count)
    if column_type is ColumnType.TEXT:
        return TextColumn(name=name, sample_values=sample_values, stats=stats)
    if column_type is ColumnType.CATEGORICAL:
        return CategoricalColumn(name=name, sample_values=sample_values, stats=stats)
    return UnknownColumn(name=name, sample_values=sample_values, stats=stats)


def profile_csv_text(text: str, *, source_name: Optional[str] = None) -> DatasetSnapshot:
    """
    Profile raw CSV text into a DatasetSnapshot.

    Rules:
    - Lines that are empty or whitespace-only are ignored everywhere.
    - The first remaining line is the header; every later line is one row.
    - Fields are split on "," and trimmed. Quoted fields are NOT supported.
    - Header-only input is valid: row_count == 0 and every column is UNKNOWN.

    Raises ParseError("empty file") when no lines remain. All-or-nothing:
    nothing is returned on failure.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise ParseError("empty file")

    header = tuple(_split_fields(lines[0]))
    width = len(header)
    rows = [_align(_split_fields(line), width) for line in lines[1:]]
    row_count = len(rows)

    columns = tuple(
        profile_column(name, [row[i] for row in rows], row_count)
        for i, name in enumerate(header)
    )

    snapshot = DatasetSnapshot(
        header=header,
        columns=columns,
        row_count=row_count,
        sample_rows=tuple(rows[:MAX_SAMPLE_ROWS]),
        source_name=source_name,
    )
    logger.info(
        "profiled %s: %d rows x %d columns",
        source_name or "<text>", row_count, width,
    )
    return snapshot


def profile_csv_bytes(data: bytes, *, source_name: Optional[str] = None) -> DatasetSnapshot:
    """Decode an upload (UTF-8, BOM tolerated) and profile it."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError("Failed to parse file. Ensure it is a valid UTF-8 CSV.") from e
    return profile_csv_text(text, source_name=source_name)


def profile_csv_file(path: Path) -> DatasetSnapshot:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Could not read {path.name}: {e.strerror or e}") from e
    return profile_csv_bytes(data, source_name=path.name)

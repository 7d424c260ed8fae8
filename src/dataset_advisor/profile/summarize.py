from __future__ import annotations

import json
from typing import Any

import pandas as pd

from ..models import ColumnType, DatasetSnapshot


def missing_fraction(missing_count: int, row_count: int) -> float:
    return missing_count / row_count if row_count else 0.0


def snapshot_to_payload(snapshot: DatasetSnapshot) -> dict[str, Any]:
    """
    The only dataset context sent to the model: column metadata, row count
    and the first few rows. Uses the camelCase wire keys.
    """
    return {
        "columns": [
            c.model_dump(mode="json", by_alias=True, exclude_none=True)
            for c in snapshot.columns
        ],
        "rowCount": snapshot.row_count,
        "sampleRows": snapshot.sample_records(),
    }


def snapshot_to_json(snapshot: DatasetSnapshot) -> str:
    return json.dumps(snapshot_to_payload(snapshot), indent=2, ensure_ascii=False)


def snapshot_to_frame(snapshot: DatasetSnapshot) -> pd.DataFrame:
    """One row per column, in header order. Used by the CLI table and the dashboard."""
    records = []
    for c in snapshot.columns:
        mean = getattr(c.stats, "mean", None) if c.type == ColumnType.NUMERIC else None
        records.append(
            {
                "column": c.name,
                "type": c.type,
                "unique": c.stats.unique_count,
                "missing": c.stats.missing_count,
                "missing_pct": round(100 * missing_fraction(c.stats.missing_count, snapshot.row_count), 1),
                "mean": mean,
                "samples": ", ".join(c.sample_values[:5]),
            }
        )
    return pd.DataFrame.from_records(
        records,
        columns=["column", "type", "unique", "missing", "missing_pct", "mean", "samples"],
    )


def sample_rows_frame(snapshot: DatasetSnapshot) -> pd.DataFrame:
    # Duplicate header names collapse (last wins), same as the records view.
    return pd.DataFrame.from_records(snapshot.sample_records())

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ColumnType(str, Enum):
    """
    Closed set of inferred column types.

    - NUMERIC: every non-null value is a decimal literal
    - TEXT: free text (first non-null value longer than 100 characters)
    - CATEGORICAL: anything else with at least one non-null value
    - UNKNOWN: no non-null values at all
    """
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    TEXT = "text"
    UNKNOWN = "unknown"


class _Frozen(BaseModel):
    # camelCase aliases match the shape the analysis prompt has always used.
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ColumnStats(_Frozen):
    unique_count: int = 0
    missing_count: int = 0


class NumericStats(ColumnStats):
    """Only numeric columns carry a mean. None when there is nothing to average."""
    mean: Optional[float] = None


class _ColumnBase(_Frozen):
    name: str
    sample_values: tuple[str, ...] = ()


class NumericColumn(_ColumnBase):
    type: Literal["numeric"] = "numeric"
    stats: NumericStats = Field(default_factory=NumericStats)


class CategoricalColumn(_ColumnBase):
    type: Literal["categorical"] = "categorical"
    stats: ColumnStats = Field(default_factory=ColumnStats)


class TextColumn(_ColumnBase):
    type: Literal["text"] = "text"
    stats: ColumnStats = Field(default_factory=ColumnStats)


class UnknownColumn(_ColumnBase):
    type: Literal["unknown"] = "unknown"
    stats: ColumnStats = Field(default_factory=ColumnStats)


Column = Annotated[
    Union[NumericColumn, CategoricalColumn, TextColumn, UnknownColumn],
    Field(discriminator="type"),
]

# One data line, aligned to the header. None marks a field the line did not have.
Row = tuple[Optional[str], ...]


class DatasetSnapshot(_Frozen):
    """
    Complete profiling result for one uploaded file.

    Replaced wholesale on re-upload, never mutated in place.
    """
    header: tuple[str, ...]
    columns: tuple[Column, ...]
    row_count: int
    sample_rows: tuple[Row, ...] = ()
    source_name: Optional[str] = None

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(f"No column named '{name}'")

    def sample_records(self) -> list[dict[str, Optional[str]]]:
        """Name-indexed view of sample_rows, for display and prompt context only."""
        return [dict(zip(self.header, row)) for row in self.sample_rows]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class ProcessingState(BaseModel):
    """Where the session is in the upload -> analyze flow."""
    model_config = ConfigDict(frozen=True)

    status: Literal["idle", "parsing", "analyzing", "completed", "error"] = "idle"
    progress: int = Field(default=0, ge=0, le=100)
    error: Optional[str] = None

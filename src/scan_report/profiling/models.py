"""
Data model for the scan engine.

Raw cells come in as text; the type detector turns each column into a
TypedColumn whose type tag is fixed from then on. Summaries and reports
are plain dataclasses so the reporting layer never touches pandas objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


class ColumnType(Enum):
    """Inferred column types."""
    TEXT = "Text"
    NUMBER = "Number"
    TEMPORAL = "Temporal"


# Ordered column name -> object Series of str cells (None/NaN = missing)
RawTable = Dict[str, pd.Series]


@dataclass
class TypedColumn:
    """
    A column after type detection.

    ``missing_mask`` marks cells absent in the source or that failed to
    coerce under ``column_type``; ``empty_mask`` marks cells that were
    zero-length text in the source. Both are measured against the raw text
    and carried unchanged through later stages.
    """
    name: str
    column_type: ColumnType
    values: pd.Series
    missing_mask: np.ndarray
    empty_mask: np.ndarray
    has_time: bool = False

    def __len__(self) -> int:
        return len(self.values)

    @property
    def valid_mask(self) -> np.ndarray:
        """Cells holding a usable value (neither missing nor empty)."""
        return ~(self.missing_mask | self.empty_mask)


@dataclass(frozen=True)
class FrequencyEntry:
    """One row of a column's frequency table."""
    column: str
    value: str
    count: int
    fraction: float


@dataclass(frozen=True)
class NumericStats:
    """Descriptive statistics for Number columns."""
    min: float
    max: float
    median: float
    mean: float
    stddev: Optional[float]
    q1: float
    q3: float
    iqr: float


@dataclass(frozen=True)
class TemporalStats:
    """Descriptive statistics for Temporal columns."""
    earliest: pd.Timestamp
    latest: pd.Timestamp
    median: pd.Timestamp


@dataclass(frozen=True)
class ColumnSummary:
    """Per-column result; stat blocks are None unless the type matches."""
    name: str
    column_type: ColumnType
    missing_count: int = 0
    empty_count: int = 0
    distinct_count: int = 0
    numeric_stats: Optional[NumericStats] = None
    temporal_stats: Optional[TemporalStats] = None
    error: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.error is not None


@dataclass
class FileReport:
    """Everything learned about one input file."""
    file_path: str
    file_name: str
    total_rows: int
    rows_examined: int
    field_count: int
    empty_field_count: int
    columns: List[ColumnSummary] = field(default_factory=list)
    frequencies: List[FrequencyEntry] = field(default_factory=list)

    def overview(self) -> Dict[str, Any]:
        """Row for the run-level overview sheet."""
        return {
            'file_name': self.file_name,
            'total_rows': self.total_rows,
            'rows_examined': self.rows_examined,
            'field_count': self.field_count,
            'empty_field_count': self.empty_field_count,
        }

    def frequencies_for(self, column: str) -> List[FrequencyEntry]:
        return [entry for entry in self.frequencies if entry.column == column]

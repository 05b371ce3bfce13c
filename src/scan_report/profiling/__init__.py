"""Type inference and column profiling engine."""

from .models import (
    ColumnType,
    TypedColumn,
    FrequencyEntry,
    NumericStats,
    TemporalStats,
    ColumnSummary,
    FileReport,
)
from .row_sampler import ReadMode, RowPlan, plan_rows, sample_row_indices
from .type_detector import DetectionState, TypeDetector
from .date_anonymizer import shift_column, shift_dates
from .column_summarizer import summarize_column
from .profiler import FileProfiler, profile_file

__all__ = [
    'ColumnType',
    'TypedColumn',
    'FrequencyEntry',
    'NumericStats',
    'TemporalStats',
    'ColumnSummary',
    'FileReport',
    'ReadMode',
    'RowPlan',
    'plan_rows',
    'sample_row_indices',
    'DetectionState',
    'TypeDetector',
    'shift_column',
    'shift_dates',
    'summarize_column',
    'FileProfiler',
    'profile_file',
]

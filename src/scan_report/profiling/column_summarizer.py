"""
Per-column statistics and frequency tables.

Reads a TypedColumn and produces an immutable ColumnSummary plus the
column's frequency entries. Nothing here mutates the column, so summarizing
the same column twice gives the same result.
"""

from collections import Counter
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from .models import (
    ColumnSummary,
    ColumnType,
    FrequencyEntry,
    NumericStats,
    TemporalStats,
    TypedColumn,
)
from ..utils.logger import get_logger

logger = get_logger('column_summarizer')


def summarize_column(
    column: TypedColumn,
    max_distinct_values: int = 1000,
    min_cell_count: int = 5
) -> Tuple[ColumnSummary, List[FrequencyEntry]]:
    """
    Summarize one typed column.

    Args:
        column: Column after type detection (and optional date shifting)
        max_distinct_values: Maximum frequency entries kept
        min_cell_count: Minimum occurrences for a value to be listed

    Returns:
        Tuple of (ColumnSummary, frequency entries sorted by count descending)
    """
    valid = column.values[column.valid_mask]
    counts = Counter(valid.tolist())

    numeric = None
    temporal = None
    if column.column_type is ColumnType.NUMBER:
        numeric = numeric_stats(valid.to_numpy(dtype='float64'))
    elif column.column_type is ColumnType.TEMPORAL:
        temporal = temporal_stats(valid)

    summary = ColumnSummary(
        name=column.name,
        column_type=column.column_type,
        missing_count=int(column.missing_mask.sum()),
        empty_count=int(column.empty_mask.sum()),
        distinct_count=len(counts),
        numeric_stats=numeric,
        temporal_stats=temporal,
    )

    frequencies = frequency_table(column, counts, max_distinct_values, min_cell_count)
    logger.debug(
        f"Column '{column.name}': {summary.distinct_count:,} distinct, "
        f"{len(frequencies):,} frequency entries kept"
    )
    return summary, frequencies


def frequency_table(
    column: TypedColumn,
    counts: Counter,
    max_distinct_values: int,
    min_cell_count: int
) -> List[FrequencyEntry]:
    """
    Filter, order and truncate value counts.

    Entries below ``min_cell_count`` are dropped, the rest sorted by count
    descending (ties keep first-seen order) and cut to ``max_distinct_values``.
    Fractions are relative to the counts that remain.
    """
    kept = [(value, count) for value, count in counts.items() if count >= min_cell_count]
    kept.sort(key=lambda item: -item[1])
    kept = kept[:max_distinct_values]

    mass = sum(count for _, count in kept)
    return [
        FrequencyEntry(
            column=column.name,
            value=format_value(value, column),
            count=count,
            fraction=count / mass,
        )
        for value, count in kept
    ]


def numeric_stats(values: np.ndarray) -> Optional[NumericStats]:
    """
    Descriptive statistics of a numeric sample.

    Quartiles use linear interpolation between order statistics and the
    standard deviation uses the N-1 denominator (None for a single value).
    Returns None when there are no values.
    """
    if values.size == 0:
        return None

    q1, median, q3 = np.percentile(values, [25, 50, 75])
    stddev = float(np.std(values, ddof=1)) if values.size > 1 else None

    return NumericStats(
        min=float(values.min()),
        max=float(values.max()),
        median=float(median),
        mean=float(values.mean()),
        stddev=stddev,
        q1=float(q1),
        q3=float(q3),
        iqr=float(q3 - q1),
    )


def temporal_stats(values: pd.Series) -> Optional[TemporalStats]:
    """
    Earliest, latest and median instants of a Temporal sample.

    The median is taken over epoch ticks in the series' own resolution and
    expressed in the series' time zone. Returns None when there are no values.
    """
    if values.empty:
        return None

    tz = values.dt.tz or 'UTC'
    naive = values.dt.tz_convert(None) if values.dt.tz is not None else values
    unit = np.datetime_data(naive.dtype)[0]
    ticks = np.sort(naive.to_numpy().view('int64'))
    mid = len(ticks) // 2
    if len(ticks) % 2:
        middle = int(ticks[mid])
    else:
        # integer midpoint, float64 would round at this magnitude
        low, high = int(ticks[mid - 1]), int(ticks[mid])
        middle = low + (high - low) // 2
    median = pd.Timestamp(np.datetime64(middle, unit)).tz_localize('UTC').tz_convert(tz)

    return TemporalStats(
        earliest=values.min(),
        latest=values.max(),
        median=median,
    )


def format_value(value: Any, column: TypedColumn) -> str:
    """Render a cell value as frequency-table text."""
    if column.column_type is ColumnType.NUMBER:
        return format_number(value)
    if column.column_type is ColumnType.TEMPORAL:
        return format_timestamp(value, column.has_time)
    return str(value)


def format_number(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))


def format_timestamp(value: pd.Timestamp, has_time: bool) -> str:
    if not has_time:
        return value.strftime('%Y-%m-%d')
    return value.isoformat()

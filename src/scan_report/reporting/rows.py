"""Flatten reports into the row dictionaries written by the generators."""

from typing import Any, Dict, List, Optional

import pandas as pd

from ..profiling.models import ColumnSummary, FileReport

OVERVIEW_HEADERS = ['Table', 'Description', 'N_rows', 'N_rows_checked', 'N_Fields', 'N_Fields_Empty']

SUMMARY_HEADERS = [
    'Column', 'DataType', 'MissingCount', 'EmptyCount', 'DistinctCount',
    'Min', 'Max', 'Median', 'Mean', 'StdDev', 'Q1', 'Q3', 'IQR',
    'Earliest', 'Latest', 'MedianDate', 'Error',
]

FREQUENCY_HEADERS = ['Column', 'Value', 'Count', 'Percentage']


def overview_row(report: FileReport) -> Dict[str, Any]:
    overview = report.overview()
    return {
        'Table': overview['file_name'],
        'Description': 'No description',
        'N_rows': overview['total_rows'],
        'N_rows_checked': overview['rows_examined'],
        'N_Fields': overview['field_count'],
        'N_Fields_Empty': overview['empty_field_count'],
    }


def summary_row(summary: ColumnSummary) -> Dict[str, Any]:
    """One sheet row per column; absent stats stay empty cells."""
    row = dict.fromkeys(SUMMARY_HEADERS)
    row.update({
        'Column': summary.name,
        'DataType': summary.column_type.value,
        'MissingCount': summary.missing_count,
        'EmptyCount': summary.empty_count,
        'DistinctCount': summary.distinct_count,
        'Error': summary.error,
    })

    numeric = summary.numeric_stats
    if numeric is not None:
        row.update({
            'Min': numeric.min,
            'Max': numeric.max,
            'Median': numeric.median,
            'Mean': _round(numeric.mean),
            'StdDev': _round(numeric.stddev),
            'Q1': numeric.q1,
            'Q3': numeric.q3,
            'IQR': numeric.iqr,
        })

    temporal = summary.temporal_stats
    if temporal is not None:
        row.update({
            'Earliest': _timestamp(temporal.earliest),
            'Latest': _timestamp(temporal.latest),
            'MedianDate': _timestamp(temporal.median),
        })

    return row


def summary_rows(report: FileReport) -> List[Dict[str, Any]]:
    return [summary_row(summary) for summary in report.columns]


def frequency_rows(report: FileReport) -> List[Dict[str, Any]]:
    return [
        {
            'Column': entry.column,
            'Value': entry.value,
            'Count': entry.count,
            'Percentage': round(entry.fraction * 100, 2),
        }
        for entry in report.frequencies
    ]


def _round(value: Optional[float], digits: int = 4) -> Optional[float]:
    return round(value, digits) if value is not None else None


def _timestamp(value: pd.Timestamp) -> str:
    # Excel cannot store time zones, so write ISO text
    if value == value.normalize():
        return value.strftime('%Y-%m-%d')
    return value.isoformat()

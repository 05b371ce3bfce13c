"""Random per-cell day shifting of Temporal columns."""

from typing import Dict

import numpy as np

from .models import ColumnType, TypedColumn
from ..utils.logger import get_logger

logger = get_logger('date_anonymizer')

MAX_SHIFT_DAYS = 5


def shift_column(column: TypedColumn, rng: np.random.Generator) -> TypedColumn:
    """
    Shift each non-missing value of a Temporal column by its own random
    whole number of days in [-MAX_SHIFT_DAYS, MAX_SHIFT_DAYS]. Other column
    types are returned untouched. Mutates ``column`` in place.
    """
    if column.column_type is not ColumnType.TEMPORAL:
        return column

    offsets = rng.integers(-MAX_SHIFT_DAYS, MAX_SHIFT_DAYS + 1, size=len(column))
    # offsets in the column's own unit; NaT + offset stays NaT
    deltas = offsets.astype('timedelta64[D]').astype(f'timedelta64[{column.values.dtype.unit}]')
    column.values = column.values + deltas
    return column


def shift_dates(columns: Dict[str, TypedColumn], rng: np.random.Generator) -> int:
    """
    Apply ``shift_column`` to every Temporal column of a table.

    Returns:
        Number of columns shifted
    """
    shifted = 0
    for column in columns.values():
        if column.column_type is ColumnType.TEMPORAL:
            shift_column(column, rng)
            shifted += 1

    if shifted:
        logger.info(f"Shifted {shifted} date column(s) by up to +/-{MAX_SHIFT_DAYS} days")
    return shifted

"""
Column Type Detector Module

Infers Number / Temporal / Text for untyped text columns. Each column moves
through a small state machine:

    UNKNOWN -> NUMERIC_CANDIDATE -> NUMBER
                                 -> DATE_CANDIDATE -> TEMPORAL
                                                   -> TEXT
                                 -> TEXT

A candidate type is first tried on a random sample of the non-empty cells
and only committed to the whole column when the sample clears the success
threshold. Numeric commits are strict: if any non-empty cell fails in the
full pass the column stays Text. Date commits re-check the success rate on
the full column; cells that fail become missing.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .models import ColumnType, RawTable, TypedColumn
from ..utils.logger import get_logger

logger = get_logger('type_detector')


class DetectionState(Enum):
    """States of the per-column detection state machine."""
    UNKNOWN = "unknown"
    NUMERIC_CANDIDATE = "numeric_candidate"
    DATE_CANDIDATE = "date_candidate"
    NUMBER = "number"
    TEMPORAL = "temporal"
    TEXT = "text"


TERMINAL_STATES = {
    DetectionState.NUMBER: ColumnType.NUMBER,
    DetectionState.TEMPORAL: ColumnType.TEMPORAL,
    DetectionState.TEXT: ColumnType.TEXT,
}


def _build_date_templates() -> List[Tuple[str, bool]]:
    """
    Ordered (strptime format, has_time) pairs. First match wins, so
    ambiguous slashed dates like 02/03/2023 read month-first.
    """
    templates = [
        ('%Y-%m-%dT%H:%M:%S.%f%z', True),
        ('%Y-%m-%dT%H:%M:%S%z', True),
        ('%Y-%m-%dT%H:%M:%S.%f', True),
        ('%Y-%m-%dT%H:%M:%S', True),
        ('%Y-%m-%dT%H:%M%z', True),
        ('%Y-%m-%dT%H:%M', True),
        ('%Y-%m-%d %H:%M:%S%z', True),
        ('%Y-%m-%d %H:%M:%S.%f', True),
    ]

    orders = [
        ('%Y', '%m', '%d'),
        ('%m', '%d', '%Y'),
        ('%d', '%m', '%Y'),
    ]
    times = [(' %H:%M:%S', True), (' %H:%M', True), ('', False)]

    for first, second, third in orders:
        for sep in ('-', '/', '.'):
            date_part = sep.join((first, second, third))
            for time_part, has_time in times:
                templates.append((date_part + time_part, has_time))

    return templates


DATE_TEMPLATES = _build_date_templates()

# Range of nanosecond timestamps; anything outside counts as unparseable
EARLIEST = pd.Timestamp.min.tz_localize('UTC')
LATEST = pd.Timestamp.max.tz_localize('UTC')


def parse_temporal(text: str) -> Optional[Tuple[pd.Timestamp, bool]]:
    """
    Parse one cell against the date templates.

    Args:
        text: Cell text

    Returns:
        (timezone-aware Timestamp, has_time) or None when no template matches.
        Values without an offset are taken as UTC.
    """
    candidate = text.strip()
    if not candidate or not candidate[0].isdigit():
        return None

    for fmt, has_time in DATE_TEMPLATES:
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)

        try:
            stamp = pd.Timestamp(parsed)
        except (OverflowError, ValueError):
            return None

        if not EARLIEST <= stamp <= LATEST:
            return None
        return stamp, has_time

    return None


def coerce_numeric(values: pd.Series) -> pd.Series:
    """Coerce text to float; unparseable and non-finite values become NaN."""
    numeric = pd.to_numeric(values, errors='coerce').astype('float64')
    return numeric.where(np.isfinite(numeric))


class TypeDetector:
    """Detect and apply column types using sampled success-rate gating."""

    def __init__(
        self,
        rng: np.random.Generator,
        success_threshold: float = 0.8,
        sample_size: int = 1000
    ):
        """
        Initialize detector.

        Args:
            rng: Random source for the detection samples
            success_threshold: Minimum share of cells that must coerce
            sample_size: Maximum cells examined in the sample phase
        """
        self.rng = rng
        self.success_threshold = success_threshold
        self.sample_size = sample_size

    def detect_table(self, table: RawTable) -> Dict[str, TypedColumn]:
        """Type every column of a raw table, keeping column order."""
        return {name: self.detect(name, cells) for name, cells in table.items()}

    def detect(self, name: str, cells: pd.Series) -> TypedColumn:
        """
        Decide the type of one column and return it fully re-typed.

        Args:
            name: Column name
            cells: Raw text cells (NaN/None = missing, '' = empty)

        Returns:
            TypedColumn with a uniform type
        """
        cells = cells.reset_index(drop=True)
        missing = cells.isna().to_numpy()
        empty = cells.eq('').to_numpy() & ~missing
        present = cells[~(missing | empty)]

        state = DetectionState.UNKNOWN
        typed = None

        while state not in TERMINAL_STATES:
            if state is DetectionState.UNKNOWN:
                state = DetectionState.NUMERIC_CANDIDATE if len(present) else DetectionState.TEXT

            elif state is DetectionState.NUMERIC_CANDIDATE:
                state, typed = self._try_numeric(name, cells, present, missing, empty)

            elif state is DetectionState.DATE_CANDIDATE:
                state, typed = self._try_temporal(name, cells, present, missing, empty)

        if typed is None:
            typed = TypedColumn(
                name=name,
                column_type=ColumnType.TEXT,
                values=cells,
                missing_mask=missing,
                empty_mask=empty,
            )

        logger.debug(f"Column '{name}' detected as {typed.column_type.value}")
        return typed

    def _sample(self, present: pd.Series) -> pd.Series:
        size = min(len(present), self.sample_size)
        positions = self.rng.choice(len(present), size=size, replace=False)
        return present.iloc[positions]

    def _try_numeric(
        self,
        name: str,
        cells: pd.Series,
        present: pd.Series,
        missing: np.ndarray,
        empty: np.ndarray
    ) -> Tuple[DetectionState, Optional[TypedColumn]]:
        sample = self._sample(present)
        success_rate = coerce_numeric(sample).notna().mean()

        if success_rate < self.success_threshold:
            return DetectionState.DATE_CANDIDATE, None

        numeric = coerce_numeric(cells)
        new_missing = numeric.isna().to_numpy() & ~missing & ~empty
        if new_missing.any():
            logger.info(
                f"Column '{name}': numeric sample passed ({success_rate:.0%}) but "
                f"{int(new_missing.sum()):,} cells failed on the full column; keeping as text"
            )
            return DetectionState.TEXT, None

        return DetectionState.NUMBER, TypedColumn(
            name=name,
            column_type=ColumnType.NUMBER,
            values=numeric,
            missing_mask=missing.copy(),
            empty_mask=empty,
        )

    def _try_temporal(
        self,
        name: str,
        cells: pd.Series,
        present: pd.Series,
        missing: np.ndarray,
        empty: np.ndarray
    ) -> Tuple[DetectionState, Optional[TypedColumn]]:
        sample = self._sample(present)
        sample_parsed = [parse_temporal(value) for value in sample]
        success_rate = sum(p is not None for p in sample_parsed) / len(sample_parsed)

        if success_rate < self.success_threshold:
            return DetectionState.TEXT, None

        parsed = {value: parse_temporal(value) for value in pd.unique(present)}
        full_rate = sum(parsed[value] is not None for value in present) / len(present)
        if full_rate < self.success_threshold:
            logger.info(
                f"Column '{name}': date sample passed ({success_rate:.0%}) but only "
                f"{full_rate:.0%} of the full column parsed; keeping as text"
            )
            return DetectionState.TEXT, None

        stamps = []
        has_time = False
        for value, is_missing, is_empty in zip(cells, missing, empty):
            hit = None if is_missing or is_empty else parsed[value]
            if hit is None:
                stamps.append(None)
            else:
                stamps.append(hit[0])
                has_time = has_time or hit[1]

        first_tz = next(stamp.tz for stamp in stamps if stamp is not None)
        # microseconds leave room to shift values at the edge of the parse range
        values = pd.to_datetime(pd.Series(stamps, dtype=object), utc=True).dt.as_unit('us').dt.tz_convert(first_tz)
        failed = values.isna().to_numpy() & ~empty

        return DetectionState.TEMPORAL, TypedColumn(
            name=name,
            column_type=ColumnType.TEMPORAL,
            values=values,
            missing_mask=failed,
            empty_mask=empty,
            has_time=has_time,
        )

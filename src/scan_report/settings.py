"""Settings object passed through a profiling run."""

from dataclasses import dataclass
from typing import FrozenSet, Optional

import numpy as np


@dataclass(frozen=True)
class ProfilerConfig:
    """
    Settings for one profiling run.

    Replaces process-wide state: the random source is derived from ``seed``
    so that sampling, type detection and date shifting are reproducible.

    Args:
        row_budget: Maximum data rows to examine per file (-1 for all)
        max_distinct_values: Maximum frequency entries kept per column
        min_cell_count: Frequency entries with fewer occurrences are dropped
        excluded_columns: Columns left out of summaries and frequencies
        shift_dates: Shift Temporal values by a random +/-5 days per cell
        random_sample: Sample rows at random instead of reading the first rows
        seed: Seed for the random generator (None for OS entropy)
        delimiter: Field separator of the input files
        success_threshold: Minimum coercion rate to accept a numeric/date type
        detection_sample_size: Cells sampled per column for type detection
        workers: Number of files profiled concurrently
    """
    row_budget: int = -1
    max_distinct_values: int = 1000
    min_cell_count: int = 5
    excluded_columns: FrozenSet[str] = frozenset()
    shift_dates: bool = False
    random_sample: bool = False
    seed: Optional[int] = None
    delimiter: str = '\t'
    success_threshold: float = 0.8
    detection_sample_size: int = 1000
    workers: int = 1

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

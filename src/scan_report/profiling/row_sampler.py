"""Decide which data rows of a file get examined."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..utils.logger import get_logger

logger = get_logger('row_sampler')


class ReadMode(Enum):
    """How the table reader is driven."""
    FULL = "full"
    SAMPLED = "sampled"
    HEAD = "head"


@dataclass(frozen=True)
class RowPlan:
    """
    Outcome of row planning.

    ``row_indices`` holds sorted 1-based physical line numbers (line 0 is the
    header, always read) and is only set for SAMPLED; ``row_limit`` is only
    set for HEAD.
    """
    mode: ReadMode
    expected_rows: int
    row_indices: Optional[np.ndarray] = None
    row_limit: Optional[int] = None


def plan_rows(
    total_data_rows: int,
    row_budget: int,
    random_sample: bool,
    rng: np.random.Generator
) -> RowPlan:
    """
    Choose between a full read, a random subset and the first rows.

    Args:
        total_data_rows: Data rows in the file (header excluded)
        row_budget: Maximum rows to examine; negative means no limit
        random_sample: Pick rows uniformly at random instead of the first rows
        rng: Random source for index selection

    Returns:
        RowPlan describing the read
    """
    total_data_rows = max(total_data_rows, 0)

    if row_budget < 0 or total_data_rows <= row_budget:
        return RowPlan(mode=ReadMode.FULL, expected_rows=total_data_rows)

    if random_sample:
        indices = sample_row_indices(total_data_rows, row_budget, rng)
        logger.debug(f"Sampling {len(indices):,} of {total_data_rows:,} rows")
        return RowPlan(mode=ReadMode.SAMPLED, expected_rows=len(indices), row_indices=indices)

    return RowPlan(mode=ReadMode.HEAD, expected_rows=row_budget, row_limit=row_budget)


def sample_row_indices(total_data_rows: int, row_budget: int, rng: np.random.Generator) -> np.ndarray:
    """
    Draw ``min(row_budget, total_data_rows)`` distinct line numbers from
    ``[1, total_data_rows]`` uniformly without replacement.
    """
    size = min(max(row_budget, 0), total_data_rows)
    chosen = rng.choice(total_data_rows, size=size, replace=False) + 1
    chosen.sort()
    return chosen

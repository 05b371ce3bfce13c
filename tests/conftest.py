"""Shared fixtures for scan report tests."""

from pathlib import Path
from typing import List, Optional

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so sampling and shifting are reproducible."""
    return np.random.default_rng(12345)


@pytest.fixture
def write_table(tmp_path):
    """Write rows as a delimited file and return its path."""

    def _write(
        name: str,
        header: List[str],
        rows: List[List[str]],
        delimiter: str = '\t',
        folder: Optional[Path] = None
    ) -> Path:
        path = (folder or tmp_path) / name
        lines = [delimiter.join(header)] + [delimiter.join(row) for row in rows]
        path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return path

    return _write


@pytest.fixture
def sample_tsv(write_table):
    """20-row TSV with number, date, text, empty and free-text columns."""
    names = ['alice', 'bob', 'carol', 'dave']
    rows = []
    for i in range(1, 21):
        rows.append([
            str(i),
            f"{i * 1.5:.2f}",
            f"2023-01-{i:02d}",
            names[i % 4],
            '',
            f"note {i}",
        ])
    return write_table('people.tsv', ['id', 'amount', 'visit_date', 'name', 'blank', 'notes'], rows)

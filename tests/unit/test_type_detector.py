"""Tests for column type detection."""

from datetime import timedelta

import numpy as np
import pandas as pd
import pytest

from scan_report.profiling.models import ColumnType
from scan_report.profiling.type_detector import (
    DATE_TEMPLATES,
    TypeDetector,
    coerce_numeric,
    parse_temporal,
)


def cells(*values):
    return pd.Series(list(values), dtype=object)


@pytest.fixture
def detector(rng):
    return TypeDetector(rng=rng)


def first_cells_sampler(n):
    """Replace random sampling by the first ``n`` present cells."""
    return lambda present: present.iloc[:n]


@pytest.mark.unit
class TestNumericDetection:
    """Numeric attempt and its strict full-column commit."""

    def test_numeric_strings_become_numbers(self, detector):
        typed = detector.detect('amount', cells('1', '2.5', '-3', '4e2'))
        assert typed.column_type is ColumnType.NUMBER
        assert typed.values.tolist() == [1.0, 2.5, -3.0, 400.0]

    def test_missing_and_empty_are_tracked(self, detector):
        typed = detector.detect('n', cells('5', '10', None, '', '7'))
        assert typed.column_type is ColumnType.NUMBER
        assert typed.missing_mask.tolist() == [False, False, True, False, False]
        assert typed.empty_mask.tolist() == [False, False, False, True, False]
        assert typed.valid_mask.sum() == 3

    def test_mostly_text_stays_text_unchanged(self, detector):
        raw = cells('a', 'b', '1')
        typed = detector.detect('letters', raw)
        assert typed.column_type is ColumnType.TEXT
        assert typed.values.tolist() == ['a', 'b', '1']

    def test_sample_passes_but_full_column_fails_reverts_to_text(self, detector):
        raw = cells(*(['1', '2', '3', '4', '5'] + ['x'] * 3))
        detector._sample = first_cells_sampler(5)
        typed = detector.detect('mixed', raw)
        assert typed.column_type is ColumnType.TEXT
        assert typed.values.tolist() == raw.tolist()
        assert not typed.missing_mask.any()

    def test_single_bad_cell_reverts_even_above_threshold(self, detector):
        raw = cells(*([str(i) for i in range(19)] + ['n/a']))
        typed = detector.detect('ids', raw)
        assert typed.column_type is ColumnType.TEXT

    def test_non_finite_values_are_not_numbers(self):
        coerced = coerce_numeric(cells('1', 'nan', 'inf', '-inf', 'abc'))
        assert coerced.iloc[0] == 1.0
        assert coerced.iloc[1:].isna().all()


@pytest.mark.unit
class TestTemporalDetection:
    """Date attempt with sample and full-column gating."""

    def test_iso_dates(self, detector):
        typed = detector.detect('d', cells('2023-01-01', '2023-12-31', '2023-06-15', '2024-02-01'))
        assert typed.column_type is ColumnType.TEMPORAL
        assert typed.values.iloc[0] == pd.Timestamp('2023-01-01', tz='UTC')
        assert typed.values.iloc[3] == pd.Timestamp('2024-02-01', tz='UTC')
        assert typed.has_time is False

    def test_mostly_non_dates_stay_text(self, detector):
        typed = detector.detect('d', cells('notadate', '2023-01-01'))
        assert typed.column_type is ColumnType.TEXT
        assert typed.values.tolist() == ['notadate', '2023-01-01']

    def test_unparsed_cell_becomes_missing(self, detector):
        raw = cells(*([f"2023-02-{d:02d}" for d in range(1, 10)] + ['garbage']))
        typed = detector.detect('d', raw)
        assert typed.column_type is ColumnType.TEMPORAL
        assert typed.missing_mask.tolist() == [False] * 9 + [True]
        assert pd.isna(typed.values.iloc[9])

    def test_empty_cells_are_not_counted_as_missing(self, detector):
        typed = detector.detect('d', cells('2023-01-01', '', None, '2023-01-03'))
        assert typed.column_type is ColumnType.TEMPORAL
        assert typed.missing_mask.tolist() == [False, False, True, False]
        assert typed.empty_mask.tolist() == [False, True, False, False]

    def test_full_column_recheck_reverts_to_text(self, detector):
        raw = cells(*([f"2023-03-{d:02d}" for d in range(1, 6)] + ['junk'] * 5))
        detector._sample = first_cells_sampler(5)
        typed = detector.detect('d', raw)
        assert typed.column_type is ColumnType.TEXT
        assert typed.values.tolist() == raw.tolist()

    def test_datetime_with_time_component(self, detector):
        typed = detector.detect('ts', cells('2023-03-15 10:30:00', '2023-03-16 11:00:00'))
        assert typed.column_type is ColumnType.TEMPORAL
        assert typed.has_time is True
        assert typed.values.iloc[0] == pd.Timestamp('2023-03-15 10:30:00', tz='UTC')

    def test_time_zone_of_first_value_is_kept(self, detector):
        typed = detector.detect('ts', cells('2023-03-15T10:30:00+02:00', '2023-03-15T10:30:00Z'))
        assert typed.column_type is ColumnType.TEMPORAL
        assert typed.values.dt.tz.utcoffset(None) == timedelta(hours=2)
        assert typed.values.iloc[1] == pd.Timestamp('2023-03-15T10:30:00', tz='UTC')


@pytest.mark.unit
class TestParseTemporal:
    """Per-cell template matching."""

    @pytest.mark.parametrize('text,expected', [
        ('2023-03-15', '2023-03-15'),
        ('2023/03/15', '2023-03-15'),
        ('03/15/2023', '2023-03-15'),
        ('15/03/2023', '2023-03-15'),
        ('15.03.2023', '2023-03-15'),
        ('2023-03-15 08:05', '2023-03-15 08:05'),
        ('2023-03-15T08:05:09', '2023-03-15 08:05:09'),
        ('2023-03-15T08:05:09.250Z', '2023-03-15 08:05:09.250'),
    ])
    def test_recognized_formats(self, text, expected):
        stamp, _ = parse_temporal(text)
        assert stamp == pd.Timestamp(expected, tz='UTC')

    def test_month_first_wins_when_ambiguous(self):
        stamp, _ = parse_temporal('02/03/2023')
        assert (stamp.month, stamp.day) == (2, 3)

    def test_offset_is_preserved(self):
        stamp, has_time = parse_temporal('2023-03-15T10:30:00-05:00')
        assert has_time is True
        assert stamp.utcoffset() == timedelta(hours=-5)

    @pytest.mark.parametrize('text', ['hello', '', '2023-13-45', '12:30', '1500-01-01'])
    def test_rejected_values(self, text):
        assert parse_temporal(text) is None

    def test_date_only_templates_have_no_time(self):
        assert ('%Y-%m-%d', False) in DATE_TEMPLATES
        assert ('%d/%m/%Y %H:%M:%S', True) in DATE_TEMPLATES


@pytest.mark.unit
class TestDetectionEdgeCases:
    """Empty columns, whole tables and reproducibility."""

    def test_all_missing_or_empty_is_text(self, detector):
        typed = detector.detect('blank', cells(None, '', None))
        assert typed.column_type is ColumnType.TEXT
        assert typed.missing_mask.sum() == 2
        assert typed.empty_mask.sum() == 1

    def test_zero_length_column_is_text(self, detector):
        typed = detector.detect('nothing', cells())
        assert typed.column_type is ColumnType.TEXT
        assert len(typed) == 0

    def test_detect_table_keeps_column_order(self, detector):
        table = {
            'z': cells('1', '2'),
            'a': cells('x', 'y'),
            'm': cells('2023-01-01', '2023-01-02'),
        }
        typed = detector.detect_table(table)
        assert list(typed) == ['z', 'a', 'm']
        assert [c.column_type for c in typed.values()] == [
            ColumnType.NUMBER, ColumnType.TEXT, ColumnType.TEMPORAL
        ]

    def test_same_seed_same_outcome(self):
        raw = cells(*([str(i) for i in range(3000)] + ['2023-01-01'] * 700))
        first = TypeDetector(rng=np.random.default_rng(3)).detect('c', raw)
        second = TypeDetector(rng=np.random.default_rng(3)).detect('c', raw)
        assert first.column_type is second.column_type
        assert first.values.equals(second.values)
        assert np.array_equal(first.missing_mask, second.missing_mask)
        assert np.array_equal(first.empty_mask, second.empty_mask)

    def test_same_seed_same_outcome_for_dates(self):
        raw = cells(*([f"2023-04-{d:02d}" for d in range(1, 31)] * 40 + ['later'] * 200 + ['', None]))
        first = TypeDetector(rng=np.random.default_rng(8)).detect('d', raw)
        second = TypeDetector(rng=np.random.default_rng(8)).detect('d', raw)
        assert first.column_type is ColumnType.TEMPORAL
        assert first.values.equals(second.values)
        assert np.array_equal(first.missing_mask, second.missing_mask)
        assert np.array_equal(first.empty_mask, second.empty_mask)
        assert first.missing_mask.sum() == 201

"""End-to-end tests for profiling files from disk."""

import pandas as pd
import pytest

from scan_report.exceptions import EmptyFileError, FileAccessError
from scan_report.profiling import FileProfiler, profile_file
from scan_report.profiling.models import ColumnType
from scan_report.settings import ProfilerConfig


def by_name(report):
    return {summary.name: summary for summary in report.columns}


@pytest.mark.integration
class TestProfileFile:

    def test_full_read(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(seed=1))

        assert report.file_name == 'people.tsv'
        assert report.total_rows == 20
        assert report.rows_examined == 20
        assert report.field_count == 6
        assert report.empty_field_count == 1

        columns = by_name(report)
        assert [c.name for c in report.columns] == ['id', 'amount', 'visit_date', 'name', 'blank', 'notes']
        assert columns['id'].column_type is ColumnType.NUMBER
        assert columns['amount'].column_type is ColumnType.NUMBER
        assert columns['visit_date'].column_type is ColumnType.TEMPORAL
        assert columns['name'].column_type is ColumnType.TEXT
        assert columns['blank'].column_type is ColumnType.TEXT
        assert columns['blank'].empty_count == 20

        assert columns['id'].numeric_stats.max == 20
        assert columns['amount'].numeric_stats.min == pytest.approx(1.5)
        assert columns['visit_date'].temporal_stats.earliest == pd.Timestamp('2023-01-01', tz='UTC')
        assert columns['visit_date'].temporal_stats.latest == pd.Timestamp('2023-01-20', tz='UTC')

    def test_frequencies_respect_min_cell_count(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(seed=1))
        names = report.frequencies_for('name')
        assert sorted(entry.value for entry in names) == ['alice', 'bob', 'carol', 'dave']
        assert all(entry.count == 5 for entry in names)
        assert all(entry.fraction == pytest.approx(0.25) for entry in names)
        # every id occurs once, below the default threshold of 5
        assert report.frequencies_for('id') == []

    def test_excluded_columns_still_count_as_fields(self, sample_tsv):
        config = ProfilerConfig(excluded_columns=frozenset({'notes', 'blank'}), seed=1)
        report = profile_file(sample_tsv, config)
        assert report.field_count == 6
        assert report.empty_field_count == 1
        assert 'notes' not in by_name(report)
        assert 'blank' not in by_name(report)
        assert report.frequencies_for('notes') == []

    def test_head_budget(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(row_budget=5, seed=1))
        assert report.total_rows == 20
        assert report.rows_examined == 5
        assert by_name(report)['id'].numeric_stats.max == 5

    def test_random_sample_budget(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(row_budget=8, random_sample=True, seed=1))
        assert report.total_rows == 20
        assert report.rows_examined == 8
        assert by_name(report)['id'].distinct_count == 8

    def test_random_sample_is_reproducible(self, sample_tsv):
        config = ProfilerConfig(row_budget=8, random_sample=True, seed=11)
        first = profile_file(sample_tsv, config)
        second = profile_file(sample_tsv, config)
        assert by_name(first)['id'].numeric_stats == by_name(second)['id'].numeric_stats

    def test_budget_larger_than_file(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(row_budget=1000, random_sample=True, seed=1))
        assert report.rows_examined == 20

    def test_shifted_dates_stay_within_bounds(self, sample_tsv):
        report = profile_file(sample_tsv, ProfilerConfig(shift_dates=True, seed=3))
        stats = by_name(report)['visit_date'].temporal_stats
        assert stats.earliest >= pd.Timestamp('2022-12-27', tz='UTC')
        assert stats.latest <= pd.Timestamp('2023-01-25', tz='UTC')
        assert by_name(report)['visit_date'].column_type is ColumnType.TEMPORAL

    def test_header_only_file(self, tmp_path):
        path = tmp_path / 'header.tsv'
        path.write_text('a\tb\n')
        report = profile_file(path, ProfilerConfig(seed=1))
        assert report.total_rows == 0
        assert report.rows_examined == 0
        assert report.field_count == 2
        assert report.empty_field_count == 2
        assert all(c.column_type is ColumnType.TEXT for c in report.columns)

    def test_trailing_blank_lines_are_not_rows(self, tmp_path):
        path = tmp_path / 'blanks.tsv'
        path.write_text('x\n1\n2\n\n\n')
        report = profile_file(path, ProfilerConfig(seed=1))
        assert report.total_rows == 2
        assert report.rows_examined == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.tsv'
        path.write_text('')
        with pytest.raises(EmptyFileError):
            profile_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            profile_file(tmp_path / 'missing.tsv')

    def test_csv_input(self, write_table):
        path = write_table('c.csv', ['x', 'y'], [['1', 'a'], ['2', 'b']], delimiter=',')
        report = profile_file(path, ProfilerConfig(delimiter=',', min_cell_count=1, seed=1))
        assert by_name(report)['x'].column_type is ColumnType.NUMBER
        assert len(report.frequencies_for('y')) == 2


@pytest.mark.integration
class TestProfilerCollaborators:

    def test_injected_reader_and_counter(self):
        table = {
            'n': pd.Series(['1', '2', '3'], dtype=object),
            't': pd.Series(['a', '', None], dtype=object),
        }
        calls = []

        def reader(path, delimiter, **kwargs):
            calls.append((delimiter, kwargs))
            return table

        report = profile_file(
            'virtual.tsv',
            ProfilerConfig(seed=1),
            line_counter=lambda path: 4,
            table_reader=reader,
        )
        assert calls == [('\t', {})]
        assert report.file_name == 'virtual.tsv'
        assert report.total_rows == 3
        assert by_name(report)['n'].column_type is ColumnType.NUMBER
        assert by_name(report)['t'].missing_count == 1
        assert by_name(report)['t'].empty_count == 1

    def test_sampled_plan_passes_row_indices(self):
        seen = {}

        def reader(path, delimiter, row_indices=None, row_limit=None):
            seen['row_indices'] = list(row_indices)
            return {'n': pd.Series([str(i) for i in seen['row_indices']], dtype=object)}

        config = ProfilerConfig(row_budget=10, random_sample=True, seed=2)
        report = profile_file('big.tsv', config, line_counter=lambda path: 1001, table_reader=reader)
        assert len(seen['row_indices']) == 10
        assert all(1 <= i <= 1000 for i in seen['row_indices'])
        assert report.rows_examined == 10

    def test_failing_column_yields_degraded_summary(self, sample_tsv, monkeypatch):
        from scan_report.profiling import profiler as profiler_module

        original = profiler_module.summarize_column

        def flaky(column, **kwargs):
            if column.name == 'amount':
                raise RuntimeError('boom')
            return original(column, **kwargs)

        monkeypatch.setattr(profiler_module, 'summarize_column', flaky)
        report = profile_file(sample_tsv, ProfilerConfig(seed=1))

        amount = by_name(report)['amount']
        assert amount.is_degraded
        assert amount.error == 'boom'
        assert amount.column_type is ColumnType.NUMBER
        assert amount.numeric_stats is None
        assert not by_name(report)['id'].is_degraded
        assert report.frequencies_for('amount') == []


@pytest.mark.integration
class TestProfileFiles:

    @pytest.fixture
    def paths(self, tmp_path, sample_tsv, write_table):
        other = write_table('other.tsv', ['k'], [['1'], ['2']])
        empty = tmp_path / 'empty.tsv'
        empty.write_text('')
        return [sample_tsv, tmp_path / 'missing.tsv', empty, other]

    @pytest.mark.parametrize('workers', [1, 2])
    def test_failures_are_collected(self, paths, workers):
        profiler = FileProfiler(ProfilerConfig(seed=4, workers=workers))
        reports, failures = profiler.profile_files(paths)

        assert [r.file_name for r in reports] == ['people.tsv', 'other.tsv']
        assert set(failures) == {str(paths[1]), str(paths[2])}
        assert isinstance(failures[str(paths[1])], FileAccessError)
        assert isinstance(failures[str(paths[2])], EmptyFileError)

    def test_parallel_matches_sequential(self, sample_tsv, write_table):
        other = write_table('other.tsv', ['d'], [[f"2021-05-{d:02d}"] for d in range(1, 29)])
        files = [sample_tsv, other]
        base = dict(seed=9, shift_dates=True, row_budget=10, random_sample=True)

        sequential, _ = FileProfiler(ProfilerConfig(workers=1, **base)).profile_files(files)
        parallel, _ = FileProfiler(ProfilerConfig(workers=2, **base)).profile_files(files)

        for left, right in zip(sequential, parallel):
            assert left.columns == right.columns
            assert left.frequencies == right.frequencies

"""Main file profiling engine."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .column_summarizer import summarize_column
from .date_anonymizer import shift_dates
from .models import ColumnSummary, FileReport, FrequencyEntry, RawTable, TypedColumn
from .row_sampler import ReadMode, plan_rows
from .type_detector import TypeDetector
from ..exceptions import EmptyFileError, FileAccessError, ScanReportError
from ..settings import ProfilerConfig
from ..sources.line_counter import count_lines
from ..sources.table_reader import read_table
from ..utils.logger import get_logger

logger = get_logger('profiler')

LineCounter = Callable[[Union[str, Path]], int]
TableReader = Callable[..., RawTable]


class FileProfiler:
    """Profile delimited files and build one FileReport per file."""

    def __init__(
        self,
        config: ProfilerConfig,
        line_counter: LineCounter = count_lines,
        table_reader: TableReader = read_table
    ):
        """
        Initialize file profiler.

        Args:
            config: Profiling settings
            line_counter: Returns the number of non-blank lines in a file
            table_reader: Reads a file into a RawTable (see ``read_table``)
        """
        self.config = config
        self.line_counter = line_counter
        self.table_reader = table_reader

    def profile_file(
        self,
        file_path: Union[str, Path],
        rng: Optional[np.random.Generator] = None
    ) -> FileReport:
        """
        Generate the report for one file.

        Args:
            file_path: File to scan
            rng: Random source (default: derived from the config seed)

        Returns:
            FileReport for the file

        Raises:
            FileAccessError: If the file cannot be opened
            EmptyFileError: If the file has no header line
        """
        config = self.config
        rng = rng if rng is not None else config.make_rng()
        file_path = Path(file_path)

        logger.info(f"Scanning file: {file_path}")
        start = datetime.now()

        line_count = self.line_counter(file_path)
        if line_count == 0:
            raise EmptyFileError(str(file_path))
        total_rows = line_count - 1

        plan = plan_rows(total_rows, config.row_budget, config.random_sample, rng)
        if plan.mode is ReadMode.SAMPLED:
            table = self.table_reader(file_path, config.delimiter, row_indices=plan.row_indices)
        elif plan.mode is ReadMode.HEAD:
            table = self.table_reader(file_path, config.delimiter, row_limit=plan.row_limit)
        else:
            table = self.table_reader(file_path, config.delimiter)

        rows_examined = len(next(iter(table.values()))) if table else 0
        empty_field_count = count_empty_fields(table)

        # Excluded columns still count towards field totals above
        included = {name: cells for name, cells in table.items() if name not in config.excluded_columns}
        if len(included) < len(table):
            logger.info(f"Excluding {len(table) - len(included)} column(s) from summary")

        detector = TypeDetector(
            rng=rng,
            success_threshold=config.success_threshold,
            sample_size=config.detection_sample_size,
        )
        typed = detector.detect_table(included)

        if config.shift_dates:
            shift_dates(typed, rng)

        summaries, frequencies = self._summarize(typed)

        duration = (datetime.now() - start).total_seconds()
        logger.info(
            f"Scanned {file_path.name}: {rows_examined:,}/{total_rows:,} rows, "
            f"{len(table)} fields in {duration:.2f}s"
        )

        return FileReport(
            file_path=str(file_path),
            file_name=file_path.name,
            total_rows=total_rows,
            rows_examined=rows_examined,
            field_count=len(table),
            empty_field_count=empty_field_count,
            columns=summaries,
            frequencies=frequencies,
        )

    def _summarize(self, typed: Dict[str, TypedColumn]) -> Tuple[List[ColumnSummary], List[FrequencyEntry]]:
        """Summarize each column; a failing column yields a degraded summary."""
        summaries = []
        frequencies = []

        for name, column in typed.items():
            try:
                summary, entries = summarize_column(
                    column,
                    max_distinct_values=self.config.max_distinct_values,
                    min_cell_count=self.config.min_cell_count,
                )
            except Exception as e:
                logger.error(f"Error summarizing column {name}: {e}")
                summary = ColumnSummary(name=name, column_type=column.column_type, error=str(e))
                entries = []

            summaries.append(summary)
            frequencies.extend(entries)

        return summaries, frequencies

    def profile_files(
        self,
        file_paths: Sequence[Union[str, Path]]
    ) -> Tuple[List[FileReport], Dict[str, ScanReportError]]:
        """
        Profile several files, skipping those that cannot be read.

        Each file gets its own generator spawned from the config seed, so
        results do not depend on worker scheduling.

        Args:
            file_paths: Files to scan

        Returns:
            Tuple of (reports in input order, failures keyed by file path)
        """
        seeds = np.random.SeedSequence(self.config.seed).spawn(len(file_paths))
        rngs = [np.random.default_rng(seed) for seed in seeds]

        def run(index: int):
            try:
                return self.profile_file(file_paths[index], rng=rngs[index])
            except (FileAccessError, EmptyFileError) as e:
                logger.warning(f"Skipping {file_paths[index]}: {e.message}")
                return e

        if self.config.workers > 1 and len(file_paths) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                outcomes = list(executor.map(run, range(len(file_paths))))
        else:
            outcomes = [run(index) for index in range(len(file_paths))]

        reports = []
        failures = {}
        for path, outcome in zip(file_paths, outcomes):
            if isinstance(outcome, ScanReportError):
                failures[str(path)] = outcome
            else:
                reports.append(outcome)

        logger.info(f"Profiled {len(reports)} file(s), skipped {len(failures)}")
        return reports, failures


def count_empty_fields(table: RawTable) -> int:
    """Count columns whose cells are all missing or empty text."""
    empty = 0
    for cells in table.values():
        if (cells.isna() | cells.eq('')).all():
            empty += 1
    return empty


def profile_file(
    file_path: Union[str, Path],
    config: Optional[ProfilerConfig] = None,
    rng: Optional[np.random.Generator] = None,
    line_counter: LineCounter = count_lines,
    table_reader: TableReader = read_table
) -> FileReport:
    """Profile one file with the given settings (see ``FileProfiler``)."""
    profiler = FileProfiler(config or ProfilerConfig(), line_counter=line_counter, table_reader=table_reader)
    return profiler.profile_file(file_path, rng=rng)

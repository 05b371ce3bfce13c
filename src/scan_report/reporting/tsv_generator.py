"""
TSV Report Generator Module

Writes the overview and each file's column summary and frequencies as
separate tab-separated files.
"""

import csv
from pathlib import Path
from typing import Any, Dict, List

from ..profiling.models import FileReport
from .rows import (
    FREQUENCY_HEADERS,
    OVERVIEW_HEADERS,
    SUMMARY_HEADERS,
    frequency_rows,
    overview_row,
    summary_rows,
)


class TSVGenerator:
    """Generate TSV reports from scan results."""

    @staticmethod
    def generate_scan_report(output_dir: Path, prefix: str, reports: List[FileReport]) -> List[Path]:
        """
        Write ``<prefix>_Overview.tsv`` plus, per file,
        ``<prefix>_<file>.tsv`` and ``<prefix>_<file>_Frequencies.tsv``.

        Args:
            output_dir: Directory receiving the files
            prefix: File name prefix
            reports: One FileReport per scanned file

        Returns:
            Paths of the written files
        """
        written = []

        overview_path = output_dir / f"{prefix}_Overview.tsv"
        TSVGenerator._write(overview_path, OVERVIEW_HEADERS, [overview_row(r) for r in reports])
        written.append(overview_path)

        for report in reports:
            stem = TSVGenerator._sanitize_file_name(report.file_name)

            summary_path = output_dir / f"{prefix}_{stem}.tsv"
            TSVGenerator._write(summary_path, SUMMARY_HEADERS, summary_rows(report))
            written.append(summary_path)

            freq_path = output_dir / f"{prefix}_{stem}_Frequencies.tsv"
            TSVGenerator._write(freq_path, FREQUENCY_HEADERS, frequency_rows(report))
            written.append(freq_path)

        return written

    @staticmethod
    def _write(path: Path, headers: List[str], rows: List[Dict[str, Any]]) -> None:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=headers, delimiter='\t')
            writer.writeheader()
            writer.writerows(rows)

    @staticmethod
    def _sanitize_file_name(name: str) -> str:
        sanitized = name
        for char in ['\\', '/', '?', '*', ':']:
            sanitized = sanitized.replace(char, '_')
        return sanitized

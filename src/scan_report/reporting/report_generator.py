"""Report generation for scan results."""

import os
from pathlib import Path
from typing import List

from ..profiling.models import FileReport
from ..utils.logger import get_logger
from .excel_generator import ExcelGenerator
from .tsv_generator import TSVGenerator


logger = get_logger('report_generator')

FORMATS = ('xlsx', 'tsv')


class ReportGenerator:
    """Writes scan reports as one xlsx workbook or a set of TSV files."""

    def __init__(self, output_dir: str = '.', prefix: str = 'ScanReport'):
        """
        Initialize report generator.

        Args:
            output_dir: Directory to save reports (created if missing)
            prefix: Prefix for output file names
        """
        self.output_dir = Path(output_dir)
        self.prefix = prefix
        if not self.output_dir.exists():
            os.makedirs(self.output_dir, exist_ok=True)
            logger.info(f"Created output directory: {self.output_dir}")

    def generate(self, reports: List[FileReport], fmt: str = 'xlsx') -> List[Path]:
        """
        Generate reports in the requested format.

        Args:
            reports: FileReports of the run
            fmt: 'xlsx' or 'tsv'

        Returns:
            Paths of the written files

        Raises:
            ValueError: If the format is not supported
        """
        fmt = fmt.lower()
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported output format '{fmt}'. Use 'xlsx' or 'tsv'.")

        if fmt == 'xlsx':
            path = self.output_dir / f"{self.prefix}.xlsx"
            written = [ExcelGenerator().generate_scan_report(path, reports)]
        else:
            written = TSVGenerator.generate_scan_report(self.output_dir, self.prefix, reports)

        for path in written:
            logger.info(f"Wrote {fmt.upper()} file: {path}")
        return written

"""
Excel Report Generator Module

Writes one workbook per run: an Overview sheet, then a summary sheet and a
frequencies sheet for every scanned file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from ..profiling.models import FileReport
from .rows import (
    FREQUENCY_HEADERS,
    OVERVIEW_HEADERS,
    SUMMARY_HEADERS,
    frequency_rows,
    overview_row,
    summary_rows,
)

logger = logging.getLogger(__name__)

MAX_SHEET_NAME = 31
MAX_COLUMN_WIDTH = 60
INVALID_SHEET_CHARS = ['\\', '/', '?', '*', '[', ']', ':']


class ExcelGenerator:
    """Generator for xlsx scan reports."""

    def __init__(self):
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

    def generate_scan_report(self, output_path: Path, reports: List[FileReport]) -> Path:
        """
        Generate the workbook.

        Args:
            output_path: Path to save the Excel file
            reports: One FileReport per scanned file

        Returns:
            Path of the saved workbook
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()
        wb.remove(wb.active)

        self._add_sheet(wb, 'Overview', OVERVIEW_HEADERS, [overview_row(r) for r in reports])

        for report in reports:
            base = self._sanitize_sheet_name(report.file_name)
            self._add_sheet(wb, base, SUMMARY_HEADERS, summary_rows(report))

            freq_name = self._sanitize_sheet_name(f"{base[:MAX_SHEET_NAME - 5]}_freq")
            self._add_sheet(wb, freq_name, FREQUENCY_HEADERS, frequency_rows(report))

        wb.save(output_path)
        logger.info(f"Excel report saved: {output_path}")
        return output_path

    def _add_sheet(
        self,
        wb: Workbook,
        name: str,
        headers: List[str],
        rows: List[Dict[str, Any]]
    ) -> None:
        """Add a sheet with a styled, frozen header row and fitted widths."""
        ws = wb.create_sheet(self._unique_sheet_name(wb, name))

        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.border = self.border
            cell.alignment = Alignment(horizontal='center', vertical='center')

        for row_idx, row in enumerate(rows, start=2):
            for col_idx, header in enumerate(headers, start=1):
                self._write_cell(ws, row_idx, col_idx, row.get(header))

        for col_idx, header in enumerate(headers, start=1):
            longest = max(
                [len(header)] + [len(str(row.get(header))) for row in rows if row.get(header) is not None]
            )
            ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)

        ws.freeze_panes = ws['A2']

    @staticmethod
    def _write_cell(ws, row: int, column: int, value: Any) -> None:
        """
        Write one value as literal data.

        Profiled text is stored as a string cell even when it starts with
        '=', and control characters that xlsx cannot hold are removed.
        """
        if isinstance(value, str):
            value = ILLEGAL_CHARACTERS_RE.sub('', value)
            cell = ws.cell(row=row, column=column, value=value)
            cell.data_type = 's'
        else:
            ws.cell(row=row, column=column, value=value)

    def _unique_sheet_name(self, wb: Workbook, name: str) -> str:
        """Append a counter when two files map to the same sheet name."""
        candidate = name
        counter = 1
        while candidate in wb.sheetnames:
            suffix = f"_{counter}"
            candidate = name[:MAX_SHEET_NAME - len(suffix)] + suffix
            counter += 1
        return candidate

    def _sanitize_sheet_name(self, name: str) -> str:
        """
        Sanitize sheet name to comply with Excel rules.

        Excel sheet names:
        - Cannot exceed 31 characters
        - Cannot contain: \\ / ? * [ ] :
        - Cannot be empty
        """
        sanitized = ILLEGAL_CHARACTERS_RE.sub('', name)
        for char in INVALID_SHEET_CHARS:
            sanitized = sanitized.replace(char, '_')

        if len(sanitized) > MAX_SHEET_NAME:
            sanitized = sanitized[:MAX_SHEET_NAME]

        return sanitized or 'Sheet'

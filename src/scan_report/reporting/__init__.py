"""Report writing modules."""

from .report_generator import ReportGenerator
from .excel_generator import ExcelGenerator
from .tsv_generator import TSVGenerator

__all__ = ['ReportGenerator', 'ExcelGenerator', 'TSVGenerator']

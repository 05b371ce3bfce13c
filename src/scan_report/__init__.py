"""
Scan Report - Structural audit of delimited data files

Infers column types (number, date/time, text) from untyped text, computes
per-column statistics and frequency tables, and writes them as an Excel
workbook or TSV files.
"""

__version__ = '1.0.0'
__author__ = 'Your Team'

from .settings import ProfilerConfig
from .profiling import FileProfiler, FileReport, profile_file
from .reporting import ReportGenerator
from .utils import ConfigLoader, setup_logging
from .exceptions import ScanReportError, FileAccessError, EmptyFileError, ConfigurationError

__all__ = [
    'ProfilerConfig',
    'FileProfiler',
    'FileReport',
    'profile_file',
    'ReportGenerator',
    'ConfigLoader',
    'setup_logging',
    'ScanReportError',
    'FileAccessError',
    'EmptyFileError',
    'ConfigurationError',
]

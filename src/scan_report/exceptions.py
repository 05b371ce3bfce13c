"""
Exception hierarchy for the scan report engine.

File-level errors (FileAccessError, EmptyFileError) stop processing of one
file only; the run continues with the remaining files. ConfigurationError
is raised before any file is touched.
"""

from typing import Any, Dict, Optional


class ScanReportError(Exception):
    """
    Base exception for all scan report errors.

    Attributes:
        message: Human-readable error message
        details: Additional context (file path, column name, ...)
        original_exception: Wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging/reporting."""
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
            'original_error': str(self.original_exception) if self.original_exception else None
        }


class ConfigurationError(ScanReportError):
    """Invalid or missing configuration."""


class FileAccessError(ScanReportError):
    """
    Input file is missing or cannot be read.

    The file is skipped and the run continues.
    """

    def __init__(self, file_path: str, reason: str, original_exception: Optional[Exception] = None):
        super().__init__(
            f"Cannot read file '{file_path}': {reason}",
            details={'file_path': file_path},
            original_exception=original_exception
        )
        self.file_path = file_path


class EmptyFileError(ScanReportError):
    """Input file has no header line (zero bytes or only blank content)."""

    def __init__(self, file_path: str):
        super().__init__(
            f"File '{file_path}' is empty",
            details={'file_path': file_path}
        )
        self.file_path = file_path

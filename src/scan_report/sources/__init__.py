"""Input collaborators: line counting, bounded reading and file discovery."""

from .line_counter import count_lines
from .table_reader import read_table
from .discovery import discover_files

__all__ = ['count_lines', 'read_table', 'discover_files']

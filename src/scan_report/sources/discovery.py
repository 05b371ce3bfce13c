"""Locate input files in a working folder."""

from pathlib import Path
from typing import List, Union

from ..exceptions import FileAccessError

EXTENSIONS = {
    '\t': '.tsv',
    ',': '.csv',
}


def discover_files(folder: Union[str, Path], delimiter: str) -> List[Path]:
    """
    List the files to scan, chosen by the delimiter's extension.

    Args:
        folder: Directory to search (not recursive)
        delimiter: Field separator; tab selects *.tsv, comma selects *.csv

    Returns:
        Sorted list of matching file paths (possibly empty)

    Raises:
        FileAccessError: If the folder does not exist
        ValueError: If the delimiter has no associated extension
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileAccessError(str(folder), 'working folder does not exist')

    try:
        extension = EXTENSIONS[delimiter]
    except KeyError:
        raise ValueError(f"No file extension registered for delimiter {delimiter!r}")

    return sorted(
        path for path in folder.iterdir()
        if path.is_file() and path.suffix.lower() == extension
    )

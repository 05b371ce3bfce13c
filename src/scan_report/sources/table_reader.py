"""Bounded reader for delimited text files."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from ..exceptions import EmptyFileError, FileAccessError
from ..utils.logger import get_logger

logger = get_logger('table_reader')

# Only the literal NA marks an absent cell; empty fields stay ''
NA_VALUES = ['NA']


def read_table(
    file_path: Union[str, Path],
    delimiter: str,
    row_indices: Optional[Iterable[int]] = None,
    row_limit: Optional[int] = None
) -> Dict[str, pd.Series]:
    """
    Read a delimited file with every cell kept as text.

    Args:
        file_path: File to read
        delimiter: Field separator
        row_indices: Physical line numbers of the data rows to read (1-based,
            the header on line 0 is always read). Other lines are skipped
            while parsing, never materialized.
        row_limit: Read only the first N data rows

    Returns:
        Ordered mapping of column name to an object Series of cells.
        Empty fields are '' and absent fields (NA or short rows) are NaN.

    Raises:
        FileAccessError: If the file does not exist or cannot be opened
        EmptyFileError: If the file has no header line
    """
    skiprows = None
    if row_indices is not None:
        wanted = set(row_indices)
        skiprows = lambda line: line != 0 and line not in wanted

    try:
        df = pd.read_csv(
            file_path,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            na_values=NA_VALUES,
            skiprows=skiprows,
            nrows=row_limit,
            encoding_errors='replace',
        )
    except pd.errors.EmptyDataError:
        raise EmptyFileError(str(file_path))
    except OSError as e:
        raise FileAccessError(str(file_path), e.strerror or str(e), original_exception=e)
    except pd.errors.ParserError as e:
        raise FileAccessError(str(file_path), f"parse error: {e}", original_exception=e)

    logger.debug(f"Read {len(df):,} rows x {len(df.columns)} columns from {file_path}")

    return {str(name): df[name].astype(object) for name in df.columns}

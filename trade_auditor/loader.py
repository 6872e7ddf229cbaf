import io
import logging
import os
from typing import Dict, List, Union

import pandas as pd

from .exceptions import EmptyDatasetError, SourceParseError

logger = logging.getLogger(__name__)

CsvSource = Union[str, os.PathLike, io.IOBase]


def read_trade_csv(source: CsvSource) -> List[Dict[str, str]]:
    """
    Loads a trade export into an ordered list of header-keyed string rows.

    Values are kept as raw strings; blank cells become ''. Blank lines are
    skipped. Structural problems raise SourceParseError, a file without data
    rows raises EmptyDatasetError.
    """
    if isinstance(source, (str, os.PathLike)) and not os.path.exists(source):
        raise SourceParseError(f"CSV file not found: {source}")

    try:
        # index_col=False: a trailing delimiter must not turn the first
        # column into the index and shift every value left.
        df = pd.read_csv(
            source,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyDatasetError("CSV file is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error(f"Error parsing CSV {source}: {e}")
        raise SourceParseError(f"Failed to read CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]

    # Rows of bare delimiters survive skip_blank_lines; drop them too.
    if not df.empty:
        blank = df.apply(lambda r: all(not str(v).strip() for v in r), axis=1)
        df = df[~blank]

    if df.empty:
        raise EmptyDatasetError("CSV file is empty")

    rows = df.to_dict(orient="records")
    logger.info(f"Loaded {len(rows)} rows from CSV")
    return rows

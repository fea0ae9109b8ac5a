"""Read a browser password export into header-keyed rows."""

import warnings
from io import StringIO

import pandas as pd

from pass_cleaner.exceptions import ParseError


def _to_text(raw):
    """Decode raw export bytes as UTF-8, tolerating a leading BOM."""
    if isinstance(raw, str):
        return raw[1:] if raw.startswith('\ufeff') else raw
    try:
        return bytes(raw).decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ParseError(f"CSV export is not valid UTF-8: {e}") from e


def decode_csv(raw, logger=None):
    """Parse CSV content into a list of dicts keyed by the header row.

    Rows shorter than the header are padded with empty strings. Rows longer
    than the header are skipped with a warning; the rest of the file is
    still read. Raises ParseError if the content is empty, undecodable or
    not valid CSV.
    """
    text = _to_text(raw)
    if not text.strip():
        raise ParseError("CSV export is empty")

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', pd.errors.ParserWarning)
            df = pd.read_csv(
                StringIO(text),
                dtype=str,
                keep_default_na=False,
                index_col=False,
                on_bad_lines='warn',
            )
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"CSV export has no header row: {e}") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise ParseError(f"CSV export is malformed: {e}") from e

    for w in caught:
        if issubclass(w.category, pd.errors.ParserWarning) and logger:
            logger.warning(f"Skipped malformed row: {str(w.message).strip()}")

    df = df.fillna('')
    rows = df.to_dict('records')

    if logger:
        logger.info(f"Decoded {len(rows)} rows with {len(df.columns)} columns")
    return rows

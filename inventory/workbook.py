"""
Spreadsheet import for count sheets.
Reads the first worksheet of an Excel upload into a list of rows.
"""

import logging
import math
import numbers
from datetime import date, datetime
from typing import Any, BinaryIO, List, Union

import pandas as pd

from inventory.errors import SpreadsheetImportError
from inventory.rows import DEFAULT_HEADER, MIN_COLUMNS, is_empty

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = ["xlsx", "xls"]


def clean_cell(value: Any) -> Any:
    """Convert a pandas/numpy cell into a plain value the record store can hold."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        if math.isnan(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        return value.strip()
    return str(value)


def pad_header(rows: List[List[Any]]) -> List[List[Any]]:
    """
    Make sure the header row has at least the five expected columns.

    Missing positions take their default names, so a four-column header
    gains exactly one "Entered By" column. Headers that are already wide
    enough are left alone. Data rows are padded with empty cells to the
    header width.
    """
    if not rows:
        return rows

    header = rows[0]
    if len(header) < MIN_COLUMNS:
        header.extend(DEFAULT_HEADER[len(header):])

    width = len(header)
    for cells in rows[1:]:
        if len(cells) < width:
            cells.extend([None] * (width - len(cells)))
    return rows


def read_rows(source: Union[str, BinaryIO]) -> List[List[Any]]:
    """
    Parse an uploaded workbook into rows, header first.

    Raises:
        SpreadsheetImportError: the file can't be read or has no rows.
    """
    try:
        df = pd.read_excel(source, sheet_name=0, header=None, dtype=object)
    except Exception as e:
        logger.error(f"Could not read workbook: {e}")
        raise SpreadsheetImportError(f"Could not read workbook: {e}") from e

    rows = []
    for record in df.itertuples(index=False, name=None):
        cells = [clean_cell(v) for v in record]
        while cells and is_empty(cells[-1]):
            cells.pop()
        if cells:
            rows.append(cells)

    if not rows:
        raise SpreadsheetImportError("Workbook has no rows")

    rows[0] = ["" if is_empty(c) else str(c) for c in rows[0]]
    logger.info(f"📄 Workbook parsed: {len(rows) - 1} data rows, {len(rows[0])} header columns")
    return pad_header(rows)

"""
Row model for a count sheet.

A sheet is a list of rows; row 0 is the header and every later row is a
data row laid out as ``[SKU, On Hand, Physical Count, Description, Entered By]``.
Data rows are addressed by their position in the sheet (their ``key``), which
never changes once a sheet has been uploaded.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

SKU_COL = 0
ON_HAND_COL = 1
COUNT_COL = 2
DESCRIPTION_COL = 3
ENTERED_BY_COL = 4

DEFAULT_HEADER = ["SKU", "On Hand", "Physical Count", "Description", "Entered By"]
MIN_COLUMNS = len(DEFAULT_HEADER)


def is_empty(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, float) and math.isnan(cell):
        return True
    if isinstance(cell, str) and not cell.strip():
        return True
    return False


def to_int(cell: Any) -> Optional[int]:
    """Best-effort integer view of a stored cell; anything unparseable is empty."""
    if is_empty(cell) or isinstance(cell, bool):
        return None
    if isinstance(cell, int):
        return cell
    if isinstance(cell, float):
        return int(cell) if cell.is_integer() else None
    try:
        return int(str(cell).strip())
    except ValueError:
        return None


def parse_count(raw: Optional[str]) -> Optional[int]:
    """
    Parse a physical count typed by a user.

    Empty input clears the count. Input that is not a non-negative integer
    is treated the same as empty.
    """
    if raw is None or not str(raw).strip():
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def cell_at(cells: Sequence[Any], col: int) -> Any:
    return cells[col] if col < len(cells) else None


@dataclass(frozen=True)
class DataRow:
    key: int
    sku: str
    on_hand: Optional[int]
    physical_count: Optional[int]
    description: Optional[str]
    entered_by: Optional[str]

    @property
    def editable(self) -> bool:
        return not is_empty(self.description)

    @classmethod
    def from_cells(cls, key: int, cells: Sequence[Any]) -> "DataRow":
        sku = cell_at(cells, SKU_COL)
        description = cell_at(cells, DESCRIPTION_COL)
        entered_by = cell_at(cells, ENTERED_BY_COL)
        return cls(
            key=key,
            sku="" if is_empty(sku) else str(sku),
            on_hand=to_int(cell_at(cells, ON_HAND_COL)),
            physical_count=to_int(cell_at(cells, COUNT_COL)),
            description=None if is_empty(description) else str(description),
            entered_by=None if is_empty(entered_by) else str(entered_by),
        )


def data_rows(rows: Sequence[Sequence[Any]]) -> List[DataRow]:
    """All rows after the header, as DataRow views."""
    return [DataRow.from_cells(key, cells) for key, cells in enumerate(rows) if key > 0]


def is_editable(cells: Sequence[Any]) -> bool:
    return not is_empty(cell_at(cells, DESCRIPTION_COL))


def sku_matches(sku: Any, query: str) -> bool:
    if not query:
        return True
    return query.lower() in ("" if is_empty(sku) else str(sku)).lower()


def filter_by_sku(rows: Sequence[Sequence[Any]], query: Optional[str]) -> List[Sequence[Any]]:
    """Rows whose SKU contains ``query`` (case-insensitive). The header is always kept."""
    if not rows:
        return []
    query = (query or "").strip()
    return [rows[0]] + [cells for cells in rows[1:] if sku_matches(cell_at(cells, SKU_COL), query)]


def filter_data_rows(rows: Iterable[DataRow], query: Optional[str]) -> List[DataRow]:
    query = (query or "").strip()
    return [row for row in rows if sku_matches(row.sku, query)]


def next_editable_key(rows: Sequence[Sequence[Any]], key: int) -> Optional[int]:
    """
    Key of the first editable row after ``key`` in sheet order, or None.

    Works on the unfiltered sheet so the result does not depend on any
    search filter that happens to be active.
    """
    for candidate in range(max(key, 0) + 1, len(rows)):
        if is_editable(rows[candidate]):
            return candidate
    return None

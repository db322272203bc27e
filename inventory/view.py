"""
Reconciliation view: the in-memory state behind the count page.

The view owns the working copy of one sheet's rows. Loading a sheet moves it
from NO_RECORD_LOADED to RECORD_LOADED; edits, submits and exports never
change that state. Every edit is written back through a DebouncedWriter.
"""

import logging
from enum import Enum
from typing import List, Optional

from common.config import SAVE_DEBOUNCE_SECONDS
from inventory.discrepancy import DiscrepancyClass, classify
from inventory.errors import (
    NoRecordLoadedError,
    PermissionDeniedError,
    RecordLoadError,
)
from inventory.persistence import DebouncedWriter
from inventory.records import RecordStore, RecordSummary, TabularRecord
from inventory.reports import Report, missing_counts_report, mismatch_report
from inventory.rows import (
    COUNT_COL,
    ENTERED_BY_COL,
    MIN_COLUMNS,
    DataRow,
    data_rows,
    filter_data_rows,
    next_editable_key,
    parse_count,
)
from inventory.workbook import read_rows

logger = logging.getLogger(__name__)


class ViewState(Enum):
    NO_RECORD_LOADED = "no_record_loaded"
    RECORD_LOADED = "record_loaded"


class ReconciliationView:
    def __init__(self, session, store: RecordStore, save_delay: Optional[float] = None):
        self.session = session
        self.store = store
        self.save_delay = SAVE_DEBOUNCE_SECONDS if save_delay is None else save_delay
        self.record: Optional[TabularRecord] = None
        self.writer: Optional[DebouncedWriter] = None
        self._auto_load_attempted = False

    @property
    def capabilities(self):
        return self.session.capabilities

    @property
    def state(self) -> ViewState:
        return ViewState.RECORD_LOADED if self.record is not None else ViewState.NO_RECORD_LOADED

    @property
    def record_id(self) -> Optional[str]:
        return self.record.id if self.record is not None else None

    @property
    def rows(self) -> List[list]:
        return self.record.rows if self.record is not None else []

    def _require_record(self):
        if self.record is None:
            raise NoRecordLoadedError("No count sheet is loaded")

    def _load(self, record: TabularRecord):
        if self.writer is not None:
            self.writer.flush()
        self.record = record
        self.writer = DebouncedWriter(self.store, record.id, delay=self.save_delay)
        logger.info(f"Sheet {record.id} loaded for {self.session.username} ({len(record.rows) - 1} rows)")

    # Loading

    def select_record(self, record_id: str) -> bool:
        """Load a stored sheet by id. On failure the current state is kept."""
        try:
            record = self.store.fetch_by_id(record_id)
        except RecordLoadError as e:
            logger.warning(f"Load failed: {e}")
            return False
        self._load(record)
        return True

    def auto_load_latest(self) -> bool:
        """Load the newest sheet, once per view, for roles that don't pick sheets."""
        if not self.capabilities.auto_load_latest or self._auto_load_attempted:
            return False
        self._auto_load_attempted = True
        try:
            record = self.store.fetch_latest()
        except RecordLoadError as e:
            logger.warning(f"Auto-load failed: {e}")
            return False
        if record is None:
            logger.info("No sheets uploaded yet")
            return False
        self._load(record)
        return True

    def summaries(self) -> List[RecordSummary]:
        return self.store.list_summaries()

    def upload(self, source) -> TabularRecord:
        """
        Import a workbook, store it as a new sheet and load it.

        Raises:
            PermissionDeniedError: role can't upload.
            SpreadsheetImportError: the workbook couldn't be parsed.
            PersistError: the sheet couldn't be stored.
        """
        if not self.capabilities.can_upload:
            raise PermissionDeniedError(f"{self.session.role} users cannot upload sheets")
        rows = read_rows(source)
        record = self.store.insert(self.session.username, rows)
        self._load(record)
        return record

    # Rows

    def data_rows(self) -> List[DataRow]:
        return data_rows(self.rows)

    def row(self, key: int) -> DataRow:
        self._require_record()
        if key < 1 or key >= len(self.rows):
            raise KeyError(key)
        return DataRow.from_cells(key, self.rows[key])

    def visible_rows(self, query: Optional[str] = None) -> List[DataRow]:
        """Rows to display; the search filter only applies to roles that can search."""
        rows = self.data_rows()
        if query and self.capabilities.can_search:
            rows = filter_data_rows(rows, query)
        return rows

    def classify(self, key: int) -> DiscrepancyClass:
        row = self.row(key)
        return classify(row.physical_count, row.on_hand)

    def next_editable(self, key: int) -> Optional[int]:
        return next_editable_key(self.rows, key)

    # Editing

    def edit_cell(self, key: int, raw_value: Optional[str]) -> DataRow:
        """
        Set a row's physical count from user input and stamp the editor.

        Raises:
            NoRecordLoadedError: nothing loaded.
            PermissionDeniedError: the row has no description.
            KeyError: no such row.
        """
        row = self.row(key)
        if not row.editable:
            raise PermissionDeniedError(f"Row {key} ({row.sku}) is not editable")

        cells = self.rows[key]
        if len(cells) < MIN_COLUMNS:
            cells.extend([None] * (MIN_COLUMNS - len(cells)))
        cells[COUNT_COL] = parse_count(raw_value)
        cells[ENTERED_BY_COL] = self.session.username

        self.writer.schedule(self.rows)
        return DataRow.from_cells(key, cells)

    def submit(self) -> bool:
        """Save the current rows again, regardless of pending edits."""
        self._require_record()
        saved = self.writer.write_now(self.rows)
        if saved:
            logger.info(f"✅ Sheet {self.record_id} submitted by {self.session.username}")
        return saved

    @property
    def last_save_error(self):
        return self.writer.last_error if self.writer is not None else None

    def close(self):
        if self.writer is not None:
            self.writer.flush()

    # Exports

    def export_mismatches(self) -> Report:
        self._require_record()
        if not self.capabilities.can_export_mismatches:
            raise PermissionDeniedError(f"{self.session.role} users cannot export mismatches")
        return mismatch_report(self.data_rows())

    def export_missing_counts(self) -> Report:
        self._require_record()
        return missing_counts_report(self.data_rows())

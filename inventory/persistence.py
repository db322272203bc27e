"""
Debounced write-back of edited rows.

Edits schedule a trailing write of the whole sheet; a burst of edits inside
the quiet period collapses into a single write. ``flush`` writes any pending
change straight away.

Every snapshot is numbered when it is taken. Writes run one at a time, and a
snapshot older than one already written is dropped, so a slow timer write
can never overwrite rows saved by a later ``write_now``.
"""

import copy
import logging
import threading
from typing import Any, List, Optional, Tuple

from inventory.errors import PersistError

logger = logging.getLogger(__name__)

Snapshot = Tuple[int, List[List[Any]]]


class DebouncedWriter:
    def __init__(self, store, record_id: str, delay: float = 1.0):
        self.store = store
        self.record_id = record_id
        self.delay = delay
        self.last_error: Optional[PersistError] = None
        self.write_count = 0
        self._pending: Optional[Snapshot] = None
        self._timer: Optional[threading.Timer] = None
        self._seq = 0
        self._written_seq = 0
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _take_snapshot(self, rows: List[List[Any]]) -> Snapshot:
        # Caller holds _lock
        self._seq += 1
        return self._seq, copy.deepcopy(rows)

    def _cancel_timer(self):
        # Caller holds _lock
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def schedule(self, rows: List[List[Any]]):
        """Queue a snapshot of ``rows`` for writing."""
        with self._lock:
            snapshot = self._take_snapshot(rows)
            if self.delay > 0:
                self._pending = snapshot
                self._cancel_timer()
                self._timer = threading.Timer(self.delay, self.flush)
                self._timer.daemon = True
                self._timer.start()
                return
        self._write(snapshot)

    def flush(self) -> bool:
        """Write the pending snapshot now. True if nothing failed."""
        with self._lock:
            self._cancel_timer()
            snapshot, self._pending = self._pending, None

        if snapshot is None:
            return self.last_error is None
        return self._write(snapshot)

    def write_now(self, rows: List[List[Any]]) -> bool:
        """Drop any pending snapshot and write ``rows`` immediately."""
        with self._lock:
            self._cancel_timer()
            self._pending = None
            snapshot = self._take_snapshot(rows)
        return self._write(snapshot)

    def cancel(self):
        with self._lock:
            self._cancel_timer()
            self._pending = None

    def _write(self, snapshot: Snapshot) -> bool:
        seq, rows = snapshot
        with self._write_lock:
            if seq <= self._written_seq:
                logger.debug(f"Skipping stale snapshot {seq} for {self.record_id}")
                return self.last_error is None
            try:
                self.store.update_rows(self.record_id, rows)
            except PersistError as e:
                logger.warning(f"Save failed for {self.record_id}: {e}")
                self.last_error = e
                return False
            self._written_seq = seq
            self.last_error = None
            self.write_count += 1
            return True

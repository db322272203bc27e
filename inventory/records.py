"""
Record store for uploaded count sheets.

Each document in the files collection holds one sheet:
``{_id, created_at, uploaded_by, data: [[header...], [row...], ...]}``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from inventory.errors import PersistError, RecordLoadError

logger = logging.getLogger(__name__)


@dataclass
class TabularRecord:
    id: str
    rows: List[List[Any]]
    created_at: Optional[datetime] = None
    uploaded_by: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict) -> "TabularRecord":
        return cls(
            id=str(doc["_id"]),
            rows=[list(r) for r in (doc.get("data") or [])],
            created_at=doc.get("created_at"),
            uploaded_by=doc.get("uploaded_by"),
        )


@dataclass
class RecordSummary:
    id: str
    created_at: Optional[datetime] = field(default=None)

    @property
    def label(self) -> str:
        if self.created_at is None:
            return self.id
        return self.created_at.strftime("%b %d, %Y %H:%M:%S")


def _object_id(record_id: str) -> ObjectId:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError) as e:
        raise RecordLoadError(f"Invalid record id: {record_id!r}") from e


class RecordStore:
    """Create, read and update count sheets in a MongoDB collection."""

    def __init__(self, collection):
        self.collection = collection

    def insert(self, uploaded_by: str, rows: List[List[Any]]) -> TabularRecord:
        """
        Store a newly uploaded sheet.

        Raises:
            PersistError: the insert failed.
        """
        doc = {
            "created_at": datetime.now(),
            "uploaded_by": uploaded_by,
            "data": rows,
        }
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Record insert failed: {e}")
            raise PersistError(f"Could not store sheet: {e}") from e

        doc["_id"] = result.inserted_id
        logger.info(f"✅ Sheet stored: {result.inserted_id} by {uploaded_by} ({len(rows) - 1} rows)")
        return TabularRecord.from_document(doc)

    def fetch_by_id(self, record_id: str) -> TabularRecord:
        """
        Raises:
            RecordLoadError: bad id, missing record or store failure.
        """
        try:
            doc = self.collection.find_one({"_id": _object_id(record_id)})
        except PyMongoError as e:
            raise RecordLoadError(f"Could not load record {record_id}: {e}") from e
        if not doc:
            raise RecordLoadError(f"Record not found: {record_id}")
        return TabularRecord.from_document(doc)

    def fetch_latest(self) -> Optional[TabularRecord]:
        """Most recently created sheet, or None if there are none."""
        try:
            doc = self.collection.find_one({}, sort=[("created_at", DESCENDING)])
        except PyMongoError as e:
            raise RecordLoadError(f"Could not load latest record: {e}") from e
        return TabularRecord.from_document(doc) if doc else None

    def list_summaries(self, limit: int = 0) -> List[RecordSummary]:
        """Ids and creation times, newest first. Store failures give an empty list."""
        try:
            cursor = self.collection.find({}, {"created_at": 1}).sort("created_at", DESCENDING)
            if limit:
                cursor = cursor.limit(limit)
            return [RecordSummary(id=str(d["_id"]), created_at=d.get("created_at")) for d in cursor]
        except PyMongoError as e:
            logger.error(f"Error listing records: {e}")
            return []

    def update_rows(self, record_id: str, rows: List[List[Any]]) -> bool:
        """
        Replace the rows of a stored sheet.

        Raises:
            PersistError: the update failed or the record no longer exists.
        """
        try:
            result = self.collection.update_one(
                {"_id": _object_id(record_id)},
                {"$set": {"data": rows}},
            )
        except (PyMongoError, RecordLoadError) as e:
            raise PersistError(f"Could not save record {record_id}: {e}") from e

        if result.matched_count == 0:
            raise PersistError(f"Record not found: {record_id}")
        logger.debug(f"Rows saved for {record_id}")
        return True

# Shared pytest fixtures
from __future__ import annotations

import copy
from collections import defaultdict
from io import BytesIO
from pathlib import Path
from types import SimpleNamespace

import bcrypt
import pandas as pd
import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from auth.session import Session
from inventory.records import RecordStore


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction=1):
        self.docs = sorted(self.docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n):
        if n:
            self.docs = self.docs[:n]
        return self

    def __iter__(self):
        return iter(self.docs)


class FakeCollection:
    """In-memory stand-in for the pymongo collection calls the app makes."""

    def __init__(self):
        self.docs = []
        self.fail = False
        self.indexes = []
        self.update_calls = 0

    def _check(self):
        if self.fail:
            raise PyMongoError("store unavailable")

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    @staticmethod
    def _project(doc, projection):
        if not projection:
            return copy.deepcopy(doc)
        keep = {k for k, v in projection.items() if v}
        return {k: copy.deepcopy(v) for k, v in doc.items() if k == "_id" or k in keep}

    def insert_one(self, doc):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find_one(self, query=None, projection=None, sort=None):
        self._check()
        docs = [d for d in self.docs if self._matches(d, query or {})]
        for key, direction in reversed(sort or []):
            docs = sorted(docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self._project(docs[0], projection) if docs else None

    def find(self, query=None, projection=None):
        self._check()
        return FakeCursor([self._project(d, projection) for d in self.docs if self._matches(d, query or {})])

    def update_one(self, query, update):
        self._check()
        self.update_calls += 1
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def create_index(self, keys, **kwargs):
        self._check()
        self.indexes.append((keys, kwargs))
        return "_".join(f"{k}_{d}" for k, d in keys)


@pytest.fixture()
def files_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture()
def users_collection() -> FakeCollection:
    col = FakeCollection()
    salt = bcrypt.gensalt(rounds=4)
    col.insert_one({"username": "alice", "password": bcrypt.hashpw(b"secret", salt), "role": "admin"})
    col.insert_one({"username": "bob", "password": bcrypt.hashpw(b"hunter2", salt), "role": "user"})
    return col


@pytest.fixture()
def store(files_collection) -> RecordStore:
    return RecordStore(files_collection)


@pytest.fixture()
def admin_session() -> Session:
    return Session(username="alice", role="admin")


@pytest.fixture()
def user_session() -> Session:
    return Session(username="bob", role="user")


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [
        ["SKU", "On Hand", "Physical Count", "Description", "Entered By"],
        ["A1", 100, None, "Widget", None],
        ["B2", 50, 50, "Gadget", "bob"],
        ["C3", 20, None, None, None],
        ["abc-9", 5, 2, "Bolt", "alice"],
        ["D4", 10, None, "Nut", None],
    ]


def make_workbook(rows: list[list[object]], path: Path | None = None):
    """Write rows (header first) to an xlsx file or an in-memory buffer."""
    target = path if path is not None else BytesIO()
    df = pd.DataFrame(rows)
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    if isinstance(target, BytesIO):
        target.seek(0)
    return target


@pytest.fixture()
def workbook_factory():
    return make_workbook


@pytest.fixture()
def fake_database():
    """Mapping of collection name to FakeCollection, like a pymongo Database."""
    return defaultdict(FakeCollection)

"""
Shared test fixtures for the arbolitos test suite.

Provides:
- FakeCollection: in-memory stand-in for the parts of pymongo.Collection the
  plant operations use (insert_one, find, update_one, delete_one, create_index)
- Sample plants seeded into the fake collection

Usage:
    def test_example(plants_collection):
        plant_id = add_plant(plants_collection, "Rosal", "Rosa rosae", "flor")
        assert plants_collection.count() == 1
"""

from __future__ import annotations

import copy
import logging
import re
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId

# ---------------------------------------------------------------------------
# Logging — keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("arbolitos").setLevel(logging.WARNING)


def _field_matches(value, condition) -> bool:
    # Python re stands in for the server's PCRE; tests using the fake stick to patterns both accept
    if isinstance(condition, dict) and "$regex" in condition:
        flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
        pattern = re.compile(condition["$regex"], flags)
        values = value if isinstance(value, list) else [value]
        return any(isinstance(v, str) and pattern.search(v) for v in values)
    if isinstance(value, list):
        return condition in value
    return value == condition


def _matches(doc, query) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in condition):
                return False
        elif not _field_matches(doc.get(key), condition):
            return False
    return True


class FakeCollection:
    """Records every call in ``calls`` so tests can assert nothing reached storage."""

    name = "plants"

    def __init__(self):
        self.docs = []
        self.calls = []

    def count(self) -> int:
        return len(self.docs)

    def get(self, oid):
        for doc in self.docs:
            if doc["_id"] == oid:
                return doc
        return None

    def insert_one(self, document):
        self.calls.append("insert_one")
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    def find(self, query=None):
        self.calls.append("find")
        query = query or {}
        return iter([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    def update_one(self, query, update):
        self.calls.append("update_one")
        for doc in self.docs:
            if not _matches(doc, query):
                continue
            for field_name, value in update.get("$set", {}).items():
                doc[field_name] = value
            for field_name, value in update.get("$push", {}).items():
                doc.setdefault(field_name, []).append(copy.deepcopy(value))
            for field_name, value in update.get("$pull", {}).items():
                doc[field_name] = [v for v in doc.get(field_name, []) if v != value]
            return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_one(self, query):
        self.calls.append("delete_one")
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def create_index(self, keys):
        self.calls.append("create_index")
        return "_".join(f"{field_name}_{direction}" for field_name, direction in keys)


# ========================== Collection Fixtures ============================


@pytest.fixture()
def plants_collection():
    """Empty fake collection; each test gets a fresh one."""
    return FakeCollection()


@pytest.fixture()
def seeded_collection(plants_collection):
    """Fake collection holding a rose, a lemon tree and a fern."""
    created = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    for name, species, tags in (
        ("Rosal del patio", "Rosa rosae", ["flor", "exterior"]),
        ("Limonero", "Citrus limon", ["frutal", "maceta"]),
        ("Helecho", "Nephrolepis exaltata", ["interior"]),
    ):
        plants_collection.docs.append({
            "_id": ObjectId(),
            "name": name,
            "species": species,
            "tags": tags,
            "notes": "",
            "updates": [],
            "created_at": created,
        })
    plants_collection.calls.clear()
    return plants_collection

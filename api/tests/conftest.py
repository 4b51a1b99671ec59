# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import copy
import pytest
from typing import Dict, Any, List, Optional
import bson
from bson import ObjectId

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'
os.environ['MONGODB_DATABASE'] = 'safety_portal_test'

from domain.errors import ConflictError  # noqa: E402

# Fields that must be unique per collection, mirroring the MongoDB indexes
UNIQUE_KEYS = {
    "teams": ("year", "name"),
    "vehicles": ("plateNumber",),
    "settings": ("key",),
}


class InMemoryRecordStore:
    """
    Record store with the MongoDBService CRUD surface, kept in memory.

    Documents are BSON encoded on every write so values MongoDB would reject
    fail here too.
    """

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.writes = 0
        self.fail_writes_after: Optional[int] = None

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.collections.setdefault(name, {})

    @staticmethod
    def _matches(document: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(document.get(key) == value for key, value in (filters or {}).items())

    def _check_write(self):
        if self.fail_writes_after is not None and self.writes >= self.fail_writes_after:
            raise RuntimeError("store unavailable")
        self.writes += 1

    def _check_unique(self, collection: str, document: Dict[str, Any], doc_id: str):
        keys = UNIQUE_KEYS.get(collection)
        if not keys:
            return
        for other_id, other in self._collection(collection).items():
            if other_id != doc_id and all(other.get(key) == document.get(key) for key in keys):
                raise ConflictError("Document with this identifier already exists")

    @staticmethod
    def _record(doc_id: str, document: Dict[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(document)
        record["id"] = doc_id
        return record

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        document = self._collection(collection).get(doc_id)
        return self._record(doc_id, document) if document is not None else None

    def find(self, collection: str, filters: Dict = None, sort_by: str = None,
             sort_order: int = -1) -> List[Dict[str, Any]]:
        records = [
            self._record(doc_id, document)
            for doc_id, document in self._collection(collection).items()
            if self._matches(document, filters)
        ]
        if sort_by:
            records.sort(key=lambda record: record.get(sort_by), reverse=sort_order < 0)
        return records

    def find_one(self, collection: str, filters: Dict) -> Optional[Dict[str, Any]]:
        found = self.find(collection, filters)
        return found[0] if found else None

    def insert(self, collection: str, document: Dict, doc_id: str = None) -> Dict[str, Any]:
        self._check_write()
        doc_id = doc_id or str(ObjectId())
        document = {key: value for key, value in document.items() if key != "id"}
        self._check_unique(collection, document, doc_id)
        bson.encode(document)
        self._collection(collection)[doc_id] = copy.deepcopy(document)
        return self._record(doc_id, document)

    def update(self, collection: str, doc_id: str, fields: Dict) -> Optional[Dict[str, Any]]:
        self._check_write()
        existing = self._collection(collection).get(doc_id)
        if existing is None:
            return None
        merged = dict(existing)
        merged.update(copy.deepcopy(fields))
        self._check_unique(collection, merged, doc_id)
        bson.encode(merged)
        self._collection(collection)[doc_id] = merged
        return self._record(doc_id, merged)

    def delete(self, collection: str, doc_id: str) -> bool:
        self._check_write()
        return self._collection(collection).pop(doc_id, None) is not None

    def count(self, collection: str, filters: Dict = None) -> int:
        return len(self.find(collection, filters))

    def upsert_setting(self, key: str, value: str) -> Dict[str, Any]:
        existing = self.find_one("settings", {"key": key})
        if existing:
            return self.update("settings", existing["id"], {"value": value})
        return self.insert("settings", {"key": key, "value": value})

    def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "ping": True, "database": "in-memory"}

    def create_indexes(self) -> None:
        pass

    def close_connection(self) -> None:
        pass


@pytest.fixture
def store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def app(store):
    """Flask application backed by the in-memory store."""
    from app import create_app

    application = create_app(
        config={
            'TESTING': True,
            'BASE_URL': 'http://test.local',
            'ADMIN_PIN': '2026',
            'DEFAULT_TEAM_YEAR': 2025,
            'OTEL_ENABLED': False,
        },
        record_store=store
    )
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def team_service(store):
    from services.teams import TeamService
    return TeamService(store, default_year=2025)


@pytest.fixture
def lock_portal(store):
    """Lock the portal for editing."""
    store.upsert_setting("global_lock", "true")
    return store


@pytest.fixture
def sample_team_data() -> Dict[str, Any]:
    """Team payload with every counter set."""
    return {
        "name": "Alpha",
        "year": 2025,
        "vehicleCount": 12,
        "workAccident": 1,
        "fineSpeed": 2,
        "fineSignal": 1,
        "fineLane": 0,
        "inspectionMiss": 1,
        "suggestion": 3,
        "activity": 2,
        "vehicleAccidents": {"p70_79": 1},
    }


@pytest.fixture
def sample_vehicle_data() -> Dict[str, Any]:
    return {
        "plateNumber": "12GA3456",
        "vehicleType": "truck",
        "model": "Porter II",
        "year": 2021,
        "team": "Alpha",
        "driver": "Kim Minsu",
        "status": "operating",
        "inspectionDate": "2025-03-01",
        "mileage": 42000,
    }


@pytest.fixture
def sample_equipment_request() -> Dict[str, Any]:
    return {
        "category": "equip_request",
        "title": "Alpha gloves request",
        "content": {
            "team": "Alpha",
            "requester": "Lee",
            "items": [{"name": "Safety gloves", "quantity": 10, "category": "protective_gear"}],
        },
    }

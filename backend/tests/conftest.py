"""
HRMS Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── memory_store: InMemoryEmployeeStore (no MongoDB needed)
    ├── mock_collection: AsyncMock standing in for a pymongo AsyncCollection
    ├── mock_store: AsyncMock EmployeeStore for service-level tests
    ├── sample_employee_document: A stored document as MongoDB returns it
    └── test_client: HTTPX AsyncClient bound to an app serving memory_store
"""

import os

# Before any hrms import so Settings() never sees a developer's .env values
os.environ["MONGO_URI"] = "mongodb://localhost:27017/fiber-hrms-test"
os.environ["MONGO_DB_NAME"] = "fiber-hrms-test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from bson.errors import InvalidId
from httpx import ASGITransport, AsyncClient

from hrms.exceptions import InvalidEmployeeIdError
from hrms.models.employee import from_document, to_document
from hrms.schemas.employee import EmployeeRequest, EmployeeResponse
from hrms.services.employee_store import EmployeeStore


class InMemoryEmployeeStore(EmployeeStore):
    """
    Dict-backed EmployeeStore with the same identifier rules as MongoDB.

    `calls` records every storage operation so tests can assert that a
    rejected identifier never reached storage.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.healthy = True

    def parse_id(self, raw_id: str) -> ObjectId:
        try:
            return ObjectId(raw_id)
        except (InvalidId, TypeError) as e:
            raise InvalidEmployeeIdError(raw_id) from e

    async def find_all(self) -> List[EmployeeResponse]:
        self.calls.append("find_all")
        return [from_document(doc) for doc in self.documents.values()]

    async def insert(self, payload: EmployeeRequest) -> ObjectId:
        self.calls.append("insert")
        new_id = ObjectId()
        self.documents[new_id] = {"_id": new_id, **to_document(payload)}
        return new_id

    async def find_by_id(self, employee_id: ObjectId) -> Optional[EmployeeResponse]:
        self.calls.append("find_by_id")
        document = self.documents.get(employee_id)
        return from_document(document) if document else None

    async def update_by_id(
        self, employee_id: ObjectId, payload: EmployeeRequest
    ) -> Optional[EmployeeResponse]:
        self.calls.append("update_by_id")
        document = self.documents.get(employee_id)
        if document is None:
            return None
        document.update(to_document(payload))
        return from_document(document)

    async def delete_by_id(self, employee_id: ObjectId) -> bool:
        self.calls.append("delete_by_id")
        return self.documents.pop(employee_id, None) is not None

    async def ping(self) -> bool:
        return self.healthy


@pytest.fixture
def memory_store():
    return InMemoryEmployeeStore()


@pytest.fixture
def mock_collection():
    """
    A MagicMock shaped like pymongo's AsyncCollection.

    `find()` is synchronous in pymongo (it returns a cursor); every other
    method used by MongoEmployeeStore is a coroutine.
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def mock_store():
    """AsyncMock EmployeeStore whose parse_id behaves like the real one."""
    store = AsyncMock(spec=EmployeeStore)
    store.parse_id = MagicMock(side_effect=InMemoryEmployeeStore().parse_id)
    return store


@pytest.fixture
def sample_employee_document():
    return {
        "_id": ObjectId("65f1c0ffee00000000000001"),
        "name": "Ann",
        "salary": 5000.0,
        "age": 30.0,
    }


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to an app that serves `memory_store`.

    ASGITransport does not run the lifespan, and the injected store means
    the MongoDB bootstrap would be skipped even if it did.
    """
    from hrms.main import create_app

    app = create_app(employee_store=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

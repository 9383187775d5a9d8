"""
Portfolio API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The MongoDB handle is replaced by an in-memory double whose
       collections return real `pymongo.results` objects, so services and
       routes run unchanged without a database server.

Fixtures:
    ├── fake_db: In-memory stand-in for portfolio_api.database.Database
    ├── auth_headers: Authorization header carrying a freshly issued token
    └── test_client: HTTPX AsyncClient bound to a fresh app using fake_db
"""

import os
from collections import defaultdict
from typing import Any, Dict, List, Optional

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["TOKEN_SECRET"] = "test-secret-not-real"
os.environ["REQUIRE_AUTH"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertManyResult, InsertOneResult, UpdateResult


# ══════════════════════════════════════════════════════════════════════════
# In-memory MongoDB double
# ══════════════════════════════════════════════════════════════════════════


class FakeCursor:
    def __init__(self, collection: "FakeCollection", documents: List[Dict[str, Any]]):
        self._collection = collection
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        self._collection.raise_if_failing()
        return [dict(doc) for doc in self._documents]


class FakeCollection:
    """
    Supports the query shapes the services use: `{}` and `{"_id": oid}`.

    Set `error` to an exception instance to make every operation raise it.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None

    def raise_if_failing(self) -> None:
        if self.error is not None:
            raise self.error

    def _matching(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            doc for doc in self.documents
            if all(doc.get(key) == value for key, value in query.items())
        ]

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor(self, self._matching(query))

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.raise_if_failing()
        matches = self._matching(query)
        return dict(matches[0]) if matches else None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        self.raise_if_failing()
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], True)

    async def insert_many(self, documents: List[Dict[str, Any]]) -> InsertManyResult:
        self.raise_if_failing()
        ids = []
        for document in documents:
            document.setdefault("_id", ObjectId())
            self.documents.append(dict(document))
            ids.append(document["_id"])
        return InsertManyResult(ids, True)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> UpdateResult:
        self.raise_if_failing()
        matches = self._matching(query)[:1]
        modified = 0
        for doc in matches:
            changes = update["$set"]
            if any(doc.get(key) != value for key, value in changes.items()):
                doc.update(changes)
                modified = 1
        return UpdateResult({"n": len(matches), "nModified": modified, "ok": 1.0}, True)

    async def delete_one(self, query: Dict[str, Any]) -> DeleteResult:
        self.raise_if_failing()
        matches = self._matching(query)[:1]
        for doc in matches:
            self.documents.remove(doc)
        return DeleteResult({"n": len(matches), "ok": 1.0}, True)


class FakeDatabase:
    """Duck-types portfolio_api.database.Database."""

    def __init__(self):
        self.collections: Dict[str, FakeCollection] = defaultdict(FakeCollection)
        self.is_connected = True
        self.ping_ok = True
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    def collection(self, name: str) -> FakeCollection:
        return self.collections[name]

    async def ping(self) -> bool:
        return self.ping_ok

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def auth_headers():
    from portfolio_api.services.token_service import token_service
    token = token_service.issue({"email": "owner@example.com", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_project():
    return {
        "name": "Portfolio",
        "description": "Personal site with projects and a blog",
        "technologies": ["React", "FastAPI", "MongoDB"],
        "live_link": "https://example.com",
    }


@pytest_asyncio.fixture
async def test_client(fake_db):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, so the database handle is
    installed on app.state directly.
    """
    from portfolio_api.main import create_app
    app = create_app()
    app.state.database = fake_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

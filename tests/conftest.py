"""Shared pytest fixtures.

Provides FakeDatabase/FakeCollection, an in-memory stand-in for the async pymongo
database that implements only the calls the services make. Every operation yields
to the event loop once before touching data and then applies its change without
further awaits, so each single call is atomic like a MongoDB single-document write.
FakeDatabase.client hands out sessions whose transactions roll back when the block raises.
"""

import asyncio
import copy
from dataclasses import dataclass
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from autoforgx.app import App
from autoforgx.config import Config
from autoforgx.core.core import Core
from autoforgx.web.server import create_fastapi_app

JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"
ADMIN_KEY = "test-admin-key"


@dataclass
class FakeInsertOneResult:
    inserted_id: Any


@dataclass
class FakeUpdateResult:
    matched_count: int
    modified_count: int


@dataclass
class FakeDeleteResult:
    deleted_count: int


def _matches_value(actual: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for op, expected in condition.items():
            if op == "$in":
                values = actual if isinstance(actual, list) else [actual]
                if not any(v in expected for v in values):
                    return False
            elif op == "$ne":
                if isinstance(actual, list):
                    if expected in actual:
                        return False
                elif actual == expected:
                    return False
            else:
                raise NotImplementedError(op)
        return True
    if isinstance(actual, list) and not isinstance(condition, list):
        return condition in actual
    return actual == condition


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(_matches_value(doc.get(key), condition) for key, condition in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if not self._docs:
            raise StopAsyncIteration
        return self._docs.pop(0)


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()
        self.fail_with: Exception | None = None  # Raised by calls when set
        self.fail_methods: set[str] = set()  # Restricts fail_with to these methods; empty means all

    def _check_failure(self, method: str) -> None:
        if self.fail_with is not None and (not self.fail_methods or method in self.fail_methods):
            raise self.fail_with

    async def _enter(self, method: str) -> None:
        await asyncio.sleep(0)
        self._check_failure(method)

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        await self._enter("create_index")
        if unique:
            self.unique_fields.update(field for field, _ in keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    def _check_unique(self, doc: dict[str, Any]) -> None:
        for field in self.unique_fields | {"_id"}:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}_1")

    async def insert_one(self, doc: dict[str, Any]) -> FakeInsertOneResult:
        await self._enter("insert_one")
        self._check_unique(doc)
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertOneResult(inserted_id=doc["_id"])

    async def insert_many(self, docs: list[dict[str, Any]], session: Any = None) -> None:
        await self._enter("insert_many")
        for doc in docs:
            self._check_unique(doc)
            self.docs.append(copy.deepcopy(doc))

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check_failure("find")
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        await self._enter("find_one")
        doc = next((d for d in self.docs if _matches(d, query)), None)
        return copy.deepcopy(doc)

    async def count_documents(self, query: dict[str, Any], limit: int | None = None) -> int:
        await self._enter("count_documents")
        count = sum(1 for d in self.docs if _matches(d, query))
        return min(count, limit) if limit else count

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> FakeUpdateResult:
        await self._enter("update_one")
        doc = next((d for d in self.docs if _matches(d, query)), None)
        if doc is None:
            return FakeUpdateResult(matched_count=0, modified_count=0)
        for op, fields in update.items():
            for field, value in fields.items():
                if op == "$push":
                    doc.setdefault(field, []).append(copy.deepcopy(value))
                elif op == "$set":
                    doc[field] = copy.deepcopy(value)
                else:
                    raise NotImplementedError(op)
        return FakeUpdateResult(matched_count=1, modified_count=1)

    async def delete_many(self, query: dict[str, Any], session: Any = None) -> FakeDeleteResult:
        await self._enter("delete_many")
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return FakeDeleteResult(deleted_count=deleted)


class FakeTransaction:
    """Snapshots every collection on entry and restores them if the block raises."""

    def __init__(self, database: "FakeDatabase") -> None:
        self._database = database
        self._snapshot: dict[str, list[dict[str, Any]]] = {}

    async def __aenter__(self) -> "FakeTransaction":
        self._snapshot = {name: copy.deepcopy(c.docs) for name, c in self._database.collections.items()}
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is not None:
            for name, docs in self._snapshot.items():
                self._database.collections[name].docs = docs


class FakeSession:
    def __init__(self, database: "FakeDatabase") -> None:
        self._database = database

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        return None

    async def start_transaction(self) -> FakeTransaction:
        return FakeTransaction(self._database)


class FakeClient:
    def __init__(self, database: "FakeDatabase") -> None:
        self._database = database

    def start_session(self) -> FakeSession:
        return FakeSession(self._database)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.client = FakeClient(self)

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


def make_config(**overrides: Any) -> Config:
    values: dict[str, Any] = {
        "database_url": "mongodb://localhost:27017/autoforgx_test",
        "jwt_secret": JWT_SECRET,
        "bcrypt_rounds": 4,
        "admin_api_key": ADMIN_KEY,
    }
    values.update(overrides)
    return Config(_env_file=None, **values)  # type: ignore[call-arg]


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
async def core(config, database):
    """Started Core backed by the in-memory database."""
    core = Core(config, database)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
async def seeded_core(core):
    """Core with the default two-course catalog."""
    await core.services.course.seed_if_empty()
    return core


@pytest.fixture
def app_instance(config, database):
    return App(config, database)  # type: ignore[arg-type]


@pytest.fixture
def client(app_instance, config):
    """HTTP client for the FastAPI app; entering it runs the lifespan (index creation)."""
    with TestClient(create_fastapi_app(app_instance, config)) as test_client:
        yield test_client


@pytest.fixture
def config_factory():
    """Build a Config with overrides on top of the test defaults."""
    return make_config


@pytest.fixture
def admin_key():
    return ADMIN_KEY

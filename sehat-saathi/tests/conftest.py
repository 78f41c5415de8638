"""Shared fixtures: an in-memory stand-in for the Motor database and an API client."""

import copy
import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.config.database import Database
from app.config.settings import settings

_ids = itertools.count(1)


def _matches(doc: dict, query: dict) -> bool:
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and any(k.startswith("$") for k in cond):
            for op, operand in cond.items():
                if op == "$ne" and value == operand:
                    return False
                if op == "$gt" and (value is None or not value > operand):
                    return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        if isinstance(key, list):
            key, direction = key[0]
        self._docs.sort(key=lambda d: d.get(key), reverse=direction == -1)
        return self

    def skip(self, n):
        self._docs = self._docs[n:]
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    def __aiter__(self):
        async def _gen():
            for doc in self._docs:
                yield copy.deepcopy(doc)

        return _gen()


class FakeCollection:
    def __init__(self):
        self.docs = []

    async def insert_one(self, doc):
        doc.setdefault("_id", next(_ids))
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def count_documents(self, query):
        return sum(1 for d in self.docs if _matches(d, query))

    async def update_one(self, query, update):
        for doc in self.docs:
            if _matches(doc, query):
                for key, value in update.get("$set", {}).items():
                    doc[key] = value
                for key, value in update.get("$inc", {}).items():
                    doc[key] = doc.get(key, 0) + value
                for key, value in update.get("$push", {}).items():
                    doc.setdefault(key, []).append(value)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def create_index(self, *args, **kwargs):
        return "index"


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name):
        return {"ok": 1}


@pytest.fixture(autouse=True)
def fake_db():
    db = FakeDatabase()
    Database.database = db
    yield db
    Database.database = None


@pytest.fixture
def client():
    from main import app

    # No context manager: the lifespan (real MongoDB connect) is skipped
    return TestClient(app)


@pytest.fixture
def offline_settings(monkeypatch):
    """Settings with every external credential removed."""
    monkeypatch.setattr(settings, "ai_gateway_api_key", None)
    monkeypatch.setattr(settings, "mock_ai_replies", False)
    monkeypatch.setattr(settings, "tts_api_key", None)
    monkeypatch.setattr(settings, "serper_api_key", None)
    return settings

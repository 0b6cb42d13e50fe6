"""Shared fixtures: fake completion agents, a fake DynamoDB table, an isolated preference store, and a TestClient with overrides."""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from billboard.api.deps import get_composer, get_engine, get_preference_store
from billboard.main import app
from billboard.services.preference_store import InMemoryPreferenceBackend, PreferenceStoreAdapter


def fake_agent(output: str = "Hello there", *, error: Exception | None = None) -> SimpleNamespace:
    """Stand-in for a pydantic-ai Agent: only `run` is used by the services."""
    run = AsyncMock(side_effect=error) if error else AsyncMock(return_value=SimpleNamespace(output=output))
    return SimpleNamespace(run=run)


class FakeTable:
    """Minimal boto3 Table: put_item / scan with one-item pages to exercise pagination."""

    def __init__(self):
        self.items = {}

    def put_item(self, Item):
        self.items[Item["id"]] = dict(Item)

    def scan(self, ExclusiveStartKey=None):
        keys = sorted(self.items)
        start = keys.index(ExclusiveStartKey["id"]) + 1 if ExclusiveStartKey else 0
        page = keys[start:start + 1]
        out = {"Items": [self.items[k] for k in page], "Count": len(page)}
        if start + 1 < len(keys):
            out["LastEvaluatedKey"] = {"id": page[-1]}
        return out


@pytest.fixture
def memory_store():
    return PreferenceStoreAdapter(primary=None, fallback=InMemoryPreferenceBackend())


@pytest.fixture
def api_client(memory_store):
    app.dependency_overrides[get_preference_store] = lambda: memory_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def override():
    """Set a dependency override for get_engine / get_composer / get_preference_store inside a test."""

    def _set(dep, value):
        app.dependency_overrides[dep] = lambda: value

    return SimpleNamespace(
        engine=lambda v: _set(get_engine, v),
        composer=lambda v: _set(get_composer, v),
        store=lambda v: _set(get_preference_store, v),
    )

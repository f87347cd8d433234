"""Fixtures for the HTTP API tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from bloom.cycles.settings_store import InMemoryStorage, SettingsStore
from bloom.dependencies import get_settings_store
from bloom.main import create_app


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def client(memory_storage: InMemoryStorage) -> Iterator[TestClient]:
    app = create_app()
    app.dependency_overrides[get_settings_store] = lambda: SettingsStore(memory_storage)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

"""Shared fixtures for the cycle engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from bloom.cycles.config_loader import TrackerConfig, load_tracker_config
from bloom.cycles.settings_store import InMemoryStorage, SettingsStore

# Canonical anchor used across the suite (a Monday)
TEST_ANCHOR = date(2024, 1, 1)


@pytest.fixture
def tracker_config() -> TrackerConfig:
    """Load the bundled tracker config."""
    return load_tracker_config()


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def settings_store(memory_storage: InMemoryStorage) -> SettingsStore:
    return SettingsStore(memory_storage)

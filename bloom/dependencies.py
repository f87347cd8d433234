"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from bloom.config import Settings, get_settings
from bloom.cycles.config_loader import TrackerConfig, get_tracker_config
from bloom.cycles.settings_store import JsonFileStorage, SettingsStore
from bloom.cycles.tracker import CycleTracker


def get_config() -> TrackerConfig:
    return get_tracker_config()


def get_settings_store(
    settings: Annotated[Settings, Depends(get_settings)],
    config: Annotated[TrackerConfig, Depends(get_config)],
) -> SettingsStore:
    return SettingsStore(
        JsonFileStorage(settings.storage_path),
        key=settings.storage_key,
        limits=config.limits,
    )


def get_tracker(config: Annotated[TrackerConfig, Depends(get_config)]) -> CycleTracker:
    return CycleTracker(config)


# Annotated shortcuts for route signatures
Config = Annotated[TrackerConfig, Depends(get_config)]
Store = Annotated[SettingsStore, Depends(get_settings_store)]
Tracker = Annotated[CycleTracker, Depends(get_tracker)]

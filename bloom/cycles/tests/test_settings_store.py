"""Tests for settings validation and persistence."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from bloom.cycles.config_loader import Bounds, LimitsConfig, TrackerConfig
from bloom.cycles.settings_store import (
    STORAGE_KEY,
    InMemoryStorage,
    JsonFileStorage,
    SettingsStore,
    SettingsValidationError,
    TrackerSettings,
    default_settings,
    validate_settings,
)


class BrokenStorage:
    """Storage whose every operation fails like an unwritable disk."""

    def get(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("disk unavailable")

    def remove(self, key: str) -> None:
        raise OSError("disk unavailable")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidateSettings:
    def test_valid(self) -> None:
        settings = validate_settings("2024-01-01", 28, 5)
        assert settings == TrackerSettings("2024-01-01", 28, 5)
        assert settings.last_period_date == date(2024, 1, 1)

    def test_accepts_numeric_strings(self) -> None:
        assert validate_settings("2024-01-01", "30", "4.0").cycle_length == 30

    @pytest.mark.parametrize("last_period", [None, "", "2024-13-01", "yesterday"])
    def test_bad_date(self, last_period: str | None) -> None:
        with pytest.raises(SettingsValidationError, match="valid last period date"):
            validate_settings(last_period, 28, 5)

    @pytest.mark.parametrize("cycle_length", [19, 46, 0, None, "abc", 28.5, True])
    def test_cycle_length_out_of_range(self, cycle_length: object) -> None:
        with pytest.raises(
            SettingsValidationError, match="Cycle length must be between 20 and 45 days."
        ):
            validate_settings("2024-01-01", cycle_length, 5)

    @pytest.mark.parametrize("period_length", [0, 15, -3, None])
    def test_period_length_out_of_range(self, period_length: object) -> None:
        with pytest.raises(
            SettingsValidationError, match="Period length must be between 1 and 14 days."
        ):
            validate_settings("2024-01-01", 28, period_length)

    def test_bounds_inclusive(self) -> None:
        validate_settings("2024-01-01", 20, 1)
        validate_settings("2024-01-01", 45, 14)

    def test_custom_limits(self) -> None:
        limits = LimitsConfig(cycle_length=Bounds(21, 35), period_length=Bounds(3, 10))
        with pytest.raises(SettingsValidationError, match="between 21 and 35"):
            validate_settings("2024-01-01", 20, 5, limits)

    def test_is_value_error(self) -> None:
        assert issubclass(SettingsValidationError, ValueError)


class TestDefaultSettings:
    def test_defaults_from_config(self, tracker_config: TrackerConfig) -> None:
        settings = default_settings(date(2026, 10, 17), tracker_config)
        assert settings == TrackerSettings("2026-10-17", 28, 5)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TestSettingsStore:
    def test_load_empty(self, settings_store: SettingsStore) -> None:
        assert settings_store.load() is None

    def test_save_then_load(
        self, settings_store: SettingsStore, memory_storage: InMemoryStorage
    ) -> None:
        settings = TrackerSettings("2024-01-01", 30, 6)
        assert settings_store.save(settings) is True
        assert settings_store.load() == settings
        assert json.loads(memory_storage.get(STORAGE_KEY)) == {
            "lastPeriod": "2024-01-01",
            "cycleLength": 30,
            "periodLength": 6,
        }

    def test_save_overwrites(self, settings_store: SettingsStore) -> None:
        settings_store.save(TrackerSettings("2024-01-01", 30, 6))
        settings_store.save(TrackerSettings("2024-02-01", 27, 4))
        assert settings_store.load() == TrackerSettings("2024-02-01", 27, 4)

    def test_reset(self, settings_store: SettingsStore) -> None:
        settings_store.save(TrackerSettings("2024-01-01", 30, 6))
        assert settings_store.reset() is True
        assert settings_store.load() is None

    @pytest.mark.parametrize(
        "record",
        [
            {"cycleLength": 28, "periodLength": 5},
            {"lastPeriod": "2024-01-01", "periodLength": 5},
            {"lastPeriod": "2024-01-01", "cycleLength": 0, "periodLength": 5},
            {"lastPeriod": "2024-01-01", "cycleLength": "x", "periodLength": 5},
            ["2024-01-01", 28, 5],
            {"lastPeriod": "2024-01-01", "cycleLength": 10_000_000, "periodLength": 5},
            {"lastPeriod": "2024-01-01", "cycleLength": 19, "periodLength": 5},
            {"lastPeriod": "2024-01-01", "cycleLength": 28, "periodLength": 15},
            {"lastPeriod": "2024-01-01", "cycleLength": 28, "periodLength": 5_000_000},
            {"lastPeriod": "2024-02-30", "cycleLength": 28, "periodLength": 5},
        ],
    )
    def test_incomplete_record_loads_as_none(self, record: object) -> None:
        storage = InMemoryStorage({STORAGE_KEY: json.dumps(record)})
        assert SettingsStore(storage).load() is None

    def test_load_applies_configured_limits(self) -> None:
        record = {"lastPeriod": "2024-01-01", "cycleLength": 40, "periodLength": 5}
        storage = InMemoryStorage({STORAGE_KEY: json.dumps(record)})
        assert SettingsStore(storage).load() == TrackerSettings("2024-01-01", 40, 5)
        limits = LimitsConfig(cycle_length=Bounds(21, 35), period_length=Bounds(3, 10))
        assert SettingsStore(storage, limits=limits).load() is None

    def test_corrupt_json_loads_as_none(self) -> None:
        storage = InMemoryStorage({STORAGE_KEY: "{not json"})
        assert SettingsStore(storage).load() is None

    def test_storage_failures_are_not_fatal(self) -> None:
        store = SettingsStore(BrokenStorage())
        assert store.load() is None
        assert store.save(TrackerSettings("2024-01-01", 28, 5)) is False
        assert store.reset() is False

    def test_custom_key(self, memory_storage: InMemoryStorage) -> None:
        store = SettingsStore(memory_storage, key="other")
        store.save(TrackerSettings("2024-01-01", 28, 5))
        assert memory_storage.get("other") is not None
        assert memory_storage.get(STORAGE_KEY) is None


class TestJsonFileStorage:
    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path / "nested" / "storage.json")
        assert storage.get("anything") is None

    def test_set_get_remove(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "storage.json"
        storage = JsonFileStorage(path)
        storage.set("a", "1")
        storage.set("b", "2")
        assert storage.get("a") == "1"
        assert json.loads(path.read_text()) == {"a": "1", "b": "2"}
        storage.remove("a")
        assert storage.get("a") is None
        assert storage.get("b") == "2"

    def test_store_round_trip_on_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        SettingsStore(JsonFileStorage(path)).save(TrackerSettings("2024-01-01", 28, 5))
        assert SettingsStore(JsonFileStorage(path)).load() == TrackerSettings(
            "2024-01-01", 28, 5
        )

    def test_corrupt_file_is_not_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("[1, 2, 3]")
        store = SettingsStore(JsonFileStorage(path))
        assert store.load() is None
        assert store.save(TrackerSettings("2024-01-01", 28, 5)) is False

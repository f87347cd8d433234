"""Persisted tracker settings.

The only state Bloom keeps is the user's last period start and their
typical cycle / period lengths.  They are stored as one JSON record under a
fixed key in a small key–value store.  The store is injected, so the engine
and the tests never touch a concrete storage mechanism:

    store = SettingsStore(JsonFileStorage(path))
    settings = store.load()          # None when nothing valid is stored

Storage problems are never fatal: they are logged and the caller carries
on as if nothing had been saved.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Protocol

from bloom.cycles.config_loader import LimitsConfig, TrackerConfig
from bloom.cycles.dates import format_iso, parse_iso_date

logger = logging.getLogger("bloom.cycles.settings_store")

STORAGE_KEY = "bloom.tracker.settings.v1"


class SettingsValidationError(ValueError):
    """User-supplied settings are outside the accepted ranges."""


@dataclass(frozen=True)
class TrackerSettings:
    """Validated user settings.

    Attributes:
        last_period:   First day of the last period, as ``YYYY-MM-DD``.
        cycle_length:  Days between period starts.
        period_length: Days of bleeding.
    """

    last_period: str
    cycle_length: int
    period_length: int

    @property
    def last_period_date(self) -> date | None:
        return parse_iso_date(self.last_period)

    def to_record(self) -> dict[str, Any]:
        return {
            "lastPeriod": self.last_period,
            "cycleLength": self.cycle_length,
            "periodLength": self.period_length,
        }

    @classmethod
    def from_record(cls, record: Any) -> TrackerSettings | None:
        """Build settings from a stored record, or None if a field is missing."""
        if not isinstance(record, dict):
            return None
        last_period = record.get("lastPeriod")
        cycle_length = record.get("cycleLength")
        period_length = record.get("periodLength")
        if not last_period or not cycle_length or not period_length:
            return None
        try:
            return cls(
                last_period=str(last_period),
                cycle_length=int(cycle_length),
                period_length=int(period_length),
            )
        except (TypeError, ValueError):
            return None


def validate_settings(
    last_period: str | None,
    cycle_length: Any,
    period_length: Any,
    limits: LimitsConfig | None = None,
) -> TrackerSettings:
    """Check raw form values and return TrackerSettings.

    Raises:
        SettingsValidationError: With a message suitable for showing the user.
    """
    limits = limits or LimitsConfig()

    if parse_iso_date(last_period) is None:
        raise SettingsValidationError("Please enter a valid last period date.")

    cycle = _as_int(cycle_length)
    if cycle is None or not limits.cycle_length.contains(cycle):
        raise SettingsValidationError(
            f"Cycle length must be between {limits.cycle_length.min} "
            f"and {limits.cycle_length.max} days."
        )

    period = _as_int(period_length)
    if period is None or not limits.period_length.contains(period):
        raise SettingsValidationError(
            f"Period length must be between {limits.period_length.min} "
            f"and {limits.period_length.max} days."
        )

    return TrackerSettings(
        last_period=last_period.strip(),  # type: ignore[union-attr]
        cycle_length=cycle,
        period_length=period,
    )


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def default_settings(today: date, config: TrackerConfig) -> TrackerSettings:
    """Settings used when nothing is saved: today plus the configured lengths."""
    return TrackerSettings(
        last_period=format_iso(today),
        cycle_length=config.defaults.cycle_length,
        period_length=config.defaults.period_length,
    )


# ---------------------------------------------------------------------------
# Storage backends
# ---------------------------------------------------------------------------


class SettingsStorage(Protocol):
    """Minimal string key–value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage, used in tests and as a last-resort fallback."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Key–value storage backed by a single JSON object on disk.

    Writes go to a temporary sibling file that is then renamed over the
    original, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)
        tmp.replace(self._path)

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SettingsStore:
    """Load, save and reset TrackerSettings on top of a SettingsStorage."""

    def __init__(
        self,
        storage: SettingsStorage,
        key: str = STORAGE_KEY,
        limits: LimitsConfig | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._limits = limits or LimitsConfig()

    def load(self) -> TrackerSettings | None:
        """Return saved settings, or None if missing, unreadable, incomplete
        or outside the accepted ranges."""
        try:
            raw = self._storage.get(self._key)
            if not raw:
                return None
            record = TrackerSettings.from_record(json.loads(raw))
        except (OSError, ValueError) as exc:
            logger.error("Failed to load settings: %s", exc)
            return None
        if record is None:
            return None
        try:
            return validate_settings(
                record.last_period, record.cycle_length, record.period_length, self._limits
            )
        except SettingsValidationError as exc:
            logger.warning("Ignoring stored settings: %s", exc)
            return None

    def save(self, settings: TrackerSettings) -> bool:
        """Persist settings.  Returns False (and logs) if storage fails."""
        try:
            self._storage.set(self._key, json.dumps(settings.to_record()))
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Failed to save settings: %s", exc)
            return False
        logger.info("Saved settings (last period %s)", settings.last_period)
        return True

    def reset(self) -> bool:
        """Delete saved settings.  Returns False (and logs) if storage fails."""
        try:
            self._storage.remove(self._key)
        except (OSError, ValueError) as exc:
            logger.error("Failed to reset settings: %s", exc)
            return False
        logger.info("Reset saved settings")
        return True

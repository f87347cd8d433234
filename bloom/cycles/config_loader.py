"""Load and validate the tracker configuration.

The config lives in ``tracker_config.yaml`` alongside this module.  It is
loaded once on first use and cached; ``reload_tracker_config()`` re-reads it
from disk without a restart.

Usage::

    from bloom.cycles.config_loader import get_tracker_config

    config = get_tracker_config()
    config.limits.cycle_length.contains(28)   # True
    config.prediction.cycle_count             # 6
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("bloom.cycles.config")

_CONFIG_PATH = Path(__file__).parent / "tracker_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Bounds:
    """Inclusive integer range."""

    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class DefaultsConfig:
    """Values used to prefill the form and after a reset."""

    cycle_length: int = 28
    period_length: int = 5


@dataclass(frozen=True)
class LimitsConfig:
    """Accepted ranges for user-entered settings."""

    cycle_length: Bounds = Bounds(20, 45)
    period_length: Bounds = Bounds(1, 14)


@dataclass(frozen=True)
class PredictionConfig:
    cycle_count: int = 6


@dataclass(frozen=True)
class CalendarConfig:
    months: int = 6


@dataclass
class TrackerConfig:
    """Complete, validated tracker configuration.

    Attributes:
        version:    Config schema version string.
        defaults:   Default cycle / period lengths.
        limits:     Validation bounds for user settings.
        prediction: How many cycles to project.
        calendar:   How many months to render.
    """

    version: str
    defaults: DefaultsConfig
    limits: LimitsConfig
    prediction: PredictionConfig
    calendar: CalendarConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracker_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracker config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> TrackerConfig:
    """Validate the raw YAML dict and construct a TrackerConfig.

    Missing sections fall back to defaults; bad values are collected and
    reported together.

    Raises:
        ConfigValidationError: If any value is invalid.
    """
    errors: list[str] = []

    def _int(d: dict, key: str, section: str, default: int) -> int:
        value = d.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default

    def _section(key: str) -> dict:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return value

    def _bounds(d: dict, key: str, fallback: Bounds) -> Bounds:
        b_raw = d.get(key) or {}
        if not isinstance(b_raw, dict):
            errors.append(f"limits.{key} must be a mapping with 'min' and 'max'")
            return fallback
        bounds = Bounds(
            min=_int(b_raw, "min", f"limits.{key}", fallback.min),
            max=_int(b_raw, "max", f"limits.{key}", fallback.max),
        )
        if bounds.min < 1:
            errors.append(f"limits.{key}.min must be at least 1, got {bounds.min}")
        if bounds.min > bounds.max:
            errors.append(
                f"limits.{key} min ({bounds.min}) is greater than max ({bounds.max})"
            )
        return bounds

    version = str(raw.get("version", "1.0"))

    # ── Limits ──
    lim_raw = _section("limits")
    fallback_limits = LimitsConfig()
    limits = LimitsConfig(
        cycle_length=_bounds(lim_raw, "cycle_length", fallback_limits.cycle_length),
        period_length=_bounds(lim_raw, "period_length", fallback_limits.period_length),
    )

    # ── Defaults ──
    def_raw = _section("defaults")
    defaults = DefaultsConfig(
        cycle_length=_int(def_raw, "cycle_length", "defaults", 28),
        period_length=_int(def_raw, "period_length", "defaults", 5),
    )
    if not limits.cycle_length.contains(defaults.cycle_length):
        errors.append(
            f"defaults.cycle_length = {defaults.cycle_length} is outside "
            f"[{limits.cycle_length.min}, {limits.cycle_length.max}]"
        )
    if not limits.period_length.contains(defaults.period_length):
        errors.append(
            f"defaults.period_length = {defaults.period_length} is outside "
            f"[{limits.period_length.min}, {limits.period_length.max}]"
        )

    # ── Prediction / calendar ──
    prediction = PredictionConfig(
        cycle_count=_int(_section("prediction"), "cycle_count", "prediction", 6),
    )
    if prediction.cycle_count < 0:
        errors.append(f"prediction.cycle_count must be >= 0, got {prediction.cycle_count}")

    calendar = CalendarConfig(months=_int(_section("calendar"), "months", "calendar", 6))
    if calendar.months < 1:
        errors.append(f"calendar.months must be >= 1, got {calendar.months}")

    if errors:
        raise ConfigValidationError(
            f"tracker_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackerConfig(
        version=version,
        defaults=defaults,
        limits=limits,
        prediction=prediction,
        calendar=calendar,
        _raw=raw,
    )


def load_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Load and validate the tracker config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracker_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracker config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackerConfig | None = None
_config_lock = threading.Lock()


def get_tracker_config() -> TrackerConfig:
    """Return the global TrackerConfig, loading it on first call. Thread-safe."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = load_tracker_config()
    return _config


def reload_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Re-read the config and replace the global singleton.

    The new file is validated before the swap; on failure the old config is
    kept and the error propagates.
    """
    global _config
    new_config = load_tracker_config(path)
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded tracker config: %s → %s", old_version, new_config.version)
    return new_config

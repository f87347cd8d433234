"""Bloom cycle prediction engine.

Pure, synchronous, calendar-only prediction of upcoming periods, fertile
windows and ovulation days, plus the small persistence layer for the
user's settings.  Nothing in here depends on FastAPI.

Modules:
    dates: Day-granularity date arithmetic and formatting
    predictor: Cycle / FertileRange and predict_cycles
    annotations: Priority-resolved day labels and month grids
    summary: Next ovulation / fertile window summary
    settings_store: Persisted settings, storage backends, validation
    tracker: CycleTracker: one call to a full calendar forecast
    config_loader: Load/validate/hot-reload tracker_config.yaml
"""

from bloom.cycles.annotations import DayLabel, MonthCell, annotate_days, build_month_grid
from bloom.cycles.config_loader import TrackerConfig, get_tracker_config
from bloom.cycles.predictor import Cycle, FertileRange, predict_cycles
from bloom.cycles.settings_store import (
    SettingsStore,
    SettingsValidationError,
    TrackerSettings,
    validate_settings,
)
from bloom.cycles.tracker import CycleTracker, Forecast

__all__ = [
    "Cycle",
    "FertileRange",
    "predict_cycles",
    "DayLabel",
    "MonthCell",
    "annotate_days",
    "build_month_grid",
    "SettingsStore",
    "SettingsValidationError",
    "TrackerSettings",
    "validate_settings",
    "CycleTracker",
    "Forecast",
    "TrackerConfig",
    "get_tracker_config",
]

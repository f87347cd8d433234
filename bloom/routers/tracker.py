"""Settings and forecast endpoints for the calendar view."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException

from bloom.cycles.settings_store import (
    SettingsValidationError,
    TrackerSettings,
    default_settings,
    validate_settings,
)
from bloom.dependencies import Config, Store, Tracker
from bloom.models.base import ErrorDetail
from bloom.models.tracker import ForecastRead, SettingsInput, SettingsRead

router = APIRouter(prefix="/tracker", tags=["tracker"])
logger = logging.getLogger("bloom.routers.tracker")


def _validated(body: SettingsInput, config: Config) -> TrackerSettings:
    try:
        return validate_settings(
            body.last_period, body.cycle_length, body.period_length, config.limits
        )
    except SettingsValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/settings", response_model=SettingsRead)
async def get_saved_settings(store: Store, config: Config) -> Any:
    """Saved settings, or today's date with default lengths to prefill the form."""
    saved = store.load()
    if saved is not None:
        return SettingsRead.from_settings(saved, saved=True)
    return SettingsRead.from_settings(default_settings(date.today(), config), saved=False)


@router.put(
    "/settings", response_model=ForecastRead, responses={422: {"model": ErrorDetail}}
)
async def save_settings(
    body: SettingsInput, store: Store, tracker: Tracker, config: Config
) -> Any:
    settings = _validated(body, config)
    persisted = store.save(settings)
    if not persisted:
        logger.warning("Settings not persisted; returning forecast anyway")
    forecast = tracker.forecast_settings(settings)
    return ForecastRead.build(forecast, settings, saved=persisted, persisted=persisted)


@router.delete("/settings", response_model=ForecastRead)
async def reset_settings(store: Store, tracker: Tracker, config: Config) -> Any:
    """Forget saved settings and return a default forecast starting today."""
    store.reset()
    settings = default_settings(date.today(), config)
    forecast = tracker.forecast_settings(settings)
    return ForecastRead.build(forecast, settings, saved=False)


@router.post(
    "/predict", response_model=ForecastRead, responses={422: {"model": ErrorDetail}}
)
async def predict(body: SettingsInput, tracker: Tracker, config: Config) -> Any:
    """Forecast for the submitted values without saving them."""
    settings = _validated(body, config)
    forecast = tracker.forecast_settings(settings)
    return ForecastRead.build(forecast, settings, saved=False)


@router.get("/forecast", response_model=ForecastRead)
async def get_forecast(store: Store, tracker: Tracker, config: Config) -> Any:
    """Forecast from saved settings, falling back to defaults."""
    saved = store.load()
    settings = saved or default_settings(date.today(), config)
    forecast = tracker.forecast_settings(settings)
    return ForecastRead.build(forecast, settings, saved=saved is not None)

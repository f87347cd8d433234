"""Pydantic models for tracker settings and forecasts."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from bloom.cycles.annotations import DayLabel, MonthCell
from bloom.cycles.predictor import Cycle
from bloom.cycles.settings_store import TrackerSettings
from bloom.cycles.tracker import Forecast, MonthView
from bloom.models.base import BloomBase


# ---------- Settings ----------

class SettingsInput(BloomBase):
    """Raw form values.  Range checks happen in ``validate_settings`` so the
    user sees the same messages as the original form."""

    last_period: str | None = Field(default=None, alias="lastPeriod")
    cycle_length: int | float | str | None = Field(default=None, alias="cycleLength")
    period_length: int | float | str | None = Field(default=None, alias="periodLength")


class SettingsRead(BloomBase):
    last_period: str
    cycle_length: int
    period_length: int
    saved: bool = False

    @classmethod
    def from_settings(cls, settings: TrackerSettings, saved: bool) -> SettingsRead:
        return cls(
            last_period=settings.last_period,
            cycle_length=settings.cycle_length,
            period_length=settings.period_length,
            saved=saved,
        )


# ---------- Forecast ----------

class CycleRead(BloomBase):
    period_start: date
    period_days: list[date]
    ovulation: date
    fertile_start: date
    fertile_end: date

    @classmethod
    def from_cycle(cls, cycle: Cycle) -> CycleRead:
        return cls(
            period_start=cycle.period_start,
            period_days=list(cycle.period_days),
            ovulation=cycle.ovulation,
            fertile_start=cycle.fertile_range.start,
            fertile_end=cycle.fertile_range.end,
        )


class DayCellRead(BloomBase):
    day: date
    iso: str
    label: DayLabel | None = None
    description: str

    @classmethod
    def from_cell(cls, cell: MonthCell) -> DayCellRead:
        return cls(
            day=cell.date,
            iso=cell.iso,
            label=cell.label,
            description=cell.description,
        )


class MonthRead(BloomBase):
    year: int
    month: int = Field(ge=1, le=12)
    name: str
    cells: list[DayCellRead | None]

    @classmethod
    def from_view(cls, view: MonthView) -> MonthRead:
        return cls(
            year=view.year,
            month=view.month,
            name=view.name,
            cells=[DayCellRead.from_cell(c) if c is not None else None for c in view.cells],
        )


class SummaryRead(BloomBase):
    next_ovulation: date | None = None
    fertile_start: date | None = None
    fertile_end: date | None = None
    ovulation_text: str
    fertile_window_text: str


class ForecastRead(BloomBase):
    settings: SettingsRead
    persisted: bool = False
    cycles: list[CycleRead]
    annotations: dict[str, DayLabel]
    months: list[MonthRead]
    summary: SummaryRead

    @classmethod
    def build(
        cls,
        forecast: Forecast,
        settings: TrackerSettings,
        saved: bool,
        persisted: bool = False,
    ) -> ForecastRead:
        summary = forecast.summary
        return cls(
            settings=SettingsRead.from_settings(settings, saved=saved),
            persisted=persisted,
            cycles=[CycleRead.from_cycle(c) for c in forecast.cycles],
            annotations=dict(forecast.annotations),
            months=[MonthRead.from_view(m) for m in forecast.months],
            summary=SummaryRead(
                next_ovulation=summary.next_ovulation,
                fertile_start=summary.fertile_start,
                fertile_end=summary.fertile_end,
                ovulation_text=summary.ovulation_text,
                fertile_window_text=summary.fertile_window_text,
            ),
        )

"""Full forecast for the calendar view.

Ties the pure pieces together: predict cycles, resolve day labels, lay out
the months to display, and summarize the next cycle.

Usage::

    tracker = CycleTracker()
    forecast = tracker.forecast(date(2026, 3, 2), cycle_length=29, period_length=5)
    forecast.summary.ovulation_text        # "Mar 17"
    forecast.months[0].cells               # Sunday-first grid for March
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date

from bloom.cycles.annotations import (
    DayAnnotations,
    MonthCell,
    annotate_days,
    annotations_for_month,
    build_month_grid,
    calendar_months,
)
from bloom.cycles.config_loader import TrackerConfig, get_tracker_config
from bloom.cycles.predictor import Cycle, predict_cycles
from bloom.cycles.settings_store import TrackerSettings
from bloom.cycles.summary import CycleSummary, summarize

logger = logging.getLogger("bloom.cycles.tracker")


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    cells: list[MonthCell | None]

    @property
    def name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"


@dataclass
class Forecast:
    """Everything the calendar view needs for one set of inputs."""

    cycles: list[Cycle] = field(default_factory=list)
    annotations: DayAnnotations = field(default_factory=dict)
    months: list[MonthView] = field(default_factory=list)
    summary: CycleSummary = field(default_factory=CycleSummary)


class CycleTracker:
    """Build forecasts using the configured cycle and month counts."""

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self._config = config or get_tracker_config()

    @property
    def config(self) -> TrackerConfig:
        return self._config

    def forecast(
        self,
        anchor: date | None,
        cycle_length: int,
        period_length: int,
        today: date | None = None,
    ) -> Forecast:
        """Predict and lay out the calendar starting at ``anchor``.

        Args:
            anchor:        First day of the last period; None yields a
                           forecast with no cycles (months start at ``today``).
            cycle_length:  Validated cycle length.
            period_length: Validated period length.
            today:         Fallback month anchor (defaults to today).
        """
        cycles = predict_cycles(
            anchor,
            cycle_length,
            period_length,
            self._config.prediction.cycle_count,
        )
        annotations = annotate_days(cycles)

        first_month = cycles[0].period_start if cycles else (today or date.today())
        months = [
            MonthView(
                year=year,
                month=month,
                cells=build_month_grid(
                    year, month, annotations_for_month(annotations, year, month)
                ),
            )
            for year, month in calendar_months(first_month, self._config.calendar.months)
        ]

        if not cycles:
            logger.debug("No anchor date; forecast has no predicted cycles")

        return Forecast(
            cycles=cycles,
            annotations=annotations,
            months=months,
            summary=summarize(cycles),
        )

    def forecast_settings(
        self, settings: TrackerSettings, today: date | None = None
    ) -> Forecast:
        return self.forecast(
            settings.last_period_date,
            settings.cycle_length,
            settings.period_length,
            today=today,
        )

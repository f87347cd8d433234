"""Day annotations and month grids for the calendar view.

``annotate_days`` flattens a list of predicted cycles into one label per
calendar day.  When several cycles (or several parts of the same cycle)
touch the same day, the label with the highest priority wins:

    ovulation (3) > period (2) > fertile (1)

``build_month_grid`` then lays a single month out as a Sunday-first grid
over that already-resolved map.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Iterable, Mapping

from bloom.cycles.dates import (
    days_in_month,
    format_iso,
    sunday_weekday_index,
)
from bloom.cycles.predictor import Cycle


class DayLabel(str, Enum):
    period = "period"
    fertile = "fertile"
    ovulation = "ovulation"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_PRIORITY: dict[DayLabel, int] = {
    DayLabel.ovulation: 3,
    DayLabel.period: 2,
    DayLabel.fertile: 1,
}

_DESCRIPTIONS: dict[DayLabel, str] = {
    DayLabel.period: "period day",
    DayLabel.fertile: "fertile window",
    DayLabel.ovulation: "ovulation day",
}

REGULAR_DAY = "regular day"

DayAnnotations = dict[str, DayLabel]


@dataclass(frozen=True)
class MonthCell:
    """A real day in a month grid (padding cells are ``None``)."""

    date: date
    label: DayLabel | None = None

    @property
    def iso(self) -> str:
        return format_iso(self.date)

    @property
    def description(self) -> str:
        return self.label.description if self.label else REGULAR_DAY


def _contributions(cycle: Cycle) -> Iterable[tuple[date, DayLabel]]:
    for day in cycle.period_days:
        yield day, DayLabel.period
    for day in cycle.fertile_range.days():
        yield day, DayLabel.fertile
    yield cycle.ovulation, DayLabel.ovulation


def annotate_days(cycles: Iterable[Cycle]) -> DayAnnotations:
    """Resolve every predicted day to exactly one label.

    Days without any contribution are absent from the result.  The outcome
    depends only on the set of contributions, not their order.
    """
    resolved: DayAnnotations = {}
    for cycle in cycles:
        for day, label in _contributions(cycle):
            key = format_iso(day)
            current = resolved.get(key)
            if current is None or label.priority > current.priority:
                resolved[key] = label
    return resolved


def build_month_grid(
    year: int,
    month: int,
    annotations: Mapping[str, DayLabel],
) -> list[MonthCell | None]:
    """Lay out one month (1-based ``month``) as a Sunday-first grid.

    Returns ``None`` placeholders for the weekdays before the 1st, followed
    by one ``MonthCell`` per day of the month.  An out-of-range year or
    month yields an empty grid.
    """
    if not 1 <= month <= 12 or not MINYEAR <= year <= MAXYEAR:
        return []
    first = date(year, month, 1)
    cells: list[MonthCell | None] = [None] * sunday_weekday_index(first)
    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        cells.append(MonthCell(date=day, label=annotations.get(format_iso(day))))
    return cells


def annotations_for_month(
    annotations: Mapping[str, DayLabel], year: int, month: int
) -> DayAnnotations:
    """Subset of ``annotations`` whose days fall in the given month."""
    prefix = f"{year:04d}-{month:02d}-"
    return {key: label for key, label in annotations.items() if key.startswith(prefix)}


def calendar_months(anchor: date, count: int) -> list[tuple[int, int]]:
    """``count`` consecutive (year, month) pairs starting with ``anchor``'s month."""
    months: list[tuple[int, int]] = []
    year, month = anchor.year, anchor.month
    for _ in range(max(0, count)):
        months.append((year, month))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return months

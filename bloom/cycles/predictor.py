"""Calendar-only cycle prediction.

Given the first day of the most recent period and the user's typical cycle
and period lengths, project ``count`` back-to-back cycles into the future.

Modeling assumptions (fixed, not user-configurable):

- Ovulation happens ``LUTEAL_PHASE_DAYS`` (14) days before the next period
  starts.  The luteal phase is far more stable than the follicular phase,
  so this is the standard calendar-method approximation.
- The fertile window runs from 5 days before ovulation to 1 day after it,
  inclusive.

Range checks on the lengths happen before this module is called; nothing
here re-validates them.  In particular ``period_length > cycle_length`` is
accepted and simply produces overlapping period days between consecutive
cycles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterator

from bloom.cycles.dates import add_days, iter_days, normalize_to_midnight

logger = logging.getLogger("bloom.cycles.predictor")

LUTEAL_PHASE_DAYS = 14
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5
DEFAULT_CYCLE_COUNT = 6


@dataclass(frozen=True)
class FertileRange:
    """Inclusive range of days considered fertile."""

    start: date
    end: date

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return self.start <= normalize_to_midnight(day) <= self.end


@dataclass(frozen=True)
class Cycle:
    """One predicted cycle.

    Attributes:
        period_start: First day of bleeding.
        period_days:  Consecutive period days, starting at ``period_start``.
        ovulation:    Estimated ovulation day.
        fertile_range: Inclusive fertile window around ``ovulation``.
    """

    period_start: date
    period_days: tuple[date, ...]
    ovulation: date
    fertile_range: FertileRange


def predict_cycles(
    anchor: date | None,
    cycle_length: int = DEFAULT_CYCLE_LENGTH,
    period_length: int = DEFAULT_PERIOD_LENGTH,
    count: int = DEFAULT_CYCLE_COUNT,
) -> list[Cycle]:
    """Project ``count`` consecutive cycles starting at ``anchor``.

    Args:
        anchor:        First day of the last period.  ``None`` (or anything
                       that is not a date) means no prediction is possible
                       yet and an empty list is returned.
        cycle_length:  Days from one period start to the next.
        period_length: Number of bleeding days.
        count:         Number of cycles to produce.

    Returns:
        Cycles in chronological order; cycle ``i`` starts at
        ``anchor + i * cycle_length``.
    """
    if not isinstance(anchor, date):
        return []

    cycles: list[Cycle] = []
    period_start = normalize_to_midnight(anchor)
    for _ in range(max(0, int(count))):
        period_days = tuple(add_days(period_start, k) for k in range(period_length))
        next_period_start = add_days(period_start, cycle_length)
        ovulation = add_days(next_period_start, -LUTEAL_PHASE_DAYS)
        fertile_range = FertileRange(
            start=add_days(ovulation, -FERTILE_DAYS_BEFORE_OVULATION),
            end=add_days(ovulation, FERTILE_DAYS_AFTER_OVULATION),
        )
        cycles.append(
            Cycle(
                period_start=period_start,
                period_days=period_days,
                ovulation=ovulation,
                fertile_range=fertile_range,
            )
        )
        period_start = next_period_start

    logger.debug(
        "Predicted %d cycles from %s (cycle=%d, period=%d)",
        len(cycles), anchor, cycle_length, period_length,
    )
    return cycles

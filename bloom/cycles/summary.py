"""Short textual summary of the next predicted cycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from bloom.cycles.dates import PLACEHOLDER, format_human
from bloom.cycles.predictor import Cycle


@dataclass(frozen=True)
class CycleSummary:
    next_ovulation: date | None = None
    fertile_start: date | None = None
    fertile_end: date | None = None

    @property
    def ovulation_text(self) -> str:
        return format_human(self.next_ovulation)

    @property
    def fertile_window_text(self) -> str:
        if self.fertile_start is None or self.fertile_end is None:
            return PLACEHOLDER
        return f"{format_human(self.fertile_start)} — {format_human(self.fertile_end)}"


def summarize(cycles: Sequence[Cycle]) -> CycleSummary:
    """Summarize the first predicted cycle; an empty summary when there is none."""
    if not cycles:
        return CycleSummary()
    first = cycles[0]
    return CycleSummary(
        next_ovulation=first.ovulation,
        fertile_start=first.fertile_range.start,
        fertile_end=first.fertile_range.end,
    )

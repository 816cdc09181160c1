"""DateRange value object — immutable inclusive calendar range, open end allowed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

# Stand-in for an unbounded end date when comparing ranges
OPEN_END = date(9999, 12, 31)


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date | None = None

    @property
    def effective_end(self) -> date:
        return self.end if self.end is not None else OPEN_END

    @property
    def is_open_ended(self) -> bool:
        return self.end is None

    def contains(self, day: date) -> bool:
        """True if *day* falls inside the range, both boundaries included."""
        return self.start <= day <= self.effective_end

    def overlaps(self, other: "DateRange") -> bool:
        """True if both ranges share at least one day."""
        return self.start <= other.effective_end and other.start <= self.effective_end

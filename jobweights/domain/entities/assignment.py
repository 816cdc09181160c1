"""Assignment entity — a weighted link between a responsibility and a job."""

from dataclasses import dataclass
from datetime import date

from jobweights.domain.value_objects.date_range import DateRange


@dataclass
class Assignment:
    id: str | None
    job_id: str
    responsibility_id: str
    weight: int
    start_date: date
    end_date: date | None = None
    notes: str | None = None

    @property
    def period(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def is_active_on(self, day: date) -> bool:
        return self.period.contains(day)

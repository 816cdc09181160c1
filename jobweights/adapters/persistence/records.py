"""Boundary schema for job responsibility rows read from the store.

Rows are validated once, here, before they become domain Assignments.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from jobweights.application.ports.errors import MalformedRecordError
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.policies.admission import MIN_WEIGHT, WEIGHT_BUDGET


class AssignmentRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    job_id: str
    responsibility_id: str
    weighting: int = Field(ge=MIN_WEIGHT, le=WEIGHT_BUDGET)
    start_date: date
    end_date: date | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "AssignmentRecord":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date before start_date")
        return self

    def to_domain(self) -> Assignment:
        return Assignment(
            id=self.id,
            job_id=self.job_id,
            responsibility_id=self.responsibility_id,
            weight=self.weighting,
            start_date=self.start_date,
            end_date=self.end_date,
            notes=self.notes,
        )


def parse_assignment_records(rows: Iterable[Mapping[str, Any]]) -> list[Assignment]:
    """Validate raw rows and map them to Assignments.

    Raises:
        MalformedRecordError: on the first row that does not fit the schema.
    """
    assignments = []
    for row in rows:
        try:
            record = AssignmentRecord.model_validate(dict(row))
        except ValidationError as e:
            raise MalformedRecordError(
                f"Malformed job_responsibilities row {row.get('id', '?')}: {e}"
            ) from e
        assignments.append(record.to_domain())
    return assignments

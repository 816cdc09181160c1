"""Request / response bodies for the HTTP API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.entities.job import Job
from jobweights.domain.entities.responsibility import Responsibility
from jobweights.domain.policies.admission import MIN_WEIGHT, WEIGHT_BUDGET
from jobweights.domain.value_objects.enums import BulkMode, ItemStatus


class AssignmentIn(BaseModel):
    responsibility_id: str = Field(min_length=1)
    weighting: int = Field(ge=MIN_WEIGHT, le=WEIGHT_BUDGET)
    start_date: date
    end_date: date | None = None
    notes: str | None = None


class BulkAssignmentIn(AssignmentIn):
    job_ids: list[str] = Field(min_length=1)
    mode: BulkMode = BulkMode.BEST_EFFORT


class AssignmentOut(BaseModel):
    id: str | None
    job_id: str
    responsibility_id: str
    weighting: int
    start_date: date
    end_date: date | None
    notes: str | None

    @classmethod
    def from_domain(cls, a: Assignment) -> AssignmentOut:
        return cls(
            id=a.id,
            job_id=a.job_id,
            responsibility_id=a.responsibility_id,
            weighting=a.weight,
            start_date=a.start_date,
            end_date=a.end_date,
            notes=a.notes,
        )


class ResponsibilityOut(BaseModel):
    id: str | None
    code: str
    name: str
    description: str | None
    is_active: bool

    @classmethod
    def from_domain(cls, r: Responsibility) -> ResponsibilityOut:
        return cls(
            id=r.id,
            code=r.code,
            name=r.name,
            description=r.description,
            is_active=r.is_active,
        )


class JobOut(BaseModel):
    id: str | None
    code: str
    name: str
    is_active: bool

    @classmethod
    def from_domain(cls, j: Job) -> JobOut:
        return cls(id=j.id, code=j.code, name=j.name, is_active=j.is_active)


class AdmissionOut(BaseModel):
    accepted: bool
    reason: str | None = None
    max_allowed: int | None = None
    aggregated_weight: int = 0


class WeightSummaryOut(BaseModel):
    job_id: str
    on: date
    committed_weight: int
    remaining_weight: int
    active_assignments: int


class BulkItemOut(BaseModel):
    job_id: str
    status: ItemStatus
    assignment_id: str | None = None
    max_allowed: int | None = None
    error: str | None = None


class BulkAssignmentOut(BaseModel):
    responsibility_id: str
    mode: BulkMode
    rolled_back: bool
    successful: int
    failed: int
    results: list[BulkItemOut]


class ImportRowOut(BaseModel):
    line: int
    job_code: str
    responsibility_code: str
    status: ItemStatus
    weighting: int | None = None
    assignment_id: str | None = None
    max_allowed: int | None = None
    error: str | None = None


class ImportOut(BaseModel):
    imported: int
    failed: int
    results: list[ImportRowOut]

"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.persistence.models import (
    JobModel,
    JobResponsibilityModel,
    ResponsibilityModel,
)
from jobweights.adapters.persistence.records import parse_assignment_records
from jobweights.application.ports.assignment_repo import AssignmentRepository
from jobweights.application.ports.errors import PersistenceConflictError
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.entities.job import Job
from jobweights.domain.entities.responsibility import Responsibility
from jobweights.domain.policies.admission import can_admit
from jobweights.domain.policies.weight_aggregation import aggregate_overlapping_weight

logger = logging.getLogger(__name__)

_ASSIGNMENT_COLUMNS = (
    JobResponsibilityModel.id,
    JobResponsibilityModel.job_id,
    JobResponsibilityModel.responsibility_id,
    JobResponsibilityModel.weighting,
    JobResponsibilityModel.start_date,
    JobResponsibilityModel.end_date,
    JobResponsibilityModel.notes,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _job_to_domain(m: JobModel) -> Job:
    return Job(id=m.id, code=m.code, name=m.name, is_active=m.is_active)


def _responsibility_to_domain(m: ResponsibilityModel) -> Responsibility:
    return Responsibility(
        id=m.id,
        code=m.code,
        name=m.name,
        description=m.description,
        is_active=m.is_active,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlJobRepository(JobRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, job: Job) -> Job:
        m = JobModel(code=job.code.upper(), name=job.name, is_active=job.is_active)
        self._s.add(m)
        await self._s.flush()
        job.id = m.id
        return job

    async def get_by_id(self, job_id: str) -> Job | None:
        m = await self._s.get(JobModel, job_id)
        return _job_to_domain(m) if m else None

    async def get_by_code(self, code: str) -> Job | None:
        result = await self._s.execute(
            select(JobModel).where(func.upper(JobModel.code) == code.strip().upper())
        )
        m = result.scalar_one_or_none()
        return _job_to_domain(m) if m else None

    async def get_all(self) -> list[Job]:
        result = await self._s.execute(select(JobModel).order_by(JobModel.code))
        return [_job_to_domain(m) for m in result.scalars()]


class SqlResponsibilityRepository(ResponsibilityRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, responsibility: Responsibility) -> Responsibility:
        m = ResponsibilityModel(
            code=responsibility.code.upper(),
            name=responsibility.name,
            description=responsibility.description,
            is_active=responsibility.is_active,
        )
        self._s.add(m)
        await self._s.flush()
        responsibility.id = m.id
        return responsibility

    async def get_by_id(self, responsibility_id: str) -> Responsibility | None:
        m = await self._s.get(ResponsibilityModel, responsibility_id)
        return _responsibility_to_domain(m) if m else None

    async def get_by_code(self, code: str) -> Responsibility | None:
        result = await self._s.execute(
            select(ResponsibilityModel).where(
                func.upper(ResponsibilityModel.code) == code.strip().upper()
            )
        )
        m = result.scalar_one_or_none()
        return _responsibility_to_domain(m) if m else None

    async def get_all(self) -> list[Responsibility]:
        result = await self._s.execute(
            select(ResponsibilityModel).order_by(ResponsibilityModel.code)
        )
        return [_responsibility_to_domain(m) for m in result.scalars()]


class SqlAssignmentRepository(AssignmentRepository):
    """Job responsibility rows.

    ``save`` is the authoritative budget check: it locks the job row, re-reads
    the job's assignments inside the transaction and refuses the insert if
    the 100% budget would be exceeded. Concurrent writers for the same job
    are serialized by the row lock.
    """

    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, assignment: Assignment) -> Assignment:
        async with self._s.begin_nested():
            locked = await self._s.execute(
                select(JobModel.id).where(JobModel.id == assignment.job_id).with_for_update()
            )
            if locked.scalar_one_or_none() is None:
                raise PersistenceConflictError(f"Job {assignment.job_id} does not exist")

            existing = await self.get_by_job(assignment.job_id)
            decision = can_admit(
                assignment.weight,
                aggregate_overlapping_weight(
                    assignment.start_date, assignment.end_date, existing
                ),
            )
            if not decision.accepted:
                raise PersistenceConflictError(
                    f"Weight budget exceeded on write: {decision.reason}",
                    max_allowed=decision.max_allowed,
                )

            m = JobResponsibilityModel(
                job_id=assignment.job_id,
                responsibility_id=assignment.responsibility_id,
                weighting=assignment.weight,
                start_date=assignment.start_date,
                end_date=assignment.end_date,
                notes=assignment.notes,
            )
            self._s.add(m)
            try:
                await self._s.flush()
            except IntegrityError as e:
                logger.warning("Insert into job_responsibilities refused: %s", e.orig)
                raise PersistenceConflictError(
                    f"Store rejected assignment: {e.orig}"
                ) from e

        assignment.id = m.id
        return assignment

    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        result = await self._s.execute(
            select(*_ASSIGNMENT_COLUMNS).where(JobResponsibilityModel.id == assignment_id)
        )
        found = parse_assignment_records(result.mappings())
        return found[0] if found else None

    async def get_by_job(self, job_id: str) -> list[Assignment]:
        result = await self._s.execute(
            select(*_ASSIGNMENT_COLUMNS)
            .where(JobResponsibilityModel.job_id == job_id)
            .order_by(JobResponsibilityModel.start_date, JobResponsibilityModel.id)
        )
        return parse_assignment_records(result.mappings())

    async def delete(self, assignment_id: str) -> bool:
        result = await self._s.execute(
            delete(JobResponsibilityModel).where(JobResponsibilityModel.id == assignment_id)
        )
        await self._s.flush()
        return result.rowcount > 0

"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.persistence.database import get_session
from jobweights.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlJobRepository,
    SqlResponsibilityRepository,
)
from jobweights.application.use_cases.assign_responsibility import (
    AssignResponsibilityUseCase,
    CheckAssignmentUseCase,
    JobWeightSummaryUseCase,
    RemoveAssignmentUseCase,
)
from jobweights.application.use_cases.bulk_assign import BulkAssignUseCase
from jobweights.application.use_cases.import_responsibilities import (
    ImportJobResponsibilitiesUseCase,
)
from jobweights.config import settings


def get_job_repo(session: AsyncSession = Depends(get_session)) -> SqlJobRepository:
    return SqlJobRepository(session)


def get_responsibility_repo(
    session: AsyncSession = Depends(get_session),
) -> SqlResponsibilityRepository:
    return SqlResponsibilityRepository(session)


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(session)


def _assign_uc(session: AsyncSession) -> AssignResponsibilityUseCase:
    return AssignResponsibilityUseCase(
        assignment_repo=SqlAssignmentRepository(session),
        job_repo=SqlJobRepository(session),
        responsibility_repo=SqlResponsibilityRepository(session),
    )


def get_assign_uc(session: AsyncSession = Depends(get_session)) -> AssignResponsibilityUseCase:
    return _assign_uc(session)


def get_check_uc(session: AsyncSession = Depends(get_session)) -> CheckAssignmentUseCase:
    return CheckAssignmentUseCase(
        assignment_repo=SqlAssignmentRepository(session),
        job_repo=SqlJobRepository(session),
        responsibility_repo=SqlResponsibilityRepository(session),
    )


def get_remove_uc(session: AsyncSession = Depends(get_session)) -> RemoveAssignmentUseCase:
    return RemoveAssignmentUseCase(SqlAssignmentRepository(session))


def get_summary_uc(session: AsyncSession = Depends(get_session)) -> JobWeightSummaryUseCase:
    return JobWeightSummaryUseCase(SqlAssignmentRepository(session), SqlJobRepository(session))


def get_bulk_assign_uc(session: AsyncSession = Depends(get_session)) -> BulkAssignUseCase:
    return BulkAssignUseCase(
        assign=_assign_uc(session),
        assignment_repo=SqlAssignmentRepository(session),
        job_repo=SqlJobRepository(session),
        responsibility_repo=SqlResponsibilityRepository(session),
        batch_size=settings.bulk_batch_size,
    )


def get_import_uc(
    session: AsyncSession = Depends(get_session),
) -> ImportJobResponsibilitiesUseCase:
    return ImportJobResponsibilitiesUseCase(
        job_repo=SqlJobRepository(session),
        responsibility_repo=SqlResponsibilityRepository(session),
        assign=_assign_uc(session),
        default_weight=settings.default_weighting,
    )

"""Job endpoints — list jobs, their assignments, and add new assignments."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.persistence.database import get_session
from jobweights.application.ports.assignment_repo import AssignmentRepository
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.use_cases.assign_responsibility import (
    AssignResponsibilityUseCase,
    CheckAssignmentUseCase,
    JobWeightSummaryUseCase,
)
from jobweights.domain.policies.admission import AssignmentRequest
from jobweights.infrastructure.api.dependencies import (
    get_assign_uc,
    get_assignment_repo,
    get_check_uc,
    get_job_repo,
    get_summary_uc,
)
from jobweights.infrastructure.api.schemas import (
    AdmissionOut,
    AssignmentIn,
    AssignmentOut,
    JobOut,
    WeightSummaryOut,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("")
async def list_jobs(jobs: JobRepository = Depends(get_job_repo)):
    """List all jobs."""
    all_jobs = await jobs.get_all()
    return {
        "total": len(all_jobs),
        "jobs": [JobOut.from_domain(j) for j in all_jobs],
    }


@router.get("/{job_id}/assignments")
async def list_assignments(
    job_id: str,
    jobs: JobRepository = Depends(get_job_repo),
    assignments: AssignmentRepository = Depends(get_assignment_repo),
):
    """All responsibility assignments of a job, current and historical."""
    if await jobs.get_by_id(job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found")

    rows = await assignments.get_by_job(job_id)
    return {
        "job_id": job_id,
        "total": len(rows),
        "assignments": [AssignmentOut.from_domain(a) for a in rows],
    }


@router.get("/{job_id}/weight-summary", response_model=WeightSummaryOut)
async def weight_summary(
    job_id: str,
    on: date | None = None,
    summary_uc: JobWeightSummaryUseCase = Depends(get_summary_uc),
) -> WeightSummaryOut:
    """Committed and remaining weight on a day (default: today)."""
    summary = await summary_uc.execute(job_id, on or date.today())
    if summary is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return WeightSummaryOut(
        job_id=summary.job_id,
        on=summary.on,
        committed_weight=summary.committed_weight,
        remaining_weight=summary.remaining_weight,
        active_assignments=summary.active_assignments,
    )


@router.post("/{job_id}/assignments/check", response_model=AdmissionOut)
async def check_assignment(
    job_id: str,
    body: AssignmentIn,
    check_uc: CheckAssignmentUseCase = Depends(get_check_uc),
) -> AdmissionOut:
    """Run the admission check without writing anything."""
    check = await check_uc.execute(_to_request(job_id, body))
    if check.not_found:
        raise HTTPException(status_code=404, detail=check.decision.reason)

    decision = check.decision
    return AdmissionOut(
        accepted=decision.accepted,
        reason=decision.reason,
        max_allowed=decision.max_allowed,
        aggregated_weight=decision.aggregated_weight,
    )


@router.post(
    "/{job_id}/assignments",
    response_model=AssignmentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_assignment(
    job_id: str,
    body: AssignmentIn,
    assign_uc: AssignResponsibilityUseCase = Depends(get_assign_uc),
    session: AsyncSession = Depends(get_session),
) -> AssignmentOut:
    """Assign a responsibility to a job if the weight budget allows it."""
    result = await assign_uc.execute(_to_request(job_id, body))

    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    if result.conflict:
        await session.rollback()
        raise HTTPException(
            status_code=409,
            detail={"message": result.error, "max_allowed": result.max_allowed},
        )
    if not result.accepted:
        raise HTTPException(
            status_code=422,
            detail={"message": result.error, "max_allowed": result.max_allowed},
        )

    await session.commit()
    return AssignmentOut.from_domain(result.assignment)


def _to_request(job_id: str, body: AssignmentIn) -> AssignmentRequest:
    return AssignmentRequest(
        job_id=job_id,
        responsibility_id=body.responsibility_id,
        weight=body.weighting,
        start_date=body.start_date,
        end_date=body.end_date,
        notes=body.notes,
    )

"""Assignment endpoints — delete and bulk assign."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.persistence.database import get_session
from jobweights.application.use_cases.assign_responsibility import RemoveAssignmentUseCase
from jobweights.application.use_cases.bulk_assign import BulkAssignUseCase
from jobweights.domain.value_objects.enums import BulkMode
from jobweights.infrastructure.api.dependencies import get_bulk_assign_uc, get_remove_uc
from jobweights.infrastructure.api.schemas import (
    BulkAssignmentIn,
    BulkAssignmentOut,
    BulkItemOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(
    assignment_id: str,
    remove_uc: RemoveAssignmentUseCase = Depends(get_remove_uc),
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete an assignment by id."""
    if not await remove_uc.execute(assignment_id):
        raise HTTPException(status_code=404, detail="Assignment not found")
    await session.commit()


@router.post("/bulk", response_model=BulkAssignmentOut)
async def bulk_assign(
    body: BulkAssignmentIn,
    bulk_uc: BulkAssignUseCase = Depends(get_bulk_assign_uc),
    session: AsyncSession = Depends(get_session),
) -> BulkAssignmentOut:
    """Assign one responsibility to many jobs and report every job's outcome."""
    report = await bulk_uc.execute(
        responsibility_id=body.responsibility_id,
        job_ids=body.job_ids,
        weight=body.weighting,
        start_date=body.start_date,
        end_date=body.end_date,
        notes=body.notes,
        mode=body.mode,
    )

    if report.rolled_back or (body.mode == BulkMode.ALL_OR_NOTHING and report.failed):
        await session.rollback()
    else:
        await session.commit()

    return BulkAssignmentOut(
        responsibility_id=report.responsibility_id,
        mode=report.mode,
        rolled_back=report.rolled_back,
        successful=len(report.successful),
        failed=len(report.failed),
        results=[
            BulkItemOut(
                job_id=r.job_id,
                status=r.status,
                assignment_id=r.assignment_id,
                max_allowed=r.max_allowed,
                error=r.error,
            )
            for r in report.results
        ],
    )

"""Import endpoint — upload a job responsibilities CSV."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.csv_loader.loader import (
    JOB_RESPONSIBILITY_HEADERS,
    parse_job_responsibility_rows,
    read_csv_text,
)
from jobweights.adapters.persistence.database import get_session
from jobweights.application.use_cases.import_responsibilities import (
    ImportJobResponsibilitiesUseCase,
)
from jobweights.infrastructure.api.dependencies import get_import_uc
from jobweights.infrastructure.api.schemas import ImportOut, ImportRowOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])


@router.get("/responsibilities/template")
async def import_template():
    """Column layout expected by the responsibilities import."""
    return {"headers": JOB_RESPONSIBILITY_HEADERS}


@router.post("/responsibilities", response_model=ImportOut)
async def import_responsibilities(
    file: UploadFile = File(...),
    import_uc: ImportJobResponsibilitiesUseCase = Depends(get_import_uc),
    session: AsyncSession = Depends(get_session),
) -> ImportOut:
    """Import job ↔ responsibility assignments from a CSV upload."""
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only .csv files are supported.")

    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
        rows = parse_job_responsibility_rows(read_csv_text(text, source=file.filename))
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning("Unreadable import file %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"Could not read CSV: {e}")

    if not rows:
        raise HTTPException(status_code=400, detail="CSV contains no data rows")

    report = await import_uc.execute(rows)
    await session.commit()

    return ImportOut(
        imported=report.imported,
        failed=report.failed,
        results=[
            ImportRowOut(
                line=r.line,
                job_code=r.job_code,
                responsibility_code=r.responsibility_code,
                status=r.status,
                weighting=r.weight,
                assignment_id=r.assignment_id,
                max_allowed=r.max_allowed,
                error=r.error,
            )
            for r in report.results
        ],
    )

"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobweights.adapters.persistence.database import get_session
from jobweights.adapters.persistence.models import (
    JobModel,
    JobResponsibilityModel,
    ResponsibilityModel,
)

router = APIRouter(tags=["health"])

_COUNTED_TABLES = (JobModel, ResponsibilityModel, JobResponsibilityModel)


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Check database connectivity and report row counts per table."""
    tables: dict[str, int] = {}
    try:
        for model in _COUNTED_TABLES:
            result = await session.execute(select(func.count()).select_from(model))
            tables[model.__tablename__] = result.scalar_one()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "tables": tables,
        "service": "jobweights - job responsibility weighting",
    }

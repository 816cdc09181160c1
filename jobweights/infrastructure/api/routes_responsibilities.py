"""Responsibility registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.infrastructure.api.dependencies import get_responsibility_repo
from jobweights.infrastructure.api.schemas import ResponsibilityOut

router = APIRouter(prefix="/responsibilities", tags=["responsibilities"])


@router.get("")
async def list_responsibilities(
    active_only: bool = False,
    responsibilities: ResponsibilityRepository = Depends(get_responsibility_repo),
):
    """List the responsibility registry, optionally only active entries."""
    items = await responsibilities.get_all()
    if active_only:
        items = [r for r in items if r.is_active]
    return {
        "total": len(items),
        "responsibilities": [ResponsibilityOut.from_domain(r) for r in items],
    }

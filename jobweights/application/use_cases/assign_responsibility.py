"""AssignResponsibilityUseCase — validate, admit and persist one assignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from jobweights.application.ports.assignment_repo import AssignmentRepository
from jobweights.application.ports.errors import PersistenceConflictError
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.policies.admission import (
    WEIGHT_BUDGET,
    AdmissionDecision,
    AssignmentRequest,
    evaluate_assignment,
    validate_assignment_request,
)
from jobweights.domain.policies.weight_aggregation import committed_weight_on

logger = logging.getLogger(__name__)


@dataclass
class AssignmentResult:
    """Outcome of one "add assignment" action."""

    job_id: str | None
    responsibility_id: str | None
    weight: int | None
    assignment: Assignment | None = None
    max_allowed: int | None = None
    error: str | None = None
    not_found: bool = False
    conflict: bool = False

    @property
    def accepted(self) -> bool:
        return self.assignment is not None and self.error is None


@dataclass(frozen=True)
class AssignmentCheck:
    """Dry-run answer: the admission decision, or a missing job / responsibility."""

    decision: AdmissionDecision
    not_found: bool = False

    @property
    def accepted(self) -> bool:
        return self.decision.accepted


@dataclass(frozen=True)
class JobWeightSummary:
    job_id: str
    on: date
    committed_weight: int
    active_assignments: int

    @property
    def remaining_weight(self) -> int:
        return max(0, WEIGHT_BUDGET - self.committed_weight)


class CheckAssignmentUseCase:
    """Dry-run admission check — nothing is written.

    Steps:
    1. Input validation (weight range, required fields, date order)
    2. Job / responsibility existence
    3. Aggregate overlapping weight and admit
    """

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        job_repo: JobRepository,
        responsibility_repo: ResponsibilityRepository,
    ):
        self._assignments = assignment_repo
        self._jobs = job_repo
        self._responsibilities = responsibility_repo

    async def execute(self, request: AssignmentRequest) -> AssignmentCheck:
        errors = validate_assignment_request(request)
        if errors:
            return AssignmentCheck(AdmissionDecision.reject("; ".join(errors)))

        if await self._jobs.get_by_id(request.job_id) is None:
            return AssignmentCheck(
                AdmissionDecision.reject(f"Job {request.job_id} not found"),
                not_found=True,
            )
        if await self._responsibilities.get_by_id(request.responsibility_id) is None:
            return AssignmentCheck(
                AdmissionDecision.reject(
                    f"Responsibility {request.responsibility_id} not found"
                ),
                not_found=True,
            )

        existing = await self._assignments.get_by_job(request.job_id)
        return AssignmentCheck(evaluate_assignment(request, existing))


class AssignResponsibilityUseCase:
    """Orchestrates the admission check and the write to the store.

    The local check is advisory: the repository re-validates on write and may
    still refuse with PersistenceConflictError when a concurrent writer won.
    """

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        job_repo: JobRepository,
        responsibility_repo: ResponsibilityRepository,
    ):
        self._assignments = assignment_repo
        self._check = CheckAssignmentUseCase(assignment_repo, job_repo, responsibility_repo)

    async def execute(self, request: AssignmentRequest) -> AssignmentResult:
        """Add one assignment: run the dry-run check, then persist."""
        result = AssignmentResult(
            job_id=request.job_id,
            responsibility_id=request.responsibility_id,
            weight=request.weight,
        )

        check = await self._check.execute(request)
        if not check.accepted:
            if not check.not_found:
                logger.warning(
                    "Job %s: responsibility %s at %s%% rejected (%s)",
                    request.job_id, request.responsibility_id, request.weight,
                    check.decision.reason,
                )
            result.error = check.decision.reason
            result.max_allowed = check.decision.max_allowed
            result.not_found = check.not_found
            return result

        assignment = Assignment(
            id=None,
            job_id=request.job_id,
            responsibility_id=request.responsibility_id,
            weight=request.weight,
            start_date=request.start_date,
            end_date=request.end_date,
            notes=request.notes,
        )
        try:
            result.assignment = await self._assignments.save(assignment)
        except PersistenceConflictError as e:
            logger.warning("Job %s: store refused assignment: %s", request.job_id, e)
            result.error = str(e)
            result.max_allowed = e.max_allowed
            result.conflict = True
            return result

        logger.info(
            "Job %s ← responsibility %s at %d%% (%s → %s, committed before: %d%%)",
            request.job_id, request.responsibility_id, request.weight,
            request.start_date, request.end_date or "open",
            check.decision.aggregated_weight,
        )
        return result


class RemoveAssignmentUseCase:
    """Delete an assignment by id. Remaining assignments are not re-checked."""

    def __init__(self, assignment_repo: AssignmentRepository):
        self._assignments = assignment_repo

    async def execute(self, assignment_id: str) -> bool:
        existing = await self._assignments.get_by_id(assignment_id)
        if existing is None:
            logger.warning("Assignment %s not found, nothing deleted", assignment_id)
            return False

        deleted = await self._assignments.delete(assignment_id)
        if deleted:
            logger.info(
                "Assignment %s deleted from job %s (%d%% freed)",
                assignment_id, existing.job_id, existing.weight,
            )
        return deleted


class JobWeightSummaryUseCase:
    """Committed weight on a job for a given day. Returns None for an unknown job."""

    def __init__(self, assignment_repo: AssignmentRepository, job_repo: JobRepository):
        self._assignments = assignment_repo
        self._jobs = job_repo

    async def execute(self, job_id: str, on: date) -> JobWeightSummary | None:
        if await self._jobs.get_by_id(job_id) is None:
            return None

        existing = await self._assignments.get_by_job(job_id)
        return JobWeightSummary(
            job_id=job_id,
            on=on,
            committed_weight=committed_weight_on(on, existing),
            active_assignments=sum(1 for a in existing if a.is_active_on(on)),
        )

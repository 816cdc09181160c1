"""BulkAssignUseCase — assign one responsibility to many jobs in batches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from jobweights.application.ports.assignment_repo import AssignmentRepository
from jobweights.application.ports.errors import MalformedRecordError, PersistenceConflictError
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.application.use_cases.assign_responsibility import (
    AssignmentResult,
    AssignResponsibilityUseCase,
    CheckAssignmentUseCase,
)
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.policies.admission import AssignmentRequest
from jobweights.domain.value_objects.enums import BulkMode, ItemStatus

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50


@dataclass
class BulkItemResult:
    job_id: str
    status: ItemStatus
    assignment_id: str | None = None
    max_allowed: int | None = None
    error: str | None = None


@dataclass
class BulkAssignmentReport:
    responsibility_id: str
    mode: BulkMode
    results: list[BulkItemResult] = field(default_factory=list)
    rolled_back: bool = False

    @property
    def successful(self) -> list[BulkItemResult]:
        return [r for r in self.results if r.status == ItemStatus.ASSIGNED]

    @property
    def failed(self) -> list[BulkItemResult]:
        return [r for r in self.results if r.status != ItemStatus.ASSIGNED]


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _item_from_result(job_id: str, result: AssignmentResult) -> BulkItemResult:
    if result.accepted:
        return BulkItemResult(job_id, ItemStatus.ASSIGNED, assignment_id=result.assignment.id)
    if result.not_found:
        status = ItemStatus.NOT_FOUND
    elif result.conflict:
        status = ItemStatus.CONFLICT
    else:
        status = ItemStatus.REJECTED
    return BulkItemResult(job_id, status, max_allowed=result.max_allowed, error=result.error)


class BulkAssignUseCase:
    """Assign a responsibility to a list of jobs.

    BEST_EFFORT attempts every job and reports each outcome.
    ALL_OR_NOTHING checks every job first and writes only if all pass; a
    store conflict during the write pass flags the report ``rolled_back`` and
    the caller must roll back its transaction.
    """

    def __init__(
        self,
        assign: AssignResponsibilityUseCase,
        assignment_repo: AssignmentRepository,
        job_repo: JobRepository,
        responsibility_repo: ResponsibilityRepository,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self._assign = assign
        self._assignments = assignment_repo
        self._check = CheckAssignmentUseCase(assignment_repo, job_repo, responsibility_repo)
        self._batch_size = batch_size

    async def execute(
        self,
        responsibility_id: str,
        job_ids: list[str],
        weight: int,
        start_date: date,
        end_date: date | None = None,
        notes: str | None = None,
        mode: BulkMode = BulkMode.BEST_EFFORT,
    ) -> BulkAssignmentReport:
        # Same job listed twice would only duplicate the row
        unique_job_ids = list(dict.fromkeys(job_ids))
        requests = {
            job_id: AssignmentRequest(
                job_id=job_id,
                responsibility_id=responsibility_id,
                weight=weight,
                start_date=start_date,
                end_date=end_date,
                notes=notes,
            )
            for job_id in unique_job_ids
        }
        report = BulkAssignmentReport(responsibility_id=responsibility_id, mode=mode)
        logger.info(
            "Bulk assigning responsibility %s to %d jobs (%s, batch size %d)",
            responsibility_id, len(unique_job_ids), mode.value, self._batch_size,
        )

        if mode == BulkMode.ALL_OR_NOTHING:
            await self._all_or_nothing(requests, report)
        else:
            await self._best_effort(requests, report)

        logger.info(
            "Bulk assignment complete: %d/%d assigned%s",
            len(report.successful), len(report.results),
            " (rolled back)" if report.rolled_back else "",
        )
        return report

    async def _best_effort(
        self, requests: dict[str, AssignmentRequest], report: BulkAssignmentReport
    ) -> None:
        for batch_no, batch in enumerate(_chunks(list(requests), self._batch_size), start=1):
            failures = 0
            for job_id in batch:
                try:
                    result = await self._assign.execute(requests[job_id])
                except MalformedRecordError as e:
                    logger.error("Job %s: stored assignments unreadable: %s", job_id, e)
                    item = BulkItemResult(job_id, ItemStatus.MALFORMED, error=str(e))
                else:
                    item = _item_from_result(job_id, result)
                if item.status != ItemStatus.ASSIGNED:
                    failures += 1
                report.results.append(item)
            if failures:
                logger.warning("Batch %d: %d/%d jobs failed", batch_no, failures, len(batch))

    async def _all_or_nothing(
        self, requests: dict[str, AssignmentRequest], report: BulkAssignmentReport
    ) -> None:
        # Pass 1: check everything, write nothing
        rejected: list[BulkItemResult] = []
        for request in requests.values():
            item = await self._check_one(request)
            if item is not None:
                rejected.append(item)

        if rejected:
            failed = {item.job_id: item for item in rejected}
            report.results = [
                failed.get(job_id)
                or BulkItemResult(
                    job_id, ItemStatus.SKIPPED,
                    error="Not written: another job in the request was rejected",
                )
                for job_id in requests
            ]
            return

        # Pass 2: write in batches; the first failure aborts the whole run
        written: list[BulkItemResult] = []
        pending = list(requests)
        for batch in _chunks(pending, self._batch_size):
            for job_id in batch:
                try:
                    saved = await self._assignments.save(self._to_assignment(requests[job_id]))
                except PersistenceConflictError as e:
                    failure = BulkItemResult(
                        job_id, ItemStatus.CONFLICT, max_allowed=e.max_allowed, error=str(e)
                    )
                except MalformedRecordError as e:
                    failure = BulkItemResult(job_id, ItemStatus.MALFORMED, error=str(e))
                else:
                    written.append(
                        BulkItemResult(job_id, ItemStatus.ASSIGNED, assignment_id=saved.id)
                    )
                    continue

                logger.warning("Bulk write aborted at job %s: %s", job_id, failure.error)
                report.rolled_back = True
                done = {r.job_id for r in written}
                report.results = [
                    BulkItemResult(r.job_id, ItemStatus.SKIPPED, error="Rolled back")
                    for r in written
                ]
                report.results.append(failure)
                report.results.extend(
                    BulkItemResult(j, ItemStatus.SKIPPED, error="Not attempted")
                    for j in pending
                    if j not in done and j != job_id
                )
                return

        report.results = written

    async def _check_one(self, request: AssignmentRequest) -> BulkItemResult | None:
        """Pre-flight for ALL_OR_NOTHING. Returns None when the job passes."""
        job_id = request.job_id
        try:
            check = await self._check.execute(request)
        except MalformedRecordError as e:
            logger.error("Job %s: stored assignments unreadable: %s", job_id, e)
            return BulkItemResult(job_id, ItemStatus.MALFORMED, error=str(e))

        if check.accepted:
            return None
        return BulkItemResult(
            job_id,
            ItemStatus.NOT_FOUND if check.not_found else ItemStatus.REJECTED,
            max_allowed=check.decision.max_allowed,
            error=check.decision.reason,
        )

    @staticmethod
    def _to_assignment(request: AssignmentRequest) -> Assignment:
        return Assignment(
            id=None,
            job_id=request.job_id,
            responsibility_id=request.responsibility_id,
            weight=request.weight,
            start_date=request.start_date,
            end_date=request.end_date,
            notes=request.notes,
        )

"""ImportJobResponsibilitiesUseCase — apply parsed CSV rows as assignments."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from jobweights.application.ports.errors import MalformedRecordError
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.application.use_cases.assign_responsibility import AssignResponsibilityUseCase
from jobweights.domain.policies.admission import AssignmentRequest
from jobweights.domain.value_objects.enums import ItemStatus

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTING = 10


@dataclass
class ImportRowResult:
    line: int
    job_code: str
    responsibility_code: str
    status: ItemStatus
    weight: int | None = None
    assignment_id: str | None = None
    max_allowed: int | None = None
    error: str | None = None


@dataclass
class ImportReport:
    results: list[ImportRowResult] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return sum(1 for r in self.results if r.status == ItemStatus.IMPORTED)

    @property
    def failed(self) -> int:
        return len(self.results) - self.imported


class ImportJobResponsibilitiesUseCase:
    """Import job ↔ responsibility rows loaded by the CSV loader.

    Each row goes through the same admission check as a single assignment, so
    rows earlier in the file count against the budget of later rows. Every
    row is reported; nothing fails silently.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        responsibility_repo: ResponsibilityRepository,
        assign: AssignResponsibilityUseCase,
        default_weight: int = DEFAULT_WEIGHTING,
        today: Callable[[], date] = date.today,
    ):
        self._jobs = job_repo
        self._responsibilities = responsibility_repo
        self._assign = assign
        self._default_weight = default_weight
        self._today = today

    async def execute(self, rows: list[dict]) -> ImportReport:
        """Import rows produced by ``load_job_responsibility_rows``.

        Args:
            rows: dicts with ``line``, ``job_code``, ``responsibility_code``,
                ``weighting``, ``notes``, ``start_date``, ``end_date`` and the
                loader's ``errors`` list.
        """
        report = ImportReport()
        logger.info("Importing %d job responsibility rows", len(rows))

        for row in rows:
            result = ImportRowResult(
                line=row["line"],
                job_code=row.get("job_code") or "",
                responsibility_code=row.get("responsibility_code") or "",
                status=ItemStatus.IMPORTED,
            )
            report.results.append(result)

            if row.get("errors"):
                result.status = ItemStatus.INVALID
                result.error = "; ".join(row["errors"])
                logger.warning("Line %d invalid: %s", result.line, result.error)
                continue

            job = await self._jobs.get_by_code(result.job_code)
            if job is None:
                result.status = ItemStatus.NOT_FOUND
                result.error = f"Job not found: {result.job_code}"
                logger.warning("Line %d: %s", result.line, result.error)
                continue

            responsibility = await self._responsibilities.get_by_code(result.responsibility_code)
            if responsibility is None:
                result.status = ItemStatus.NOT_FOUND
                result.error = f"Responsibility not found: {result.responsibility_code}"
                logger.warning("Line %d: %s", result.line, result.error)
                continue

            weight = row.get("weighting")
            result.weight = weight if weight is not None else self._default_weight
            request = AssignmentRequest(
                job_id=job.id,
                responsibility_id=responsibility.id,
                weight=result.weight,
                start_date=row.get("start_date") or self._today(),
                end_date=row.get("end_date"),
                notes=row.get("notes"),
            )
            try:
                outcome = await self._assign.execute(request)
            except MalformedRecordError as e:
                result.status = ItemStatus.MALFORMED
                result.error = str(e)
                logger.error(
                    "Line %d: stored assignments of job %s unreadable: %s",
                    result.line, result.job_code, e,
                )
                continue

            if outcome.accepted:
                result.assignment_id = outcome.assignment.id
                continue

            result.status = ItemStatus.CONFLICT if outcome.conflict else ItemStatus.REJECTED
            result.error = outcome.error
            result.max_allowed = outcome.max_allowed

        logger.info("Import complete: %d imported, %d failed", report.imported, report.failed)
        return report

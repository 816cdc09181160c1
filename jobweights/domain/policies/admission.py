"""AdmissionPolicy — accept or reject a new assignment against the weight budget."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.policies.weight_aggregation import aggregate_overlapping_weight

WEIGHT_BUDGET = 100
MIN_WEIGHT = 1


@dataclass(frozen=True)
class AssignmentRequest:
    """Input for a new assignment, before anything is persisted."""

    job_id: str | None
    responsibility_id: str | None
    weight: int | None
    start_date: date | None
    end_date: date | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AdmissionDecision:
    """Result of the admission check."""

    accepted: bool
    reason: str | None = None
    max_allowed: int | None = None  # set only when the budget is exceeded
    aggregated_weight: int = 0

    @classmethod
    def accept(cls, aggregated_weight: int = 0) -> AdmissionDecision:
        return cls(accepted=True, aggregated_weight=aggregated_weight)

    @classmethod
    def reject(
        cls,
        reason: str,
        max_allowed: int | None = None,
        aggregated_weight: int = 0,
    ) -> AdmissionDecision:
        return cls(
            accepted=False,
            reason=reason,
            max_allowed=max_allowed,
            aggregated_weight=aggregated_weight,
        )


def weight_in_range(weight: int | None) -> bool:
    return weight is not None and MIN_WEIGHT <= weight <= WEIGHT_BUDGET


def can_admit(new_weight: int, aggregated_overlap: int) -> AdmissionDecision:
    """Pure function: does *new_weight* fit on top of *aggregated_overlap*?

    The budget boundary is inclusive: 60 + 40 is accepted, 60 + 41 is not.
    On rejection ``max_allowed`` tells the caller the largest weight that
    would still fit.
    """
    if not weight_in_range(new_weight):
        return AdmissionDecision.reject(
            f"Weight must be between {MIN_WEIGHT} and {WEIGHT_BUDGET}",
            aggregated_weight=aggregated_overlap,
        )

    if aggregated_overlap + new_weight <= WEIGHT_BUDGET:
        return AdmissionDecision.accept(aggregated_overlap)

    max_allowed = max(0, WEIGHT_BUDGET - aggregated_overlap)
    return AdmissionDecision.reject(
        f"Total weight would be {aggregated_overlap + new_weight}% for overlapping "
        f"periods; at most {max_allowed}% can be added",
        max_allowed=max_allowed,
        aggregated_weight=aggregated_overlap,
    )


def validate_assignment_request(request: AssignmentRequest) -> list[str]:
    """Collect human-readable input errors; an empty list means the input is usable."""
    errors: list[str] = []
    if not request.job_id:
        errors.append("job is required")
    if not request.responsibility_id:
        errors.append("responsibility is required")
    if request.weight is None:
        errors.append("weight is required")
    elif not weight_in_range(request.weight):
        errors.append(f"weight must be {MIN_WEIGHT}-{WEIGHT_BUDGET}")
    if request.start_date is None:
        errors.append("start_date is required")
    elif request.end_date is not None and request.end_date < request.start_date:
        errors.append("end_date must not be before start_date")
    return errors


def evaluate_assignment(
    request: AssignmentRequest,
    existing: Iterable[Assignment],
) -> AdmissionDecision:
    """Validate *request* and run the admission check against *existing*.

    *existing* must be the assignments of the job named in the request.
    """
    errors = validate_assignment_request(request)
    if errors:
        return AdmissionDecision.reject("; ".join(errors))

    aggregated = aggregate_overlapping_weight(
        request.start_date, request.end_date, existing
    )
    return can_admit(request.weight, aggregated)

"""WeightAggregationPolicy — weight already committed to a job over a date range."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.policies.overlap import overlaps


def aggregate_overlapping_weight(
    new_start: date,
    new_end: date | None,
    existing: Iterable[Assignment],
) -> int:
    """Sum the committed weight of every responsibility touching the new range.

    Business rules:
      1. Assignments are grouped by ``responsibility_id``.
      2. Within a group only entries overlapping ``[new_start, new_end]`` count.
      3. A group contributes the *max* weight of its overlapping entries, so
         historical or duplicate rows for one responsibility are not summed.
      4. Contributions are summed across responsibilities.

    Returns 0 when nothing overlaps.
    """
    by_responsibility: dict[str, list[int]] = defaultdict(list)
    for assignment in existing:
        if overlaps(new_start, new_end, assignment.start_date, assignment.end_date):
            by_responsibility[assignment.responsibility_id].append(assignment.weight)

    return sum(max(weights) for weights in by_responsibility.values())


def committed_weight_on(day: date, existing: Iterable[Assignment]) -> int:
    """Committed weight for a single calendar day (same grouping rule)."""
    return aggregate_overlapping_weight(day, day, existing)

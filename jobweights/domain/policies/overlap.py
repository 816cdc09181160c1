"""OverlapPolicy — inclusive calendar-date overlap test with open-ended ranges."""

from __future__ import annotations

from datetime import date

from jobweights.domain.value_objects.date_range import OPEN_END


def overlaps(
    start_a: date,
    end_a: date | None,
    start_b: date,
    end_b: date | None,
) -> bool:
    """Pure function: do ``[start_a, end_a]`` and ``[start_b, end_b]`` share a day?

    A ``None`` end means the range never ends and is compared as ``9999-12-31``.
    Both boundaries are inclusive, so ranges that touch on a single day overlap
    and a zero-length range (``start == end``) overlaps itself.
    """
    effective_end_a = end_a if end_a is not None else OPEN_END
    effective_end_b = end_b if end_b is not None else OPEN_END
    return start_a <= effective_end_b and start_b <= effective_end_a

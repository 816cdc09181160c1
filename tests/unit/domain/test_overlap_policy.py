"""Tests for the date-range overlap predicate."""

from datetime import date

import pytest

from jobweights.domain.policies.overlap import overlaps

JAN_1 = date(2026, 1, 1)
JAN_31 = date(2026, 1, 31)
FEB_1 = date(2026, 2, 1)
FEB_28 = date(2026, 2, 28)


def test_adjacent_ranges_do_not_overlap():
    assert overlaps(JAN_1, JAN_31, FEB_1, FEB_28) is False


def test_shared_boundary_day_overlaps():
    assert overlaps(JAN_1, JAN_31, JAN_31, FEB_28) is True


def test_open_ended_overlaps_itself():
    assert overlaps(JAN_1, None, JAN_1, None) is True


def test_open_ended_overlaps_anything_after_its_start():
    assert overlaps(JAN_1, None, date(2100, 5, 1), date(2100, 5, 2)) is True
    assert overlaps(JAN_1, None, date(9999, 12, 31), None) is True


def test_open_ended_does_not_reach_backwards():
    assert overlaps(FEB_1, None, JAN_1, JAN_31) is False


def test_zero_length_range_overlaps_itself():
    assert overlaps(JAN_31, JAN_31, JAN_31, JAN_31) is True


def test_zero_length_range_inside_longer_range():
    assert overlaps(date(2026, 1, 15), date(2026, 1, 15), JAN_1, JAN_31) is True


def test_containment():
    assert overlaps(JAN_1, FEB_28, date(2026, 1, 10), date(2026, 1, 20)) is True


@pytest.mark.parametrize(
    "a, b",
    [
        ((JAN_1, JAN_31), (FEB_1, FEB_28)),
        ((JAN_1, JAN_31), (JAN_31, FEB_28)),
        ((JAN_1, None), (FEB_1, FEB_28)),
        ((FEB_1, None), (JAN_1, JAN_31)),
        ((JAN_1, None), (FEB_1, None)),
        ((JAN_31, JAN_31), (JAN_1, FEB_28)),
    ],
)
def test_overlap_is_symmetric(a, b):
    assert overlaps(*a, *b) == overlaps(*b, *a)

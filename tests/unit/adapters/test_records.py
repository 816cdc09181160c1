"""Tests for the job responsibility row schema."""

from datetime import date

import pytest

from jobweights.adapters.persistence.records import parse_assignment_records
from jobweights.application.ports.errors import MalformedRecordError


def _row(**overrides) -> dict:
    row = {
        "id": "a-1",
        "job_id": "J",
        "responsibility_id": "R1",
        "weighting": 25,
        "start_date": "2026-01-01",
        "end_date": None,
        "notes": None,
        "created_at": "2026-01-01T00:00:00",
    }
    row.update(overrides)
    return row


def test_valid_row_maps_to_assignment():
    [a] = parse_assignment_records([_row(end_date=date(2026, 6, 30))])
    assert a.id == "a-1"
    assert a.weight == 25
    assert a.start_date == date(2026, 1, 1)
    assert a.end_date == date(2026, 6, 30)


def test_empty_input():
    assert parse_assignment_records([]) == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"weighting": 0},
        {"weighting": 101},
        {"weighting": "lots"},
        {"start_date": None},
        {"responsibility_id": None},
        {"start_date": "2026-06-01", "end_date": "2026-01-01"},
    ],
)
def test_malformed_rows_raise(overrides):
    with pytest.raises(MalformedRecordError, match="a-1"):
        parse_assignment_records([_row(**overrides)])

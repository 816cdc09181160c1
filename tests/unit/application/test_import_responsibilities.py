"""Tests for ImportJobResponsibilitiesUseCase."""

from __future__ import annotations

from datetime import date

import pytest

from jobweights.application.use_cases.assign_responsibility import AssignResponsibilityUseCase
from jobweights.application.use_cases.import_responsibilities import (
    ImportJobResponsibilitiesUseCase,
)
from jobweights.domain.value_objects.enums import ItemStatus

TODAY = date(2026, 10, 18)


def _make_use_case(store, default_weight: int = 10) -> ImportJobResponsibilitiesUseCase:
    return ImportJobResponsibilitiesUseCase(
        job_repo=store.jobs,
        responsibility_repo=store.responsibilities,
        assign=AssignResponsibilityUseCase(
            assignment_repo=store.assignments,
            job_repo=store.jobs,
            responsibility_repo=store.responsibilities,
        ),
        default_weight=default_weight,
        today=lambda: TODAY,
    )


def _row(line: int, job_code="DEV-01", resp_code="RESP-DEV-001", weighting=None, **kw) -> dict:
    return {
        "line": line,
        "job_code": job_code,
        "responsibility_code": resp_code,
        "weighting": weighting,
        "notes": kw.get("notes"),
        "start_date": kw.get("start_date"),
        "end_date": kw.get("end_date"),
        "errors": kw.get("errors", []),
    }


@pytest.mark.asyncio
async def test_defaults_applied(store):
    uc = _make_use_case(store)
    report = await uc.execute([_row(2)])

    assert report.imported == 1
    saved = store.assignments.assignments[0]
    assert saved.weight == 10
    assert saved.start_date == TODAY
    assert saved.end_date is None
    assert saved.job_id == "J"
    assert saved.responsibility_id == "R1"


@pytest.mark.asyncio
async def test_codes_match_case_insensitively(store):
    uc = _make_use_case(store)
    report = await uc.execute([_row(2, job_code="dev-01", resp_code="resp-dev-002", weighting=20)])
    assert report.results[0].status == ItemStatus.IMPORTED


@pytest.mark.asyncio
async def test_every_row_is_reported(store):
    uc = _make_use_case(store)
    report = await uc.execute([
        _row(2, weighting=60),
        _row(3, resp_code="RESP-DEV-002", weighting=50),  # 60 + 50 > 100
        _row(4, job_code="NOPE"),
        _row(5, resp_code="RESP-NOPE"),
        _row(6, errors=["weighting must be 1-100"]),
        _row(7, resp_code="RESP-DEV-003", weighting=40),
    ])

    statuses = [(r.line, r.status) for r in report.results]
    assert statuses == [
        (2, ItemStatus.IMPORTED),
        (3, ItemStatus.REJECTED),
        (4, ItemStatus.NOT_FOUND),
        (5, ItemStatus.NOT_FOUND),
        (6, ItemStatus.INVALID),
        (7, ItemStatus.IMPORTED),
    ]
    assert report.imported == 2
    assert report.failed == 4

    over = report.results[1]
    assert over.max_allowed == 40
    assert "Job not found: NOPE" == report.results[2].error
    assert "Responsibility not found: RESP-NOPE" == report.results[3].error


@pytest.mark.asyncio
async def test_rows_outside_each_others_period_both_import(store):
    uc = _make_use_case(store)
    report = await uc.execute([
        _row(2, weighting=80, start_date=date(2025, 1, 1), end_date=date(2025, 12, 31)),
        _row(3, resp_code="RESP-DEV-002", weighting=80, start_date=date(2026, 1, 1)),
    ])
    assert report.imported == 2


@pytest.mark.asyncio
async def test_store_conflict_is_reported_per_row(store):
    store.assignments.refuse_jobs.add("K")
    uc = _make_use_case(store)
    report = await uc.execute([_row(2, job_code="QA-01"), _row(3)])
    assert [r.status for r in report.results] == [ItemStatus.CONFLICT, ItemStatus.IMPORTED]


@pytest.mark.asyncio
async def test_malformed_stored_rows_fail_only_that_row(store):
    store.assignments.malformed_jobs.add("J")
    uc = _make_use_case(store)
    report = await uc.execute([_row(2), _row(3, job_code="QA-01")])

    assert [r.status for r in report.results] == [ItemStatus.MALFORMED, ItemStatus.IMPORTED]
    assert "job J" in report.results[0].error
    assert report.failed == 1

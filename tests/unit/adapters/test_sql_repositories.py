"""SQL repositories against an in-memory SQLite database (aiosqlite)."""

from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobweights.adapters.persistence.database import Base
from jobweights.adapters.persistence.models import JobResponsibilityModel
from jobweights.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlJobRepository,
    SqlResponsibilityRepository,
)
from jobweights.application.ports.errors import PersistenceConflictError
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.entities.job import Job
from jobweights.domain.entities.responsibility import Responsibility

JAN_1 = date(2026, 1, 1)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    # Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside it
    @event.listens_for(engine.sync_engine, "connect")
    def _no_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session):
    """One job and two responsibilities, committed."""
    job = await SqlJobRepository(session).save(Job(id=None, code="dev-01", name="Developer"))
    responsibilities = SqlResponsibilityRepository(session)
    r1 = await responsibilities.save(Responsibility(id=None, code="resp-001", name="Write code"))
    r2 = await responsibilities.save(Responsibility(id=None, code="resp-002", name="Review"))
    await session.commit()
    return job, r1, r2


def _assignment(job, responsibility, weight, start=JAN_1, end=None) -> Assignment:
    return Assignment(
        id=None,
        job_id=job.id,
        responsibility_id=responsibility.id,
        weight=weight,
        start_date=start,
        end_date=end,
    )


async def _row_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(JobResponsibilityModel))
    return result.scalar_one()


# ─── Jobs / responsibilities ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_codes_are_stored_upper_and_found_case_insensitively(session, seeded):
    job, r1, _ = seeded
    assert job.id is not None

    found = await SqlJobRepository(session).get_by_code(" Dev-01 ")
    assert found.id == job.id
    assert found.code == "DEV-01"

    responsibilities = SqlResponsibilityRepository(session)
    assert (await responsibilities.get_by_code("RESP-001")).id == r1.id
    assert [r.code for r in await responsibilities.get_all()] == ["RESP-001", "RESP-002"]


# ─── Assignments ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_save_and_read_back(session, seeded):
    job, r1, _ = seeded
    repo = SqlAssignmentRepository(session)

    saved = await repo.save(_assignment(job, r1, 40, end=date(2026, 6, 30)))
    await session.commit()

    assert saved.id is not None
    [stored] = await repo.get_by_job(job.id)
    assert stored.weight == 40
    assert stored.start_date == JAN_1
    assert stored.end_date == date(2026, 6, 30)
    assert (await repo.get_by_id(saved.id)).responsibility_id == r1.id
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_over_budget_insert_is_refused_with_max_allowed(session, seeded):
    job, r1, r2 = seeded
    repo = SqlAssignmentRepository(session)
    await repo.save(_assignment(job, r1, 80))

    with pytest.raises(PersistenceConflictError, match="at most 20%") as exc:
        await repo.save(_assignment(job, r2, 30))

    assert exc.value.max_allowed == 20
    assert await _row_count(session) == 1


@pytest.mark.asyncio
async def test_refused_insert_leaves_session_usable(session, seeded):
    job, r1, r2 = seeded
    repo = SqlAssignmentRepository(session)
    await repo.save(_assignment(job, r1, 80))

    with pytest.raises(PersistenceConflictError):
        await repo.save(_assignment(job, r2, 30))

    # Same transaction continues after the savepoint rollback
    await repo.save(_assignment(job, r2, 20))
    await session.commit()
    assert sorted(a.weight for a in await repo.get_by_job(job.id)) == [20, 80]


@pytest.mark.asyncio
async def test_non_overlapping_periods_share_no_budget(session, seeded):
    job, r1, r2 = seeded
    repo = SqlAssignmentRepository(session)
    await repo.save(_assignment(job, r1, 90, end=date(2026, 3, 31)))
    await repo.save(_assignment(job, r2, 90, start=date(2026, 4, 1)))
    assert await _row_count(session) == 2


@pytest.mark.asyncio
async def test_constraint_violation_is_translated(session, seeded):
    job, r1, _ = seeded
    repo = SqlAssignmentRepository(session)

    # Passes the budget re-check, fails the end_date >= start_date check constraint
    with pytest.raises(PersistenceConflictError, match="Store rejected assignment"):
        await repo.save(_assignment(job, r1, 10, start=date(2026, 5, 1), end=date(2026, 4, 1)))

    assert await _row_count(session) == 0


@pytest.mark.asyncio
async def test_unknown_job_is_refused(session, seeded):
    _, r1, _ = seeded
    ghost = Job(id="no-such-job", code="GHOST", name="Ghost")
    with pytest.raises(PersistenceConflictError, match="does not exist"):
        await SqlAssignmentRepository(session).save(_assignment(ghost, r1, 10))


@pytest.mark.asyncio
async def test_delete(session, seeded):
    job, r1, _ = seeded
    repo = SqlAssignmentRepository(session)
    saved = await repo.save(_assignment(job, r1, 50))

    assert await repo.delete(saved.id) is True
    assert await repo.delete(saved.id) is False
    assert await repo.get_by_job(job.id) == []

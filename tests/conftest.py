"""Pytest configuration, in-memory fake repositories and shared fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from jobweights.application.ports.assignment_repo import AssignmentRepository
from jobweights.application.ports.errors import MalformedRecordError, PersistenceConflictError
from jobweights.application.ports.job_repo import JobRepository
from jobweights.application.ports.responsibility_repo import ResponsibilityRepository
from jobweights.domain.entities.assignment import Assignment
from jobweights.domain.entities.job import Job
from jobweights.domain.entities.responsibility import Responsibility

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeJobRepo(JobRepository):
    def __init__(self, jobs: list[Job] | None = None):
        self._jobs = {j.id: j for j in jobs or []}

    async def save(self, job):
        job.id = job.id or f"job-{len(self._jobs) + 1}"
        self._jobs[job.id] = job
        return job

    async def get_by_id(self, job_id):
        return self._jobs.get(job_id)

    async def get_by_code(self, code):
        return next((j for j in self._jobs.values() if j.code.upper() == code.upper()), None)

    async def get_all(self):
        return list(self._jobs.values())


class FakeResponsibilityRepo(ResponsibilityRepository):
    def __init__(self, responsibilities: list[Responsibility] | None = None):
        self._items = {r.id: r for r in responsibilities or []}

    async def save(self, responsibility):
        responsibility.id = responsibility.id or f"resp-{len(self._items) + 1}"
        self._items[responsibility.id] = responsibility
        return responsibility

    async def get_by_id(self, responsibility_id):
        return self._items.get(responsibility_id)

    async def get_by_code(self, code):
        return next((r for r in self._items.values() if r.code.upper() == code.upper()), None)

    async def get_all(self):
        return list(self._items.values())


class FakeAssignmentRepo(AssignmentRepository):
    """Stores assignments in a list.

    ``refuse_jobs`` simulates store-side conflicts, ``malformed_jobs`` simulates
    rows that fail boundary validation when read back.
    """

    def __init__(self, assignments: list[Assignment] | None = None):
        self.assignments: list[Assignment] = list(assignments or [])
        self.refuse_jobs: set[str] = set()
        self.malformed_jobs: set[str] = set()
        self._next_id = len(self.assignments) + 1

    async def save(self, assignment):
        if assignment.job_id in self.refuse_jobs:
            raise PersistenceConflictError("duplicate key value violates unique constraint")
        assignment.id = f"a-{self._next_id}"
        self._next_id += 1
        self.assignments.append(assignment)
        return assignment

    async def get_by_id(self, assignment_id):
        return next((a for a in self.assignments if a.id == assignment_id), None)

    async def get_by_job(self, job_id):
        if job_id in self.malformed_jobs:
            raise MalformedRecordError(f"Malformed job_responsibilities row for job {job_id}")
        return [a for a in self.assignments if a.job_id == job_id]

    async def delete(self, assignment_id):
        before = len(self.assignments)
        self.assignments = [a for a in self.assignments if a.id != assignment_id]
        return len(self.assignments) < before


@dataclass
class InMemoryStore:
    jobs: FakeJobRepo
    responsibilities: FakeResponsibilityRepo
    assignments: FakeAssignmentRepo = field(default_factory=FakeAssignmentRepo)


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def store() -> InMemoryStore:
    """Jobs J, K, L and responsibilities R1..R4, no assignments yet."""
    return InMemoryStore(
        jobs=FakeJobRepo([
            Job(id="J", code="DEV-01", name="Developer"),
            Job(id="K", code="QA-01", name="QA Engineer"),
            Job(id="L", code="OPS-01", name="Operations"),
        ]),
        responsibilities=FakeResponsibilityRepo([
            Responsibility(id="R1", code="RESP-DEV-001", name="Write code"),
            Responsibility(id="R2", code="RESP-DEV-002", name="Review code"),
            Responsibility(id="R3", code="RESP-DEV-003", name="On-call"),
            Responsibility(id="R4", code="RESP-DEV-004", name="Mentoring"),
        ]),
    )

"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod

from jobweights.domain.entities.assignment import Assignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        """Persist a new assignment.

        Raises PersistenceConflictError when the store rejects the write,
        including when its own budget re-check fails.
        """
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        ...

    @abstractmethod
    async def get_by_job(self, job_id: str) -> list[Assignment]:
        ...

    @abstractmethod
    async def delete(self, assignment_id: str) -> bool:
        """Delete by id. Returns False if nothing was deleted."""
        ...

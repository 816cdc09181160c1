"""Port interface for job lookup."""

from abc import ABC, abstractmethod

from jobweights.domain.entities.job import Job


class JobRepository(ABC):
    @abstractmethod
    async def save(self, job: Job) -> Job:
        ...

    @abstractmethod
    async def get_by_id(self, job_id: str) -> Job | None:
        ...

    @abstractmethod
    async def get_by_code(self, code: str) -> Job | None:
        """Case-insensitive lookup by job code."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Job]:
        ...

"""Port interface for the responsibilities registry."""

from abc import ABC, abstractmethod

from jobweights.domain.entities.responsibility import Responsibility


class ResponsibilityRepository(ABC):
    @abstractmethod
    async def save(self, responsibility: Responsibility) -> Responsibility:
        ...

    @abstractmethod
    async def get_by_id(self, responsibility_id: str) -> Responsibility | None:
        ...

    @abstractmethod
    async def get_by_code(self, code: str) -> Responsibility | None:
        """Case-insensitive lookup by responsibility code."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Responsibility]:
        ...

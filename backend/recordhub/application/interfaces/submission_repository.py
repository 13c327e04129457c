"""Abstract repository interface (port) for contact-form submissions."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from recordhub.domain.entities import Submission


class SubmissionRepository(ABC):
    """Port for submission storage — implemented in the infrastructure layer."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Hold the store's write lock for a read-check-write sequence."""
        ...

    @abstractmethod
    async def get_by_id(self, submission_id: int) -> Submission | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Submission]:
        ...

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Case-insensitive check against every stored submission."""
        ...

    @abstractmethod
    async def create(self, submission: Submission) -> Submission:
        ...

    @abstractmethod
    async def delete(self, submission_id: int) -> Submission | None:
        ...

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every submission and return how many were removed."""
        ...

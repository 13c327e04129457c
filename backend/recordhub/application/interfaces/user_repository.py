"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from recordhub.domain.entities import User


class UserRepository(ABC):
    """Port for registered-user storage — implemented in the infrastructure layer."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Hold the store's write lock for a read-check-write sequence."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[User]:
        """All users in registration order."""
        ...

    @abstractmethod
    async def get_recent(self, limit: int) -> list[User]:
        """The ``limit`` most recently registered users, newest first."""
        ...

    @abstractmethod
    async def email_exists(self, email: str, *, exclude_id: str | None = None) -> bool:
        """Case-insensitive check against every stored user except ``exclude_id``."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> User | None:
        ...

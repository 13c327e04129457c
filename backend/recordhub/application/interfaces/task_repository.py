"""Abstract repository interface (port) for Task persistence."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from recordhub.domain.entities import Task


class TaskRepository(ABC):
    """Port for task storage — implemented in the infrastructure layer.

    Returned tasks are copies; changing one has no effect until it is
    passed back to ``update``.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Hold the store's write lock for a read-check-write sequence."""
        ...

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Task | None:
        """Retrieve a single task by its id."""
        ...

    @abstractmethod
    async def get_all(self, *, completed: bool | None = None) -> list[Task]:
        """Retrieve tasks in insertion order, optionally by completion state."""
        ...

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Assign id and creation time, append the task and return it."""
        ...

    @abstractmethod
    async def update(self, task: Task) -> Task:
        """Replace the stored task with the same id."""
        ...

    @abstractmethod
    async def delete(self, task_id: int) -> Task | None:
        """Remove a task. Returns the removed task, or None if not found."""
        ...

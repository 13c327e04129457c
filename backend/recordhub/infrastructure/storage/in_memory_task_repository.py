"""In-process TaskRepository — the task list lives as long as the process."""

import itertools
import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import replace
from datetime import datetime, timezone

from recordhub.application.interfaces import TaskRepository
from recordhub.domain.entities import Task
from recordhub.infrastructure.storage.write_lock import WriteLock

logger = logging.getLogger(__name__)


class InMemoryTaskRepository(TaskRepository):
    """Implements the TaskRepository port with an insertion-ordered dict.

    Ids come from a counter starting at 1 and are never handed out twice,
    even after the task holding one is deleted.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._lock = WriteLock()

    def transaction(self) -> AbstractAsyncContextManager[None]:
        return self._lock.hold()

    async def get_by_id(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return replace(task) if task else None

    async def get_all(self, *, completed: bool | None = None) -> list[Task]:
        return [
            replace(task)
            for task in self._tasks.values()
            if completed is None or task.completed is completed
        ]

    async def create(self, task: Task) -> Task:
        async with self._lock.hold():
            stored = replace(task, id=next(self._ids), created_at=datetime.now(timezone.utc))
            self._tasks[stored.id] = stored
            logger.debug("Created task %d", stored.id)
            return replace(stored)

    async def update(self, task: Task) -> Task:
        async with self._lock.hold():
            current = self._tasks.get(task.id)
            if current is None:
                raise ValueError(f"Task {task.id} not found in store")
            stored = replace(task, created_at=current.created_at)
            self._tasks[stored.id] = stored
            return replace(stored)

    async def delete(self, task_id: int) -> Task | None:
        async with self._lock.hold():
            removed = self._tasks.pop(task_id, None)
            if removed is not None:
                logger.debug("Deleted task %d", task_id)
            return removed

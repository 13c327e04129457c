"""Application service (use case) for the task manager."""

import logging

from recordhub.application.interfaces import TaskRepository
from recordhub.application.schemas.task import TaskCreate, TaskUpdate
from recordhub.domain.entities import Task, TaskFilter
from recordhub.domain.exceptions import EntityNotFoundError, ValidationError
from recordhub.domain.validation import TASK_FIELDS, validate_field, validate_record

logger = logging.getLogger(__name__)


class TaskService:
    """Orchestrates task CRUD logic. Depends on the repository port (DI)."""

    def __init__(self, repository: TaskRepository):
        self._repository = repository

    async def get_task(self, task_id: int) -> Task:
        task = await self._repository.get_by_id(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        return task

    async def list_tasks(self, view: TaskFilter = TaskFilter.ALL) -> list[Task]:
        return await self._repository.get_all(completed=view.completed_flag())

    async def create_task(self, data: TaskCreate) -> Task:
        errors = validate_record({"title": data.title}, TASK_FIELDS)
        if errors:
            raise ValidationError(errors)
        task = Task(
            title=data.title.strip(),
            description=data.description,
            priority=data.priority,
            due_date=data.due_date,
            completed=data.completed,
        )
        created = await self._repository.create(task)
        logger.info("Task %d created: %s", created.id, created.title)
        return created

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        changes = data.model_dump(exclude_unset=True)
        if "title" in changes:
            message = validate_field("title", changes["title"])
            if message:
                raise ValidationError({"title": message})
            changes["title"] = changes["title"].strip()

        async with self._repository.transaction():
            task = await self.get_task(task_id)
            task.apply_patch(changes)
            return await self._repository.update(task)

    async def delete_task(self, task_id: int) -> Task:
        removed = await self._repository.delete(task_id)
        if removed is None:
            raise EntityNotFoundError("Task", task_id)
        logger.info("Task %d deleted", task_id)
        return removed

"""Pydantic DTOs for the task manager."""

from datetime import date, datetime

from pydantic import Field

from recordhub.application.schemas.base import CamelModel, RequestModel
from recordhub.domain.entities import TaskPriority


class TaskCreate(RequestModel):
    """Schema for creating a task.

    ``title`` is optional here so a missing title reaches the service and
    produces the task manager's own "Title is required" error.
    """

    title: str | None = Field(None, examples=["Buy milk"])
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    completed: bool = False


class TaskUpdate(RequestModel):
    """Partial update — only the keys present in the request are applied.

    Defaults are never applied; the service reads ``model_dump(exclude_unset=True)``.
    Only ``dueDate`` accepts an explicit null.
    """

    title: str = ""
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    completed: bool = False


class TaskResponse(CamelModel):
    """Schema returned to the client."""

    id: int
    title: str
    description: str
    priority: TaskPriority
    due_date: date | None
    completed: bool
    created_at: datetime

    model_config = {"from_attributes": True}

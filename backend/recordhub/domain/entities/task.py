"""Domain entity for to-do tasks."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class TaskPriority(str, Enum):
    """Priority levels offered by the task form."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskFilter(str, Enum):
    """List views of the task manager."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    def completed_flag(self) -> bool | None:
        """Map the view to the ``completed`` value it selects (None = every task)."""
        if self is TaskFilter.COMPLETED:
            return True
        if self is TaskFilter.PENDING:
            return False
        return None


@dataclass
class Task:
    """A single to-do item.

    ``id`` and ``created_at`` are assigned by the repository on insert and
    never change afterwards.
    """

    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    completed: bool = False
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    EDITABLE_FIELDS = frozenset({"title", "description", "priority", "due_date", "completed"})

    def apply_patch(self, changes: dict[str, Any]) -> None:
        """Overwrite only the fields present in ``changes``."""
        unknown = set(changes) - self.EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Task fields are not editable: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self, name, value)

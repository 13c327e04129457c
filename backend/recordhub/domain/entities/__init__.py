from .submission import Submission
from .task import Task, TaskFilter, TaskPriority
from .user import User, UserStats

__all__ = [
    "Submission",
    "Task",
    "TaskFilter",
    "TaskPriority",
    "User",
    "UserStats",
]

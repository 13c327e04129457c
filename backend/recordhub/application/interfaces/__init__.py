from .key_value_store import KeyValueStore
from .submission_repository import SubmissionRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "KeyValueStore",
    "SubmissionRepository",
    "TaskRepository",
    "UserRepository",
]

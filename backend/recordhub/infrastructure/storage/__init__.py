from .in_memory_submission_repository import InMemorySubmissionRepository
from .in_memory_task_repository import InMemoryTaskRepository
from .key_value_stores import InMemoryKeyValueStore, JsonFileKeyValueStore
from .key_value_user_repository import DEFAULT_STORAGE_KEY, KeyValueUserRepository
from .write_lock import WriteLock

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InMemoryKeyValueStore",
    "InMemorySubmissionRepository",
    "InMemoryTaskRepository",
    "JsonFileKeyValueStore",
    "KeyValueUserRepository",
    "WriteLock",
]

"""FastAPI dependency injection — wires infrastructure to application layer.

The stores are built once per application (``build_stores``) and kept on
``app.state``: every request must see the same collections and share the
same write locks.
"""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from fastapi import Depends, Request

from recordhub.config import Settings
from recordhub.application.interfaces import (
    KeyValueStore,
    SubmissionRepository,
    TaskRepository,
    UserRepository,
)
from recordhub.application.services import (
    FieldValidationService,
    SubmissionService,
    TaskService,
    UserService,
)
from recordhub.infrastructure.storage import (
    InMemoryKeyValueStore,
    InMemorySubmissionRepository,
    InMemoryTaskRepository,
    JsonFileKeyValueStore,
    KeyValueUserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """The application's record stores."""

    tasks: TaskRepository
    submissions: SubmissionRepository
    users: UserRepository


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """The persistence port behind the user collection."""
    if settings.user_storage_path.strip():
        logger.info("Persisting users to %s", settings.user_storage_path)
        return JsonFileKeyValueStore(settings.user_storage_path)
    logger.info("USER_STORAGE_PATH is not configured; users are kept in memory only.")
    return InMemoryKeyValueStore()


def build_stores(settings: Settings) -> Stores:
    return Stores(
        tasks=InMemoryTaskRepository(),
        submissions=InMemorySubmissionRepository(),
        users=KeyValueUserRepository(
            build_key_value_store(settings), key=settings.user_storage_key
        ),
    )


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


async def get_task_service(
    stores: Stores = Depends(get_stores),
) -> AsyncGenerator[TaskService, None]:
    """Provides a TaskService bound to the shared task store."""
    yield TaskService(stores.tasks)


async def get_submission_service(
    stores: Stores = Depends(get_stores),
) -> AsyncGenerator[SubmissionService, None]:
    """Provides a SubmissionService bound to the shared submission store."""
    yield SubmissionService(stores.submissions)


async def get_user_service(
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings_from_app),
) -> AsyncGenerator[UserService, None]:
    """Provides a UserService bound to the shared user store."""
    yield UserService(stores.users, hash_rounds=settings.password_hash_rounds)


async def get_field_validation_service(
    stores: Stores = Depends(get_stores),
) -> AsyncGenerator[FieldValidationService, None]:
    """Provides live field validation with access to registered emails."""
    yield FieldValidationService(stores.users)

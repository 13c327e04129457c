from .field_validation_service import FieldValidationService
from .submission_service import SubmissionService
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "FieldValidationService",
    "SubmissionService",
    "TaskService",
    "UserService",
]

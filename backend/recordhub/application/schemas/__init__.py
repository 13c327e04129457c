from .submission import (
    SubmissionAccepted,
    SubmissionCreate,
    SubmissionDeleted,
    SubmissionEnvelope,
    SubmissionList,
    SubmissionResponse,
    SubmissionsCleared,
    SubmissionSummary,
)
from .task import TaskCreate, TaskResponse, TaskUpdate
from .user import UserCreate, UserResponse, UserStatsResponse, UserUpdate
from .validation import FieldValidationRequest, FieldValidationResponse

__all__ = [
    "SubmissionAccepted",
    "SubmissionCreate",
    "SubmissionDeleted",
    "SubmissionEnvelope",
    "SubmissionList",
    "SubmissionResponse",
    "SubmissionsCleared",
    "SubmissionSummary",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "UserCreate",
    "UserResponse",
    "UserStatsResponse",
    "UserUpdate",
    "FieldValidationRequest",
    "FieldValidationResponse",
]

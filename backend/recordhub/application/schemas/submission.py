"""Pydantic DTOs for the contact-form submission API."""

from datetime import datetime
from typing import Any

from recordhub.application.schemas.base import CamelModel, RequestModel


class SubmissionCreate(RequestModel):
    """Contact form payload. Every field is checked by the validation rules."""

    full_name: Any = None
    email: Any = None
    phone: Any = None
    age: Any = None
    country: Any = None
    website: Any = None
    message: Any = None
    agreement: Any = None


class SubmissionResponse(CamelModel):
    """A stored submission."""

    id: int
    timestamp: datetime
    full_name: str
    email: str
    phone: str
    age: int
    country: str
    website: str | None
    message: str
    agreement: bool

    model_config = {"from_attributes": True}


class SubmissionSummary(CamelModel):
    """Human-readable echo of an accepted submission."""

    full_name: str
    email: str
    phone: str
    age: int
    country: str
    website: str
    message: str
    agreement: str


class SubmissionAccepted(CamelModel):
    success: bool = True
    message: str = "Form submitted successfully"
    data: SubmissionSummary
    record_id: int


class SubmissionList(CamelModel):
    count: int
    data: list[SubmissionResponse]


class SubmissionEnvelope(CamelModel):
    success: bool = True
    data: SubmissionResponse


class SubmissionDeleted(CamelModel):
    success: bool = True
    message: str = "Record deleted"
    data: SubmissionResponse


class SubmissionsCleared(CamelModel):
    success: bool = True
    message: str
    count: int

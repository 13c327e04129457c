"""Pydantic DTOs for live single-field validation."""

from typing import Any

from pydantic import Field

from recordhub.application.schemas.base import CamelModel, RequestModel
from recordhub.domain.validation import PasswordStrength


class FieldValidationRequest(RequestModel):
    """One field as the user is typing it, plus any sibling values it depends on."""

    field: str = Field(..., min_length=1, examples=["password"])
    value: Any = None
    context: dict[str, Any] = Field(default_factory=dict)
    exclude_user_id: str | None = None


class FieldValidationResponse(CamelModel):
    field: str
    valid: bool
    error: str | None = None
    strength: PasswordStrength | None = None

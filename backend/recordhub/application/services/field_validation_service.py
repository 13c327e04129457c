"""Live single-field validation for forms that check input as it is typed."""

from recordhub.application.interfaces import UserRepository
from recordhub.application.schemas.validation import FieldValidationRequest, FieldValidationResponse
from recordhub.domain.exceptions import ValidationError
from recordhub.domain.validation import (
    FieldContext,
    is_known_field,
    password_strength,
    validate_field,
)


class FieldValidationService:
    """Runs one registered rule; email values are also checked against registered users."""

    def __init__(self, user_repository: UserRepository):
        self._users = user_repository

    async def check(self, request: FieldValidationRequest) -> FieldValidationResponse:
        if not is_known_field(request.field):
            raise ValidationError({"field": f"Unknown field '{request.field}'"})

        email_taken = False
        if request.field == "email" and isinstance(request.value, str) and request.value.strip():
            email_taken = await self._users.email_exists(
                request.value, exclude_id=request.exclude_user_id
            )

        context = FieldContext(values=request.context, email_taken=email_taken)
        error = validate_field(request.field, request.value, context=context)

        strength = None
        if request.field == "password" and isinstance(request.value, str):
            strength = password_strength(request.value)

        return FieldValidationResponse(
            field=request.field,
            valid=error is None,
            error=error,
            strength=strength,
        )

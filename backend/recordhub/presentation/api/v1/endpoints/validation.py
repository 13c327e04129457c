"""Single-field validation endpoint used while the user types."""

from fastapi import APIRouter, Depends

from recordhub.application.schemas.validation import FieldValidationRequest, FieldValidationResponse
from recordhub.application.services import FieldValidationService
from recordhub.infrastructure.dependencies import get_field_validation_service

router = APIRouter(prefix="/validation", tags=["Validation"])


@router.post("/field", response_model=FieldValidationResponse)
async def validate_field(
    request: FieldValidationRequest,
    service: FieldValidationService = Depends(get_field_validation_service),
) -> FieldValidationResponse:
    """Check one field with the same rule the full submission uses."""
    return await service.check(request)

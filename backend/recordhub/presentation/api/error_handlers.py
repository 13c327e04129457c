"""Error handlers — global exception handlers for the RecordHub API.

    - ValidationError / RequestValidationError → 400 with a field → message map
    - EntityNotFoundError → 404
    - StorageError → 503, safe to retry
    - Exception (catch-all) → 500, details only in development
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recordhub.domain.exceptions import EntityNotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)
    app.add_exception_handler(EntityNotFoundError, _not_found_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(Exception, _generic_error_handler)


def validation_failed_response(errors: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": VALIDATION_FAILED, "errors": errors},
    )


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Validation failed on %s: %s", request.url.path, ", ".join(exc.errors))
    return validation_failed_response(exc.errors)


async def _request_validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed bodies (unknown keys, wrong types) use the same shape as rule failures."""
    logger.warning("Malformed request on %s: %s", request.url.path, exc.errors())
    return validation_failed_response(_field_errors(exc))


async def _not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": f"{exc.entity_type} not found"},
    )


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": False, "message": "Error saving data. Please try again."},
    )


async def _generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all — internal details only leave the process in development."""
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    content: dict[str, object] = {"success": False, "message": "Internal server error"}
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.app_env == "development":
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"]]
        if len(location) > 1 and location[0] in ("body", "query", "path"):
            location = location[1:]
        field = ".".join(location)
        message = "Unknown field" if error["type"] == "extra_forbidden" else error["msg"]
        errors.setdefault(field, message)
    return errors

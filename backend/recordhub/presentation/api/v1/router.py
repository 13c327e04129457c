"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from recordhub.presentation.api.v1.endpoints.health import router as health_router
from recordhub.presentation.api.v1.endpoints.users import router as users_router
from recordhub.presentation.api.v1.endpoints.validation import router as validation_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(users_router)
router.include_router(validation_router)

"""Top-level API routers.

``/api`` carries the versioned sub-routers plus the submission endpoints,
which keep their unversioned paths. The task manager lives at ``/tasks``.
"""

from fastapi import APIRouter

from recordhub.presentation.api.endpoints.submissions import router as submissions_router
from recordhub.presentation.api.endpoints.tasks import router as tasks_router
from recordhub.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
router.include_router(submissions_router)

__all__ = ["router", "tasks_router"]

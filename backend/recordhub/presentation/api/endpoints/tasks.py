"""Task manager endpoints.

Served at ``/tasks`` with the task manager's own error bodies
(``{"error": "..."}``) so the existing browser client keeps working.
"""

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from recordhub.application.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from recordhub.application.services import TaskService
from recordhub.domain.entities import TaskFilter
from recordhub.domain.exceptions import EntityNotFoundError, ValidationError
from recordhub.infrastructure.dependencies import get_task_service

TASK_NOT_FOUND = "Task not found"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _malformed_request(exc: RequestValidationError) -> JSONResponse:
    """A task id that is not an integer names no task; anything else is a bad request."""
    errors = exc.errors()
    if any(error["loc"][0] == "path" for error in errors):
        return _error(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    error = errors[0]
    field = str(error["loc"][-1])
    if error["type"] == "extra_forbidden":
        return _error(status.HTTP_400_BAD_REQUEST, f"Unknown field '{field}'")
    return _error(status.HTTP_400_BAD_REQUEST, f"Invalid {field}: {error['msg']}")


class TaskRoute(APIRoute):
    """Route that answers malformed requests with the task manager's error body."""

    def get_route_handler(self) -> Callable[[Request], Awaitable[Response]]:
        handler = super().get_route_handler()

        async def task_route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as exc:
                return _malformed_request(exc)

        return task_route_handler


router = APIRouter(prefix="/tasks", tags=["Tasks"], route_class=TaskRoute)


def _first_error(exc: ValidationError) -> str:
    return next(iter(exc.errors.values()))


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    view: TaskFilter = Query(TaskFilter.ALL, alias="filter", description="all, completed or pending"),
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """List tasks in creation order."""
    tasks = await service.list_tasks(view)
    return [TaskResponse.model_validate(t, from_attributes=True) for t in tasks]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse | JSONResponse:
    """Create a task; title is required, everything else has a default."""
    try:
        task = await service.create_task(data)
    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, _first_error(e))
    return TaskResponse.model_validate(task, from_attributes=True)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse | JSONResponse:
    try:
        task = await service.get_task(task_id)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    return TaskResponse.model_validate(task, from_attributes=True)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse | JSONResponse:
    """Apply a partial update; fields missing from the body keep their values."""
    try:
        task = await service.update_task(task_id, data)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, _first_error(e))
    return TaskResponse.model_validate(task, from_attributes=True)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> Response:
    try:
        await service.delete_task(task_id)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, TASK_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

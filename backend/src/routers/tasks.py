"""
Task routes.

The router carries no prefix of its own; the application mounts it at both
``/api/tasks`` and ``/tasks``. Bodies arrive after the task-owner
middleware has copied ``email`` into ``userId``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from backend.src.controllers import task_controller
from backend.src.dependencies import PaginationParams, get_task_repository
from backend.src.models.common import ErrorResponse
from backend.src.models.task import TaskCreate, TaskResponse, TaskStatus, TaskUpdate
from backend.src.repositories.task_repo import TaskRepository
from backend.src.routers.guard import route_guard

router = APIRouter(
    tags=["Tasks"],
    responses={
        404: {"model": ErrorResponse, "description": "Not Found"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"}
    }
)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED, summary="Create Task")
@route_guard("Failed to create task.")
async def create_task(
    payload: TaskCreate,
    task_repo: TaskRepository = Depends(get_task_repository)
) -> TaskResponse:
    return await task_controller.create_task(payload, task_repo)


@router.get("", response_model=List[TaskResponse], summary="List Tasks")
@route_guard("Failed to retrieve tasks.")
async def list_tasks(
    user_id: Optional[str] = Query(None, alias="userId"),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    pagination: PaginationParams = Depends(),
    task_repo: TaskRepository = Depends(get_task_repository)
) -> List[TaskResponse]:
    return await task_controller.list_tasks(
        task_repo,
        user_id=user_id,
        status=task_status,
        limit=pagination.limit,
        offset=pagination.offset
    )


@router.get("/{task_id}", response_model=TaskResponse, summary="Get Task")
@route_guard("Failed to retrieve task.")
async def get_task(
    task_id: str,
    task_repo: TaskRepository = Depends(get_task_repository)
) -> TaskResponse:
    return await task_controller.get_task(task_id, task_repo)


@router.put("/{task_id}", response_model=TaskResponse, summary="Update Task")
@route_guard("Failed to update task.")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    task_repo: TaskRepository = Depends(get_task_repository)
) -> TaskResponse:
    return await task_controller.update_task(task_id, payload, task_repo)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Task"
)
@route_guard("Failed to delete task.")
async def delete_task(
    task_id: str,
    task_repo: TaskRepository = Depends(get_task_repository)
) -> None:
    await task_controller.delete_task(task_id, task_repo)

"""
Task operations on the raw database handle.

``userId`` has already been derived from ``email`` by the task-owner
middleware when the client sent one; it is stored exactly as received.
"""

from typing import List, Optional

from backend.src.errors import ResourceNotFoundError
from backend.src.models.task import TaskCreate, TaskResponse, TaskStatus, TaskUpdate
from backend.src.repositories.task_repo import TaskRepository


async def create_task(payload: TaskCreate, task_repo: TaskRepository) -> TaskResponse:
    task = await task_repo.create_task(payload.to_document())
    return TaskResponse.model_validate(task)


async def list_tasks(
    task_repo: TaskRepository,
    user_id: Optional[str] = None,
    status: Optional[TaskStatus] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[TaskResponse]:
    tasks = await task_repo.list_tasks(
        user_id=user_id,
        status=status.value if status else None,
        limit=limit,
        offset=offset,
    )
    return [TaskResponse.model_validate(task) for task in tasks]


async def get_task(task_id: str, task_repo: TaskRepository) -> TaskResponse:
    task = await task_repo.get_task(task_id)
    if task is None:
        raise ResourceNotFoundError("Task not found.")
    return TaskResponse.model_validate(task)


async def update_task(task_id: str, payload: TaskUpdate, task_repo: TaskRepository) -> TaskResponse:
    task = await task_repo.update_task(task_id, payload.to_changes())
    if task is None:
        raise ResourceNotFoundError("Task not found.")
    return TaskResponse.model_validate(task)


async def delete_task(task_id: str, task_repo: TaskRepository) -> None:
    if not await task_repo.delete_task(task_id):
        raise ResourceNotFoundError("Task not found.")

"""Analytics routes (mounted at ``/api/analytics``). Read-only."""

from typing import List

from fastapi import APIRouter, Depends

from backend.src.controllers import analytics_controller
from backend.src.dependencies import (
    get_agent_repository,
    get_task_repository,
    get_user_repository,
)
from backend.src.models.analytics import AnalyticsSummary, TaskStatusCount
from backend.src.models.common import ErrorResponse
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.repositories.task_repo import TaskRepository
from backend.src.repositories.user_repo import UserRepository
from backend.src.routers.guard import route_guard

router = APIRouter(
    prefix="/api/analytics",
    tags=["Analytics"],
    responses={500: {"model": ErrorResponse, "description": "Unexpected failure"}}
)


@router.get("/summary", response_model=AnalyticsSummary, summary="Platform Summary")
@route_guard("Failed to retrieve analytics.")
async def get_summary(
    agent_repo: AgentRepository = Depends(get_agent_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    task_repo: TaskRepository = Depends(get_task_repository)
) -> AnalyticsSummary:
    return await analytics_controller.get_summary(agent_repo, user_repo, task_repo)


@router.get("/tasks", response_model=List[TaskStatusCount], summary="Tasks by Status")
@route_guard("Failed to retrieve task analytics.")
async def get_task_status_counts(
    task_repo: TaskRepository = Depends(get_task_repository)
) -> List[TaskStatusCount]:
    return await analytics_controller.get_task_status_counts(task_repo)

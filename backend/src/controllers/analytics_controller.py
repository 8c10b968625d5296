"""Read-only platform analytics."""

from typing import List

from backend.src.models.analytics import AnalyticsSummary, TaskStatusCount
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.repositories.task_repo import TaskRepository
from backend.src.repositories.user_repo import UserRepository


async def get_summary(
    agent_repo: AgentRepository,
    user_repo: UserRepository,
    task_repo: TaskRepository,
) -> AnalyticsSummary:
    return AnalyticsSummary(
        agents=await agent_repo.count_agents(),
        verified_agents=await agent_repo.count_agents(verified=True),
        users=await user_repo.count_users(),
        tasks=await task_repo.count_tasks(),
        tasks_by_status=await task_repo.count_by_status(),
    )


async def get_task_status_counts(task_repo: TaskRepository) -> List[TaskStatusCount]:
    counts = await task_repo.count_by_status()
    return [TaskStatusCount(status=status, count=count) for status, count in counts.items()]

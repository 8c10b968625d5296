"""Read-only analytics aggregates."""

from typing import Dict

from pydantic import BaseModel, Field


class AnalyticsSummary(BaseModel):
    agents: int = Field(..., ge=0)
    verified_agents: int = Field(..., ge=0)
    users: int = Field(..., ge=0)
    tasks: int = Field(..., ge=0)
    tasks_by_status: Dict[str, int] = Field(default_factory=dict)


class TaskStatusCount(BaseModel):
    status: str
    count: int = Field(..., ge=0)

"""
Task (errand) models.

Tasks are keyed by ``userId``, the owner identifier. Clients normally send
``email`` and the task-owner middleware copies it into ``userId`` before
validation, so the owner identifier is whatever string was submitted.
JSON field names are camelCase and match the stored documents.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskCreate(BaseModel):
    """Create task request schema. Unknown fields (e.g. ``email``) are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="userId", min_length=1, description="Owner identifier")
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    status: TaskStatus = TaskStatus.PENDING
    agent_id: Optional[str] = Field(None, alias="agentId")
    location: Optional[str] = Field(None, max_length=300, description="Where the errand happens")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class TaskUpdate(BaseModel):
    """Partial update; only fields that are set are written."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    status: Optional[TaskStatus] = None
    agent_id: Optional[str] = Field(None, alias="agentId")
    location: Optional[str] = Field(None, max_length=300)

    @field_validator("title", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    def to_changes(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    title: str
    description: Optional[str] = None
    status: TaskStatus
    agent_id: Optional[str] = Field(None, alias="agentId")
    location: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

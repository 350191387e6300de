"""Schemas for task endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummaryRead

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    due_date: datetime | None = None
    project_id: int | None = None
    assignee_ids: list[int] = Field(default_factory=list)
    position: int = Field(default=0, ge=0)


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    project_id: int | None = None
    assignee_ids: list[int] | None = None
    position: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class TaskReorderItem(BaseModel):
    id: int
    position: int = Field(..., ge=0)
    status: TaskStatus | None = None


class TaskReorderRequest(BaseModel):
    tasks: list[TaskReorderItem] = Field(..., min_length=1)


class ProjectSummaryRead(BaseModel):
    id: int
    name: str
    color: str


class TaskRead(BaseModel):
    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    position: int
    project_id: int | None
    project: ProjectSummaryRead | None
    user: UserSummaryRead | None
    assignees: list[UserSummaryRead]
    created_at: datetime | None
    updated_at: datetime | None


class TaskStatisticsRead(BaseModel):
    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]

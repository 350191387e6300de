"""Schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .task import TaskRead
from .user import UserSummaryRead


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    color: str | None = Field(default=None, description="One of the palette colors")


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    color: str | None = None
    is_archived: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ProjectMemberAdd(BaseModel):
    user_id: int = Field(..., ge=1)


class ProjectRead(BaseModel):
    id: int
    name: str
    description: str | None
    color: str
    owner: UserSummaryRead | None
    members: list[UserSummaryRead]
    is_archived: bool
    created_at: datetime | None
    updated_at: datetime | None


class ProjectDetailRead(BaseModel):
    project: ProjectRead
    tasks: list[TaskRead]


class ProjectStatisticsRead(BaseModel):
    total: int
    by_status: dict[str, int]

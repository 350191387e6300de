"""Schemas for comment endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from .user import UserSummaryRead


class CommentCreate(BaseModel):
    task_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentRead(BaseModel):
    id: int
    content: str
    task_id: int
    user: UserSummaryRead | None
    is_edited: bool
    created_at: datetime | None
    updated_at: datetime | None

"""Domain entity representing a comment on a task."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Free text left by a user on a task."""

    id: int | None
    content: str
    task_id: int
    user_id: int
    is_edited: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Comment"]

"""Domain entity representing a task."""

from dataclasses import dataclass, field
from datetime import datetime

TASK_STATUS_PENDING = "pending"
TASK_STATUS_IN_PROGRESS = "in-progress"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUSES: tuple[str, ...] = (
    TASK_STATUS_PENDING,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_COMPLETED,
)

TASK_PRIORITY_LOW = "low"
TASK_PRIORITY_MEDIUM = "medium"
TASK_PRIORITY_HIGH = "high"
TASK_PRIORITIES: tuple[str, ...] = (
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_MEDIUM,
    TASK_PRIORITY_HIGH,
)


@dataclass
class Task:
    """A unit of work created by a user, optionally inside a project."""

    id: int | None
    title: str
    description: str | None
    status: str
    priority: str
    user_id: int
    project_id: int | None = None
    assignee_ids: list[int] = field(default_factory=list)
    due_date: datetime | None = None
    position: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def participant_ids(self) -> set[int]:
        """Return the creator and every assignee."""

        return {self.user_id, *self.assignee_ids}

    @property
    def is_completed(self) -> bool:
        return self.status == TASK_STATUS_COMPLETED


__all__ = [
    "Task",
    "TASK_STATUSES",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
    "TASK_PRIORITIES",
    "TASK_PRIORITY_LOW",
    "TASK_PRIORITY_MEDIUM",
    "TASK_PRIORITY_HIGH",
]

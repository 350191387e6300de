"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Closed set of notification kinds."""

    TASK_ASSIGNED = "task_assigned"
    TASK_UPDATED = "task_updated"
    COMMENT_ADDED = "comment_added"
    PROJECT_ADDED = "project_added"
    TASK_COMPLETED = "task_completed"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    recipient_id: int
    event_type: NotificationType
    title: str
    message: str
    sender_id: int | None = None
    related_task_id: int | None = None
    related_project_id: int | None = None
    is_read: bool = False
    link: str | None = None
    created_at: datetime | None = None


@dataclass
class NotificationView:
    """A notification with the display fields clients need to render it.

    ``sender``, ``related_task`` and ``related_project`` hold small summary
    dictionaries so no follow-up fetch is required.
    """

    notification: Notification
    sender: dict[str, Any] | None = None
    related_task: dict[str, Any] | None = None
    related_project: dict[str, Any] | None = None

    @property
    def id(self) -> int | None:
        return self.notification.id


__all__ = ["Notification", "NotificationType", "NotificationView"]

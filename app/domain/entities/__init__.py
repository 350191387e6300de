"""Domain entities exposed by the application."""

from .comment import Comment
from .notification import Notification, NotificationType, NotificationView
from .project import DEFAULT_PROJECT_COLOR, PROJECT_COLORS, Project
from .task import (
    TASK_PRIORITIES,
    TASK_PRIORITY_HIGH,
    TASK_PRIORITY_LOW,
    TASK_PRIORITY_MEDIUM,
    TASK_STATUSES,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_PENDING,
    Task,
)
from .user import User

__all__ = [
    "Comment",
    "Notification",
    "NotificationType",
    "NotificationView",
    "Project",
    "PROJECT_COLORS",
    "DEFAULT_PROJECT_COLOR",
    "Task",
    "TASK_STATUSES",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
    "TASK_PRIORITIES",
    "TASK_PRIORITY_LOW",
    "TASK_PRIORITY_MEDIUM",
    "TASK_PRIORITY_HIGH",
    "User",
]

"""Public helpers for emitting domain notifications and managing the inbox."""

from .emitter import emit_notification
from .events import (
    notify_new_comment,
    notify_project_member_added,
    notify_task_assignment,
    notify_task_completed,
    notify_task_update,
    resolve_recipients,
)
from .inbox import (
    clear_read_notifications,
    delete_notification,
    list_notifications,
    list_unread_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
)

__all__ = [
    "emit_notification",
    "notify_new_comment",
    "notify_project_member_added",
    "notify_task_assignment",
    "notify_task_completed",
    "notify_task_update",
    "resolve_recipients",
    "clear_read_notifications",
    "delete_notification",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
]

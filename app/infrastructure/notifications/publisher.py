"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import NotificationView

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification:new"


class NotificationPublisher:
    """Serialize notifications and schedule their delivery to the recipient."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[None]] = set()

    def dispatch(self, view: NotificationView) -> None:
        """Schedule ``view`` for delivery to the recipient's registered sockets.

        Raises ``RuntimeError`` when called from a thread that has no event loop
        and is not an AnyIO worker thread; callers treat that as a failed
        broadcast.
        """

        message = build_envelope(view)
        recipient_id = view.notification.recipient_id
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.send_to_user, recipient_id, message)
        else:
            task = loop.create_task(self._deliver(recipient_id, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _deliver(self, recipient_id: int, message: dict[str, Any]) -> None:
        try:
            await self._manager.send_to_user(recipient_id, message)
        except Exception:
            logger.exception("Failed to deliver notification to user %s", recipient_id)


def build_envelope(view: NotificationView) -> dict[str, Any]:
    """Return the ``notification:new`` message addressed to the recipient."""

    return {
        "type": NOTIFICATION_EVENT,
        "data": {
            "recipient_id": view.notification.recipient_id,
            "notification": serialize_notification(view),
        },
    }


def serialize_notification(view: NotificationView) -> dict[str, Any]:
    """Return the JSON representation shared by REST and websocket payloads."""

    notification = view.notification
    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "sender_id": notification.sender_id,
        "sender": view.sender,
        "event_type": notification.event_type.value,
        "title": notification.title,
        "message": notification.message,
        "related_task_id": notification.related_task_id,
        "related_task": view.related_task,
        "related_project_id": notification.related_project_id,
        "related_project": view.related_project,
        "is_read": notification.is_read,
        "link": notification.link,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(view: NotificationView) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(view)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "build_envelope",
    "serialize_notification",
]

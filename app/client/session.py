"""Tie the client caches to one realtime connection at a time."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Mapping

from .caches import CommentCache, NotificationCache, TaskCache

logger = logging.getLogger(__name__)

Listener = Callable[[Mapping[str, Any]], Any]


class RealtimeConnection(ABC):
    """Minimal listener bookkeeping shared by concrete transports.

    Transports call :meth:`deliver` for every inbound message and implement
    :meth:`send`.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def deliver(self, message: Mapping[str, Any]) -> None:
        for listener in list(self._listeners):
            listener(message)

    @abstractmethod
    def send(self, message: Mapping[str, Any]) -> None:
        """Write one outbound message to the server."""


class RealtimeSession:
    """Routes realtime messages for one signed-in user to their caches."""

    def __init__(self, user_id: int, *, project_id: int | None = None) -> None:
        self.user_id = user_id
        self.tasks = TaskCache(project_id)
        self.notifications = NotificationCache(user_id)
        self.comments: CommentCache | None = None
        self._connection: RealtimeConnection | None = None
        self._listener: Listener | None = None

    @property
    def connection(self) -> RealtimeConnection | None:
        return self._connection

    def attach(self, connection: RealtimeConnection) -> None:
        """Listen on ``connection`` instead of the previous one and register.

        The old listener is always removed first, so a reconnect never leaves
        two handlers applying the same message.
        """

        self.detach()
        listener = self.handle
        connection.add_listener(listener)
        self._connection = connection
        self._listener = listener
        connection.send({"type": "register", "data": {"user_id": self.user_id}})

    def detach(self) -> None:
        if self._connection is not None and self._listener is not None:
            self._connection.remove_listener(self._listener)
        self._connection = None
        self._listener = None

    def open_task(self, task_id: int, comments: list[Mapping[str, Any]]) -> CommentCache:
        """Switch the comment cache to ``task_id`` with its fetched comments."""

        cache = CommentCache(task_id)
        cache.load(comments)
        self.comments = cache
        return cache

    def close_task(self) -> None:
        self.comments = None

    def handle(self, message: Mapping[str, Any]) -> bool:
        """Apply one inbound message; return whether any cache changed."""

        event_type = message.get("type")
        if not isinstance(event_type, str):
            return False
        if event_type == "notification:new":
            return self.notifications.dispatch(message)
        if event_type == "init":
            return self._apply_init(message.get("data"))
        if event_type.startswith("task:"):
            return self.tasks.dispatch(message)
        if event_type.startswith("comment:"):
            return self.comments.dispatch(message) if self.comments else False
        return False

    def _apply_init(self, notifications: Any) -> bool:
        if not isinstance(notifications, list):
            return False
        applied = False
        for notification in reversed(notifications):
            envelope = {"recipient_id": self.user_id, "notification": notification}
            if self.notifications.dispatch({"type": "notification:new", "data": envelope}):
                applied = True
        return applied

    def emit(self, event_type: str, data: Any) -> None:
        """Send an optimistic domain event; failures are logged and ignored."""

        if self._connection is None:
            return
        try:
            self._connection.send({"type": event_type, "data": data})
        except Exception:
            logger.warning("Could not broadcast %s", event_type, exc_info=True)

    def reset(self) -> None:
        """Sign-out: stop listening and forget all cached state."""

        self.detach()
        self.tasks.reset()
        self.notifications.reset()
        self.comments = None


__all__ = ["RealtimeConnection", "RealtimeSession"]

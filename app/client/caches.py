"""Client-side caches for tasks, comments and notifications.

A cache starts uninitialized and ignores realtime messages until ``load``
hands it the result of a full fetch. From then on each message is folded in
through :mod:`app.client.reducers`, either synchronously with ``dispatch`` or
through the cache's own queue with ``publish`` and ``run``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from . import reducers
from .reducers import CacheState

logger = logging.getLogger(__name__)


class EntityCache:
    """Base cache driven by ``{"type": ..., "data": ...}`` messages."""

    entity = ""
    scope_field: str | None = None

    def __init__(self, *, scope_value: Any = None, user_id: Any = None) -> None:
        self.scope_value = scope_value
        self.user_id = user_id
        self._state: CacheState | None = None
        self._queue: asyncio.Queue[Mapping[str, Any]] = asyncio.Queue()

    @property
    def is_live(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> CacheState:
        return self._state if self._state is not None else CacheState()

    @property
    def items(self) -> list[dict[str, Any]]:
        return [dict(item) for item in self.state.items]

    def load(self, records: list[Mapping[str, Any]], **kwargs: Any) -> None:
        """Replace the contents with a full fetch and start accepting messages."""

        self._state = reducers.initial_state(list(records), **kwargs)

    def dispatch(self, message: Mapping[str, Any]) -> bool:
        """Apply ``message`` now; return whether the cache changed."""

        if self._state is None:
            logger.debug("Dropping %s before the initial fetch", message.get("type"))
            return False
        self._state, applied = reducers.apply_event(
            self._state,
            message,
            entity=self.entity,
            scope_field=self.scope_field,
            scope_value=self.scope_value,
            user_id=self.user_id,
        )
        return applied

    def publish(self, message: Mapping[str, Any]) -> None:
        """Queue ``message`` for the consumer started with :meth:`run`."""

        self._queue.put_nowait(message)

    async def run(self) -> None:
        """Consume queued messages one at a time until cancelled."""

        while True:
            message = await self._queue.get()
            try:
                self.dispatch(message)
            except Exception:
                logger.exception("Failed to apply %s", message.get("type"))
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait until every published message has been applied."""

        await self._queue.join()

    def reset(self) -> None:
        """Forget everything, including which ids were applied."""

        self._state = None


class TaskCache(EntityCache):
    """Tasks on the board, optionally limited to one project."""

    entity = "task"
    scope_field = "project_id"

    def __init__(self, project_id: int | None = None) -> None:
        super().__init__(scope_value=project_id)


class CommentCache(EntityCache):
    """Comments of the task currently open."""

    entity = "comment"
    scope_field = "task_id"

    def __init__(self, task_id: int) -> None:
        super().__init__(scope_value=task_id)

    @property
    def task_id(self) -> int:
        return self.scope_value


class NotificationCache(EntityCache):
    """The current user's inbox and unread counter."""

    entity = "notification"

    def __init__(self, user_id: int) -> None:
        super().__init__(user_id=user_id)

    @property
    def unread_count(self) -> int:
        return self.state.unread_count

    def load(self, records: list[Mapping[str, Any]], unread_count: int | None = None) -> None:
        super().load(records, unread_count=unread_count)

    def _update(self, state: CacheState) -> None:
        if self._state is not None:
            self._state = state

    def mark_read(self, notification_id: int) -> None:
        self._update(reducers.mark_read(self.state, notification_id))

    def mark_all_read(self) -> None:
        self._update(reducers.mark_all_read(self.state))

    def remove(self, notification_id: int) -> None:
        self._update(reducers.remove(self.state, notification_id))

    def clear_read(self) -> None:
        self._update(reducers.clear_read(self.state))


__all__ = ["CommentCache", "EntityCache", "NotificationCache", "TaskCache"]
